from __future__ import annotations

"""Configuration loading and validation for cubetimer.

This module loads YAML configuration, applies defaults, and validates
key bindings, the display tick interval and the storage location.
"""

from pathlib import Path
from typing import Any, Dict, Optional

import sys

import yaml

from ..results.schema import CFOP_STEPS

ALLOWED_BACKENDS = {"json", "memory"}
DEFAULT_STEP_KEYS = {"Cross": "c", "F2L": "f", "OLL": "o", "PLL": "p"}
MIN_TICK_MS = 1
MAX_TICK_MS = 1000


def _load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except FileNotFoundError:
        print(f"ERROR: Config file not found: {path}", file=sys.stderr)
        sys.exit(1)
    except yaml.YAMLError as exc:
        print(f"ERROR: Config file is not valid YAML: {path} ({exc})", file=sys.stderr)
        sys.exit(1)


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from YAML or defaults.

    Args:
        path: Optional path to a YAML config. If None, use package defaults.

    Returns:
        A dictionary with configuration values.
    """
    if path:
        cfg = _load_yaml(Path(path))
    else:
        default_path = Path(__file__).with_name("defaults.yml")
        cfg = _load_yaml(default_path)
    return cfg


def validate_config(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Apply defaults and validate configuration values.

    Unsupported values fall back to defaults with a warning; nothing here is
    fatal once the file has been read.

    Args:
        cfg: The raw configuration dictionary.

    Returns:
        The validated and merged configuration dictionary.
    """
    cfg.setdefault("storage", {})
    cfg.setdefault("display", {})
    cfg.setdefault("keys", {})
    cfg.setdefault("scramble", {})

    storage = cfg["storage"]
    display = cfg["display"]
    keys = cfg["keys"]
    scramble = cfg["scramble"]

    storage.setdefault("backend", "json")
    storage.setdefault("data_dir", "~/.cubetimer")

    display.setdefault("tick_interval_ms", 16)

    keys.setdefault("solve", "space")
    keys.setdefault("step", "enter")
    keys.setdefault("reset", "escape")
    keys.setdefault("steps", dict(DEFAULT_STEP_KEYS))

    scramble.setdefault("seed", None)
    scramble.setdefault("auto_new_after_solve", True)

    backend = storage.get("backend")
    if backend not in ALLOWED_BACKENDS:
        print(f"WARNING: Unsupported storage backend '{backend}', using 'json'.")
        storage["backend"] = "json"
    storage["data_dir"] = str(Path(str(storage["data_dir"])).expanduser())

    try:
        tick = int(display.get("tick_interval_ms"))
    except (TypeError, ValueError):
        tick = -1
    if not (MIN_TICK_MS <= tick <= MAX_TICK_MS):
        print(f"WARNING: Unsupported tick_interval_ms '{display.get('tick_interval_ms')}', using 16.")
        tick = 16
    display["tick_interval_ms"] = tick

    step_keys = keys.get("steps")
    if not isinstance(step_keys, dict):
        print("WARNING: keys.steps must be a mapping of step name to key, using defaults.")
        step_keys = dict(DEFAULT_STEP_KEYS)
    for name in list(step_keys):
        if name not in CFOP_STEPS:
            print(f"WARNING: Unknown step '{name}' in keys.steps, ignoring.")
            step_keys.pop(name)
    for name, default_key in DEFAULT_STEP_KEYS.items():
        step_keys.setdefault(name, default_key)
    keys["steps"] = {name: str(k).lower() for name, k in step_keys.items()}
    for action in ("solve", "step", "reset"):
        keys[action] = str(keys[action]).lower()

    bound = [keys["solve"], keys["step"], keys["reset"], *keys["steps"].values()]
    if len(set(bound)) != len(bound):
        print("WARNING: Duplicate key bindings found; later bindings shadow earlier ones.")

    seed = scramble.get("seed")
    if seed is not None:
        try:
            scramble["seed"] = int(seed)
        except (TypeError, ValueError):
            print(f"WARNING: Unsupported scramble seed '{seed}', ignoring.")
            scramble["seed"] = None

    return cfg
