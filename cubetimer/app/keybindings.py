from __future__ import annotations

"""Key name -> session intent dispatch for terminal and GUI front ends."""

from typing import Any, Dict, Optional

from .session import TimerSession

ALIASES = {" ": "space", "\n": "enter", "\r": "enter", "\x1b": "escape", "esc": "escape", "return": "enter"}


def normalize_key(key: str) -> str:
    if key in ALIASES:
        return ALIASES[key]
    k = key.strip().lower()
    if not k:
        return key
    return ALIASES.get(k, k)


def build_keymap(keys_cfg: Dict[str, Any]) -> Dict[str, str]:
    """Map key names to action ids from the validated ``keys`` config section."""
    keymap: Dict[str, str] = {}
    for step, key in keys_cfg.get("steps", {}).items():
        keymap[str(key)] = f"step:{step}"
    keymap[keys_cfg.get("reset", "escape")] = "reset"
    keymap[keys_cfg.get("step", "enter")] = "advance"
    keymap[keys_cfg.get("solve", "space")] = "solve"
    return keymap


def dispatch_key(session: TimerSession, keymap: Dict[str, str], key: str) -> Optional[str]:
    """Run the intent bound to ``key``. Returns the action id, or None if unbound."""
    action = keymap.get(normalize_key(key))
    if action is None:
        return None
    if action == "solve":
        session.toggle_solve()
    elif action == "advance":
        session.advance_step()
    elif action == "reset":
        session.reset_active()
    elif action.startswith("step:"):
        session.toggle_individual_step(action.split(":", 1)[1])
    return action
