from __future__ import annotations

"""Seeding for scramble generation.

A seed comes from the ``scramble.seed`` config value or, failing that, the
``SEED`` environment variable. Without either, scrambles are unseeded.
"""

import os
import random
from typing import Optional

import numpy as np


def env_seed() -> Optional[int]:
    raw = os.environ.get("SEED")
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def seed_if_needed() -> None:
    """Seed the global RNGs if SEED env var is set."""
    s = env_seed()
    if s is not None:
        random.seed(s)
        np.random.seed(s)


def resolve_seed(config_seed: Optional[int]) -> Optional[int]:
    return config_seed if config_seed is not None else env_seed()


def make_rng(seed: Optional[int] = None) -> random.Random:
    """Independent RNG for one scramble stream; seeded when a seed is given."""
    return random.Random(seed) if seed is not None else random.Random()
