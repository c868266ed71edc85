from .store import (
    KEY_INDIVIDUAL_STEPS,
    KEY_INSPECTION_CONFIG,
    KEY_SOLVES,
    KEY_SOLVES_NEXT_ID,
    KEY_STEP_SOLVES,
    KEY_STEP_SOLVES_NEXT_ID,
    JsonFileStore,
    KeyValueStore,
    MemoryStore,
)

__all__ = [
    "KEY_INDIVIDUAL_STEPS",
    "KEY_INSPECTION_CONFIG",
    "KEY_SOLVES",
    "KEY_SOLVES_NEXT_ID",
    "KEY_STEP_SOLVES",
    "KEY_STEP_SOLVES_NEXT_ID",
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
]
