from __future__ import annotations

"""Log of independently timed CFOP steps (no ids, no personal-best flag)."""

from typing import Dict, List, Optional

from pydantic import ValidationError

from ..app.explain import warn
from ..stats import stats
from ..storage.store import KEY_INDIVIDUAL_STEPS, KeyValueStore
from .schema import CFOP_STEPS, IndividualStepRecord


class IndividualStepLog:
    def __init__(self, store: KeyValueStore, key: str = KEY_INDIVIDUAL_STEPS) -> None:
        self.store = store
        self.key = key
        self.records: List[IndividualStepRecord] = []
        self.last_save_ok = True
        raw = store.load(key, [])
        for item in raw if isinstance(raw, list) else []:
            try:
                self.records.append(IndividualStepRecord.model_validate(item))
            except ValidationError:
                warn(f"Skipping unreadable record in '{key}'.")

    def add(self, step: str, elapsed_ms: int) -> IndividualStepRecord:
        rec = IndividualStepRecord(step=step, elapsed=elapsed_ms)
        self.records.append(rec)
        self._persist()
        return rec

    def clear(self) -> None:
        self.records = []
        self._persist()

    def times(self, step: str) -> List[int]:
        return [r.elapsed for r in self.records if r.step == step]

    def step_mean(self, step: str) -> Optional[float]:
        return stats.mean(self.times(step))

    def step_best(self, step: str) -> Optional[int]:
        return stats.best(self.times(step))

    def per_step(self) -> Dict[str, Dict[str, Optional[float]]]:
        return {s: {"mean": self.step_mean(s), "best": self.step_best(s)} for s in CFOP_STEPS}

    def recent(self, n: int = 10) -> List[IndividualStepRecord]:
        """Most recent records, newest first."""
        return list(reversed(self.records[-n:])) if n > 0 else []

    def _persist(self) -> None:
        self.last_save_ok = self.store.save(self.key, [r.to_json() for r in self.records])
        if not self.last_save_ok:
            warn(f"Could not save '{self.key}'; changes are kept for this session only.")
