from __future__ import annotations

"""Persisted, ordered solve histories with personal-best tracking.

A History owns one collection (plain solves or CFOP step solves) and its
next-id counter. Every mutation recomputes the personal-best flag over the
whole collection and writes both values back to the store before returning.
The in-memory collection stays authoritative if a write fails.
"""

from typing import Generic, List, Optional, Type, TypeVar, Union

from pydantic import ValidationError

from ..app.explain import trace as xtrace, warn
from ..stats import stats
from ..storage.store import (
    KEY_SOLVES,
    KEY_SOLVES_NEXT_ID,
    KEY_STEP_SOLVES,
    KEY_STEP_SOLVES_NEXT_ID,
    KeyValueStore,
)
from .schema import SolveRecord, StepSolveRecord

R = TypeVar("R", bound=Union[SolveRecord, StepSolveRecord])


class History(Generic[R]):
    def __init__(self, store: KeyValueStore, model: Type[R], records_key: str, next_id_key: str) -> None:
        self.store = store
        self.model = model
        self.records_key = records_key
        self.next_id_key = next_id_key
        self.records: List[R] = []
        self.next_id = 1
        self.last_save_ok = True
        self._load()

    # Loading
    def _load(self) -> None:
        raw = self.store.load(self.records_key, [])
        if not isinstance(raw, list):
            warn(f"Ignoring malformed '{self.records_key}' (expected a list).")
            raw = []
        records: List[R] = []
        for item in raw:
            try:
                records.append(self.model.model_validate(item))
            except ValidationError as exc:
                warn(f"Skipping unreadable record in '{self.records_key}': {exc.error_count()} error(s).")
        self.records = records

        try:
            next_id = int(self.store.load(self.next_id_key, 1))
        except (TypeError, ValueError):
            next_id = 1
        highest = max((r.id for r in records), default=0)
        self.next_id = max(next_id, highest + 1, 1)
        self._recompute_personal_best()

    # Mutations
    def append(self, record: R) -> R:
        record.id = self.next_id
        self.next_id += 1
        self.records.append(record)
        self._recompute_personal_best()
        self._persist()
        if record.is_personal_best:
            xtrace("personal_best", {"collection": self.records_key, "id": record.id, "ms": record.value})
        return record

    def delete(self, record_id: int) -> bool:
        kept = [r for r in self.records if r.id != record_id]
        if len(kept) == len(self.records):
            return False
        self.records = kept
        self._recompute_personal_best()
        self._persist()
        xtrace("record_deleted", {"collection": self.records_key, "id": record_id})
        return True

    def clear_all(self) -> None:
        self.records = []
        self.next_id = 1
        self._persist()
        xtrace("history_cleared", {"collection": self.records_key})

    # Queries
    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)

    @property
    def count(self) -> int:
        return len(self.records)

    def values(self) -> List[int]:
        return [r.value for r in self.records]

    def get(self, record_id: int) -> Optional[R]:
        for r in self.records:
            if r.id == record_id:
                return r
        return None

    def personal_best(self) -> Optional[R]:
        for r in self.records:
            if r.is_personal_best:
                return r
        return None

    def average_of_n(self, n: int) -> Optional[float]:
        return stats.average_of_n(self.values(), n)

    def best(self) -> Optional[int]:
        return stats.best(self.values())

    def worst(self) -> Optional[int]:
        return stats.worst(self.values())

    def mean(self) -> Optional[float]:
        return stats.mean(self.values())

    def summary(self) -> dict:
        return stats.summarize(self.values())

    # Internals
    def _recompute_personal_best(self) -> None:
        for r in self.records:
            r.is_personal_best = False
        idx = stats.personal_best_index(self.values())
        if idx is not None:
            self.records[idx].is_personal_best = True

    def _persist(self) -> None:
        ok_records = self.store.save(self.records_key, [r.to_json() for r in self.records])
        ok_id = self.store.save(self.next_id_key, self.next_id)
        self.last_save_ok = ok_records and ok_id
        if not self.last_save_ok:
            warn(f"Could not save '{self.records_key}'; changes are kept for this session only.")
            xtrace("store_write_failed", {"key": self.records_key})


def solve_history(store: KeyValueStore) -> History[SolveRecord]:
    return History(store, SolveRecord, KEY_SOLVES, KEY_SOLVES_NEXT_ID)


def step_history(store: KeyValueStore) -> History[StepSolveRecord]:
    return History(store, StepSolveRecord, KEY_STEP_SOLVES, KEY_STEP_SOLVES_NEXT_ID)
