"""Find-or-create access to keyed records inside the document.

Records are looked up by a key attribute (a business date or a year-month)
with a linear scan, the same way the JSON document links them. Writes never
touch the input sequence; they return a new list with the record replaced
in place or appended at the end.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Sequence
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

R = TypeVar("R", bound=BaseModel)
K = TypeVar("K", bound=Hashable)


def replace(record: R, **changes: Any) -> R:
    """Copy of a frozen model with some fields changed."""
    return record.model_copy(update=changes)


class KeyedRecords(Generic[K, R]):
    """Repository view over a list of records keyed by one attribute."""

    def __init__(
        self,
        records: Sequence[R],
        factory: Callable[[K], R],
        key: str = "date",
    ):
        self._records = records
        self._factory = factory
        self._key = key

    def _index(self, key: K) -> int | None:
        for idx, record in enumerate(self._records):
            if getattr(record, self._key) == key:
                return idx
        return None

    def find(self, key: K) -> R | None:
        idx = self._index(key)
        return None if idx is None else self._records[idx]

    def get_or_create(self, key: K) -> R:
        """Stored record for ``key``, or a fresh default (not stored)."""
        found = self.find(key)
        return found if found is not None else self._factory(key)

    def update(self, key: K, **changes: Any) -> tuple[list[R], R]:
        """Upsert ``key`` with ``changes`` applied.

        Returns:
            The new record list and the updated record.
        """
        idx = self._index(key)
        records = list(self._records)
        if idx is None:
            record = replace(self._factory(key), **changes)
            records.append(record)
        else:
            record = replace(records[idx], **changes)
            records[idx] = record
        return records, record
