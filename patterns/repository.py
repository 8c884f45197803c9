"""In-memory repository pattern for record collections.

Provides a generic base repository owning an ordered, lock-guarded sequence
of records with lookup, filtered listing, partial update and delete.
Verticals subclass this to add creation and domain-specific transitions.

Example: TaskRepository extending InMemoryRepository.
"""

import logging
import math
import threading
from typing import Any, Generic, Iterable, Mapping, Protocol, TypeVar

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class RecordNotFound(LookupError):
    """Raised when an id-keyed lookup matches no record."""

    message = "Record not found"

    def __init__(self, record_id: Any):
        super().__init__(f"{self.message}: {record_id!r}")
        self.record_id = record_id


# ---------------------------------------------------------------------------
# Record protocol
# ---------------------------------------------------------------------------

_MISSING = object()


class Record(Protocol):
    id: Any

    def get_field(self, name: str, default: Any = None) -> Any: ...

    def apply(self, fields: Mapping[str, Any]) -> None: ...

    def to_dict(self) -> dict[str, Any]: ...


RecordT = TypeVar("RecordT", bound=Record)

_JS_INFINITY = {"Infinity": math.inf, "+Infinity": math.inf, "-Infinity": -math.inf}
_RADIX_PREFIXES = {"0x": 16, "0o": 8, "0b": 2}


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def to_number(text: str) -> float | None:
    """Parse a query-string value the way JavaScript's Number() does.

    Surrounding whitespace is ignored and a blank string is 0. Returns None
    where Number() would give NaN.
    """
    text = text.strip()
    if not text:
        return 0.0
    if text in _JS_INFINITY:
        return _JS_INFINITY[text]
    radix = _RADIX_PREFIXES.get(text[:2].lower())
    if radix is not None:
        try:
            return float(int(text[2:], radix))
        except ValueError:
            return None
    if "_" in text or any(c.isalpha() and c not in "eE" for c in text):
        return None
    try:
        return float(text)
    except ValueError:
        return None


def stringify(value: Any) -> str | None:
    """Render a field value the way it appears in a query string.

    Booleans become ``true``/``false`` and numbers their decimal text.
    ``None`` has no query-string form and never matches.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def loosely_equal(actual: Any, expected: str) -> bool:
    """Compare a stored field with a query-string value, coercing types.

    Numbers compare numerically (``"01"`` and ``" 1.0"`` equal 1), booleans
    accept ``true``/``false`` as well as their numeric forms, everything
    else compares by its string form.
    """
    if actual is None:
        return False
    if isinstance(actual, bool):
        return stringify(actual) == expected or to_number(expected) == int(actual)
    if is_number(actual):
        return to_number(expected) == actual
    return stringify(actual) == expected


def same_id(stored: Any, wanted: Any) -> bool:
    """Strict id equality: a boolean never equals a number."""
    if wanted is None or isinstance(stored, bool) != isinstance(wanted, bool):
        return False
    return stored == wanted


def matches(record: Record, filters: Mapping[str, str]) -> bool:
    """True when every (key, value) clause holds for the record."""
    for key, expected in filters.items():
        actual = record.get_field(key, _MISSING)
        if actual is _MISSING:
            return False
        if not loosely_equal(actual, str(expected)):
            return False
    return True


# ---------------------------------------------------------------------------
# Base repository
# ---------------------------------------------------------------------------

class InMemoryRepository(Generic[RecordT]):
    """Generic repository over an ordered in-memory sequence.

    Every public operation holds the repository lock for its whole duration,
    so operations are serialized even when handlers run on worker threads.
    Subclass and set `not_found` to a domain error::

        class NoteRepository(InMemoryRepository[Note]):
            not_found = NoteNotFound

            def create(self, text: str) -> Note:
                with self._lock:
                    note = Note(id=self.next_id(), text=text)
                    self._records.append(note)
                    return note
    """

    not_found: type[RecordNotFound] = RecordNotFound

    def __init__(self, records: Iterable[RecordT] = ()):
        self._records: list[RecordT] = list(records)
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    # -- Ids --

    def next_id(self) -> int:
        """Id for the next record: collection size + 1.

        When the size-based id is still held by a live record, falls back to
        the first free integer past the highest live numeric id.
        """
        with self._lock:
            taken = {
                r.id for r in self._records
                if is_number(r.id) and math.isfinite(r.id)
            }
            candidate = len(self._records) + 1
            if candidate in taken:
                candidate = math.floor(max(taken)) + 1
                while candidate in taken:
                    candidate += 1
            return candidate

    def _index_of(self, record_id: Any) -> int:
        for index, record in enumerate(self._records):
            if same_id(record.id, record_id):
                return index
        raise self.not_found(record_id)

    # -- List with filters --

    def list(self, filters: Mapping[str, str] | None = None) -> list[RecordT]:
        """Records satisfying every filter clause, in insertion order."""
        with self._lock:
            if not filters:
                return list(self._records)
            return [r for r in self._records if matches(r, filters)]

    # -- Get by ID --

    def get(self, record_id: Any) -> RecordT:
        """Return the first record with the given id."""
        with self._lock:
            return self._records[self._index_of(record_id)]

    # -- Update --

    def update(self, record_id: Any, fields: Mapping[str, Any]) -> RecordT:
        """Overwrite every field named in `fields`; others are untouched."""
        with self._lock:
            record = self._records[self._index_of(record_id)]
            record.apply(fields)
            logger.debug("Updated record %r fields=%s", record_id, sorted(fields))
            return record

    # -- Delete --

    def delete(self, record_id: Any) -> None:
        """Remove exactly the record with the given id."""
        with self._lock:
            del self._records[self._index_of(record_id)]
            logger.info("Deleted record %r", record_id)

    def clear(self) -> None:
        with self._lock:
            self._records.clear()
