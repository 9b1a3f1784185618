"""Core runtime primitives: weights, origins, bounded data, events and balances."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from enum import Enum
from typing import Any, Hashable, Iterator, Optional

U64_MAX = 2**64 - 1


def _sat(value: int) -> int:
    return max(0, min(U64_MAX, value))


@dataclass(frozen=True)
class Weight:
    """Two-dimensional execution weight: reference time and proof size."""

    ref_time: int = 0
    proof_size: int = 0

    def __post_init__(self) -> None:
        if self.ref_time < 0 or self.proof_size < 0:
            raise ValueError("weight components must be non-negative")

    def saturating_add(self, other: "Weight") -> "Weight":
        return Weight(
            _sat(self.ref_time + other.ref_time),
            _sat(self.proof_size + other.proof_size),
        )

    def saturating_mul(self, factor: int) -> "Weight":
        if factor < 0:
            raise ValueError("factor must be non-negative")
        return Weight(_sat(self.ref_time * factor), _sat(self.proof_size * factor))

    def __add__(self, other: "Weight") -> "Weight":
        return self.saturating_add(other)


@dataclass(frozen=True)
class RuntimeDbWeight:
    """Cost of a single database read and write, in reference time."""

    read: int
    write: int

    def reads(self, count: int) -> Weight:
        return Weight(_sat(self.read * count), 0)

    def writes(self, count: int) -> Weight:
        return Weight(_sat(self.write * count), 0)

    def reads_writes(self, reads: int, writes: int) -> Weight:
        return self.reads(reads).saturating_add(self.writes(writes))


# 25 µs per read and 100 µs per write, measured in picoseconds.
ROCKS_DB_WEIGHT = RuntimeDbWeight(read=25_000_000, write=100_000_000)


class OriginKind(Enum):
    ROOT = "root"
    SIGNED = "signed"
    NONE = "none"


@dataclass(frozen=True)
class Origin:
    """The origin of a dispatched call."""

    kind: OriginKind
    who: Optional[Hashable] = None

    @classmethod
    def signed(cls, who: Hashable) -> "Origin":
        return cls(OriginKind.SIGNED, who)

    @classmethod
    def root(cls) -> "Origin":
        return cls(OriginKind.ROOT)

    @classmethod
    def none(cls) -> "Origin":
        return cls(OriginKind.NONE)


class DispatchError(Exception):
    """A call failed; storage is left untouched."""


class BadOrigin(DispatchError):
    """The call was dispatched from an origin that is not allowed."""


class BoundExceeded(DispatchError, ValueError):
    """Data is longer than its bound allows."""


def ensure_signed(origin: Origin) -> Hashable:
    """Return the signer of a signed origin, or raise BadOrigin."""
    if origin.kind is not OriginKind.SIGNED:
        raise BadOrigin("expected a signed origin")
    return origin.who


def ensure_root(origin: Origin) -> None:
    """Raise BadOrigin unless the origin is root."""
    if origin.kind is not OriginKind.ROOT:
        raise BadOrigin("expected the root origin")


def bounded(data: Any, max_size: int) -> bytes:
    """Return data as bytes, raising BoundExceeded if it exceeds max_size."""
    if isinstance(data, str):
        raw = data.encode("utf-8")
    else:
        raw = bytes(data)
    if len(raw) > max_size:
        raise BoundExceeded(f"length {len(raw)} exceeds bound {max_size}")
    return raw


class EventLog:
    """Ordered record of events deposited during execution."""

    def __init__(self) -> None:
        self._events: list[Any] = []

    def deposit(self, event: Any) -> None:
        self._events.append(event)

    def last(self) -> Optional[Any]:
        return self._events[-1] if self._events else None

    def contains(self, event: Any) -> bool:
        return event in self._events

    def clear(self) -> None:
        self._events.clear()

    def __iter__(self) -> Iterator[Any]:
        return iter(self._events)

    def __len__(self) -> int:
        return len(self._events)


class Balances:
    """Free balances with named locks; locks overlap rather than stack."""

    def __init__(self) -> None:
        self._free: dict[Hashable, int] = defaultdict(int)
        self._locks: dict[Hashable, dict[Hashable, int]] = defaultdict(dict)

    def make_free_balance_be(self, who: Hashable, amount: int) -> None:
        if amount < 0:
            raise ValueError("balance must be non-negative")
        self._free[who] = amount

    def free_balance(self, who: Hashable) -> int:
        return self._free.get(who, 0)

    def locked(self, who: Hashable) -> int:
        """Amount frozen by the largest lock on the account."""
        return max(self._locks.get(who, {}).values(), default=0)

    def ensure_can_withdraw(self, who: Hashable, amount: int) -> None:
        """Raise DispatchError if withdrawing amount would break a lock."""
        if amount == 0:
            return
        free = self.free_balance(who)
        if amount > free:
            raise DispatchError("InsufficientBalance")
        if free - amount < self.locked(who):
            raise DispatchError("LiquidityRestrictions")

    def set_lock(self, lock_id: Hashable, who: Hashable, amount: int) -> None:
        if amount <= 0:
            self.remove_lock(lock_id, who)
            return
        self._locks[who][lock_id] = amount

    def extend_lock(self, lock_id: Hashable, who: Hashable, amount: int) -> None:
        if amount <= 0:
            return
        locks = self._locks[who]
        locks[lock_id] = max(locks.get(lock_id, 0), amount)

    def remove_lock(self, lock_id: Hashable, who: Hashable) -> None:
        locks = self._locks.get(who)
        if locks is None:
            return
        locks.pop(lock_id, None)
        if not locks:
            del self._locks[who]