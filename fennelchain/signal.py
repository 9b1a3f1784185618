"""Signal pallet: rating signals backed by balance locks, parameters and free-form signals."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Hashable, Optional

from .frame import (
    Balances,
    DispatchError,
    EventLog,
    Origin,
    bounded,
    ensure_signed,
)

DEFAULT_MAX_SIZE = 1024
DEFAULT_LOCK_ID = b"signal  "
DEFAULT_LOCK_PRICE = 10


class InsufficientBalance(DispatchError):
    """The origin's account balance is too low."""


class RatingSignalAlreadyExists(DispatchError):
    """Requested rating signal already exists."""


class RatingSignalDoesNotExist(DispatchError):
    """Requested rating signal does not exist."""


@dataclass(frozen=True)
class SignalParameterSet:
    """A signal parameter has been set."""

    who: Hashable


@dataclass(frozen=True)
class SignalLock:
    """A signal lock has been created."""

    account: Hashable
    amount: int


@dataclass(frozen=True)
class SignalLockExtended:
    """A signal lock has been extended."""

    account: Hashable
    amount: int


@dataclass(frozen=True)
class SignalUnlock:
    """A signal lock has been removed."""

    account: Hashable


@dataclass(frozen=True)
class SignalSent:
    """A signal sent by an identity."""

    signal: bytes
    who: Hashable


@dataclass(frozen=True)
class ServiceSignalSent:
    """A signal sent by an identity for a particular application or service."""

    service_identifier: bytes
    url: bytes
    who: Hashable


@dataclass(frozen=True)
class RatingSignalSent:
    """An identity issued a new rating signal."""

    who: Hashable


@dataclass(frozen=True)
class RatingSignalUpdated:
    """An identity updated a rating signal."""

    who: Hashable


@dataclass(frozen=True)
class RatingSignalRevoked:
    """An identity revoked a rating signal."""

    who: Hashable


def _u8(value: int) -> int:
    if not 0 <= value <= 0xFF:
        raise ValueError(f"value {value} does not fit in a byte")
    return value


class SignalPallet:
    """Stores rating signals and signal parameters, and emits signal events."""

    def __init__(
        self,
        balances: Balances,
        events: Optional[EventLog] = None,
        *,
        max_size: int = DEFAULT_MAX_SIZE,
        lock_id: Hashable = DEFAULT_LOCK_ID,
        lock_price: int = DEFAULT_LOCK_PRICE,
    ) -> None:
        self.balances = balances
        self.events = events if events is not None else EventLog()
        self.max_size = max_size
        self.lock_id = lock_id
        self.lock_price = lock_price
        self._ratings: dict[tuple[Hashable, bytes], int] = {}
        self._parameters: dict[tuple[Hashable, bytes], int] = {}

    def _bounded(self, data: Any) -> bytes:
        return bounded(data, self.max_size)

    def _ensure_balance_above_price(self, who: Hashable) -> None:
        if self.balances.free_balance(who) <= self.lock_price:
            raise InsufficientBalance("free balance does not exceed the lock price")

    def set_signal_parameter(self, origin: Origin, name: Any, value: int) -> None:
        """Define a coefficient participants should use to weight rating functions."""
        who = ensure_signed(origin)
        key = (who, self._bounded(name))
        self._parameters[key] = _u8(value)
        self.events.deposit(SignalParameterSet(who=who))

    def send_rating_signal(self, origin: Origin, target: Any, rating: int) -> None:
        """Record a rating for target and lock the signal price in the sender's account."""
        who = ensure_signed(origin)
        key = (who, self._bounded(target))
        rating = _u8(rating)
        if key in self._ratings:
            raise RatingSignalAlreadyExists("rating signal already exists")
        self._ensure_balance_above_price(who)
        if self.lock_price and self.balances.free_balance(who) < self.balances.locked(who):
            raise DispatchError("LiquidityRestrictions")

        self._ratings[key] = rating
        self.balances.set_lock(self.lock_id, who, self.lock_price)
        self.events.deposit(SignalLock(account=who, amount=self.lock_price))
        self.events.deposit(RatingSignalSent(who=who))

    def update_rating_signal(self, origin: Origin, target: Any, new_rating: int) -> None:
        """Change an existing rating and extend the signal lock."""
        who = ensure_signed(origin)
        key = (who, self._bounded(target))
        new_rating = _u8(new_rating)
        self._ensure_balance_above_price(who)
        if key not in self._ratings:
            raise RatingSignalDoesNotExist("rating signal does not exist")

        self._ratings[key] = new_rating
        self.balances.extend_lock(self.lock_id, who, self.lock_price)
        self.events.deposit(SignalLockExtended(account=who, amount=self.lock_price))
        self.events.deposit(RatingSignalUpdated(who=who))

    def revoke_rating_signal(self, origin: Origin, target: Any) -> None:
        """Remove a rating and release the signal lock."""
        who = ensure_signed(origin)
        key = (who, self._bounded(target))
        if key not in self._ratings:
            raise RatingSignalDoesNotExist("rating signal does not exist")

        del self._ratings[key]
        self.balances.remove_lock(self.lock_id, who)
        self.events.deposit(SignalUnlock(account=who))
        self.events.deposit(RatingSignalRevoked(who=who))

    def send_signal(self, origin: Origin, signal: Any) -> None:
        """Emit a signal payload without touching storage."""
        who = ensure_signed(origin)
        self.events.deposit(SignalSent(signal=self._bounded(signal), who=who))

    def send_service_signal(self, origin: Origin, service_identifier: Any, url: Any) -> None:
        """Emit a signal tagged for a particular application or service."""
        who = ensure_signed(origin)
        self.events.deposit(
            ServiceSignalSent(
                service_identifier=self._bounded(service_identifier),
                url=self._bounded(url),
                who=who,
            )
        )

    def rating_signal(self, who: Hashable, target: Any) -> int:
        """The stored rating, or 0 when there is none."""
        return self._ratings.get((who, self._bounded(target)), 0)

    def has_rating_signal(self, who: Hashable, target: Any) -> bool:
        return (who, self._bounded(target)) in self._ratings

    def signal_parameter(self, who: Hashable, name: Any) -> int:
        """The stored parameter value, or 0 when there is none."""
        return self._parameters.get((who, self._bounded(name)), 0)

    def has_signal_parameter(self, who: Hashable, name: Any) -> bool:
        return (who, self._bounded(name)) in self._parameters