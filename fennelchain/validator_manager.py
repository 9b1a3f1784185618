"""Validator manager: a privileged origin queues validator changes that sessions enact."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Hashable, Iterable, Optional

from .frame import DispatchError, EventLog, Origin, ensure_root, ensure_signed

DEFAULT_MIN_AUTHORITIES = 2


class ValidatorAlreadyAdded(DispatchError):
    """The validator is already in the set."""


class NotValidator(DispatchError):
    """The account is not a validator."""


class TooFewValidators(DispatchError):
    """Removing this validator would put the validator count below the minimum."""


@dataclass(frozen=True)
class ValidatorsRegistered:
    """New validators were added to the set."""

    validators: tuple


@dataclass(frozen=True)
class ValidatorRemoved:
    """A validator was removed from the set."""

    validator: Hashable


def validator_of(account: Hashable) -> Optional[Hashable]:
    """Convert an account into its validator identifier; here they are the same.

    The account must be hashable, since validator identifiers key session storage.
    """
    if account is None:
        return None
    hash(account)
    return account


def _swap_remove(items: list, index: int) -> None:
    items[index] = items[-1]
    items.pop()


class ValidatorManager:
    """Queues validators to add and remove, applying the queues at each new session."""

    def __init__(
        self,
        events: Optional[EventLog] = None,
        *,
        min_authorities: int = DEFAULT_MIN_AUTHORITIES,
        privileged_origin: Callable[[Origin], Any] = ensure_root,
        validator_of: Callable[[Hashable], Optional[Hashable]] = validator_of,
        initial_validators: Iterable[Hashable] = (),
    ) -> None:
        self.events = events if events is not None else EventLog()
        self.min_authorities = min_authorities
        self._ensure_privileged = privileged_origin
        self._validator_of = validator_of
        self._to_add: list = []
        self._to_remove: list = []
        self._session: Optional["Session"] = None
        self._started_session: Optional[int] = None
        self._ended_session: Optional[int] = None
        initial = list(initial_validators)
        if initial:
            self.put_validators(initial)

    @property
    def validators_to_add(self) -> list:
        return list(self._to_add)

    @property
    def validators_to_remove(self) -> list:
        return list(self._to_remove)

    @property
    def started_session(self) -> Optional[int]:
        """Index of the most recently started session, if any."""
        return self._started_session

    @property
    def ended_session(self) -> Optional[int]:
        """Index of the most recently ended session, if any."""
        return self._ended_session

    def bind_session(self, session: "Session") -> None:
        """Attach the session whose validator set this manager reads."""
        self._session = session

    def _current_validators(self) -> list:
        if self._session is None:
            raise RuntimeError("no session is bound to the validator manager")
        return self._session.validators

    def register_validators(self, origin: Origin, validators: Iterable[Hashable]) -> None:
        """Queue validators to join the set; they become active two sessions later."""
        self._ensure_privileged(origin)
        validators = tuple(validators)
        pending = list(self._to_add)
        for validator in validators:
            if validator in pending:
                raise ValidatorAlreadyAdded(f"validator {validator!r} is already queued")
            pending.append(validator)
        self._to_add = pending
        self.events.deposit(ValidatorsRegistered(validators=validators))

    def remove_validator(self, origin: Origin, validator: Hashable) -> None:
        """Queue a validator for removal; it is deactivated two sessions later."""
        self._ensure_privileged(origin)
        validators = self._current_validators()
        if validator not in validators:
            raise NotValidator(f"{validator!r} is not a validator")
        final_count = max(
            0, len(validators) + len(self._to_add) - len(self._to_remove) - 1
        )
        if final_count < self.min_authorities:
            raise TooFewValidators("removal would leave too few validators")
        self._to_remove = [*self._to_remove, validator]
        self.events.deposit(ValidatorRemoved(validator=validator))

    def put_validators(self, accounts: Iterable[Hashable]) -> None:
        """Replace the add queue with the validator ids of the given accounts."""
        converted = [
            v for v in (self._validator_of(a) for a in accounts) if v is not None
        ]
        if converted:
            self._to_add = converted

    def new_session(self, new_index: int) -> Optional[list]:
        """Plan the validator set for a new session, or None to keep the current one."""
        if new_index <= 1:
            return None
        validators = self._current_validators()

        to_remove, self._to_remove = self._to_remove, []
        for validator in to_remove:
            if validator in validators:
                _swap_remove(validators, validators.index(validator))

        to_add, self._to_add = self._to_add, []
        for validator in to_add:
            if validator not in validators:
                validators.append(validator)

        if len(validators) < self.min_authorities:
            return None
        return validators

    def start_session(self, start_index: int) -> None:
        """Record that the session with this index has started."""
        self._started_session = start_index

    def end_session(self, end_index: int) -> None:
        """Record that the session with this index has ended."""
        self._ended_session = end_index

    def process_queue(self) -> Optional[list]:
        """Plan the genesis session's validators."""
        return self.new_session(0)


class Session:
    """Session rotation: the queued validator set becomes active at each session end."""

    def __init__(
        self,
        manager: Optional[ValidatorManager] = None,
        keys: Iterable[tuple] = (),
        *,
        period: int = 1,
        offset: int = 0,
        validator_id_of: Callable[[Hashable], Optional[Hashable]] = validator_of,
    ) -> None:
        if period <= 0:
            raise ValueError("session period must be positive")
        self.period = period
        self.offset = offset
        self._manager = manager
        self._validator_id_of = validator_id_of
        self._next_keys: dict = {}
        self._key_owner: dict = {}
        self._current_index = 0
        if manager is not None:
            manager.bind_session(self)

        keys = list(keys)
        for _account, validator, session_keys in keys:
            try:
                self._do_set_keys(validator, session_keys)
            except DispatchError as exc:
                raise ValueError("genesis keys must not contain duplicates") from exc

        validators_0 = self._plan(0)
        if validators_0 is None:
            validators_0 = [validator for _account, validator, _keys in keys]
        if not validators_0:
            raise ValueError("empty validator set for session 0 in genesis")
        validators_1 = self._plan(1)
        if validators_1 is None:
            validators_1 = list(validators_0)

        queued = []
        for validator in validators_1:
            if validator not in self._next_keys:
                raise ValueError(f"validator {validator!r} in session 1 is missing keys")
            queued.append((validator, self._next_keys[validator]))

        self._validators = list(validators_0)
        self._queued_keys = queued
        if manager is not None:
            manager.start_session(0)

    def _plan(self, index: int) -> Optional[list]:
        return self._manager.new_session(index) if self._manager is not None else None

    @property
    def validators(self) -> list:
        return list(self._validators)

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def queued_keys(self) -> list:
        return list(self._queued_keys)

    def should_end_session(self, block_number: int) -> bool:
        return (
            block_number >= self.offset
            and (block_number - self.offset) % self.period == 0
        )

    def on_initialize(self, block_number: int) -> bool:
        """Rotate the session if this block ends one; report whether it did."""
        if self.should_end_session(block_number):
            self.rotate_session()
            return True
        return False

    def rotate_session(self) -> None:
        """Activate the queued validators and queue the next session's set."""
        index = self._current_index
        if self._manager is not None:
            self._manager.end_session(index)
        self._validators = [validator for validator, _keys in self._queued_keys]
        index += 1
        self._current_index = index
        if self._manager is not None:
            self._manager.start_session(index)

        next_validators = self._plan(index + 1)
        if next_validators is None:
            next_validators = list(self._validators)
        self._queued_keys = [
            (validator, self._next_keys[validator])
            for validator in next_validators
            if validator in self._next_keys
        ]

    def set_keys(self, origin: Origin, keys: Hashable) -> None:
        """Set the session keys of the signer's validator for the next session."""
        who = ensure_signed(origin)
        validator = self._validator_id_of(who)
        if validator is None:
            raise DispatchError("NoAssociatedValidatorId")
        self._do_set_keys(validator, keys)

    def _do_set_keys(self, validator: Hashable, keys: Hashable) -> None:
        owner = self._key_owner.get(keys)
        if owner is not None and owner != validator:
            raise DispatchError("DuplicatedKey")
        old = self._next_keys.get(validator)
        if old is not None and old != keys:
            self._key_owner.pop(old, None)
        self._key_owner[keys] = validator
        self._next_keys[validator] = keys