"""Trust pallet: a web of trust with issuances, revocations, requests and parameters."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Hashable, Optional

from .frame import DispatchError, EventLog, Origin, bounded, ensure_signed

U32_MAX = 2**32 - 1
DEFAULT_MAX_TRUST_PARAMETER_SIZE = 1024


class StorageOverflow(DispatchError):
    """The action would overflow or underflow a trust counter."""


class TrustExists(DispatchError):
    """The requested trust action already exists."""


class TrustNotFound(DispatchError):
    """The requested trust action does not exist."""


class TrustRequestExists(DispatchError):
    """The requested trust request already exists."""


class TrustRequestNotFound(DispatchError):
    """The requested trust request does not exist."""


class TrustRevocationExists(DispatchError):
    """The requested trust revocation already exists."""


class TrustRevocationNotFound(DispatchError):
    """The requested trust revocation does not exist."""


@dataclass(frozen=True)
class TrustParameterSet:
    who: Hashable


@dataclass(frozen=True)
class TrustIssued:
    issuer: Hashable
    target: Hashable


@dataclass(frozen=True)
class TrustRevoked:
    issuer: Hashable
    target: Hashable


@dataclass(frozen=True)
class TrustRequest:
    requester: Hashable
    target: Hashable


@dataclass(frozen=True)
class TrustRequestRemoved:
    requester: Hashable
    target: Hashable


@dataclass(frozen=True)
class TrustIssuanceRemoved:
    issuer: Hashable
    target: Hashable


@dataclass(frozen=True)
class TrustRevocationRemoved:
    issuer: Hashable
    target: Hashable


def _increment(value: int) -> int:
    if value >= U32_MAX:
        raise StorageOverflow("counter would overflow")
    return value + 1


def _decrement(value: int) -> int:
    if value <= 0:
        raise StorageOverflow("counter would underflow")
    return value - 1


class TrustPallet:
    """Tracks trust between accounts and counts the active entries of each kind."""

    def __init__(
        self,
        events: Optional[EventLog] = None,
        *,
        max_trust_parameter_size: int = DEFAULT_MAX_TRUST_PARAMETER_SIZE,
    ) -> None:
        self.events = events if events is not None else EventLog()
        self.max_trust_parameter_size = max_trust_parameter_size
        self.current_issued = 0
        self.current_revoked = 0
        self.current_requests = 0
        self._issuance: dict[tuple[Hashable, Hashable], int] = {}
        self._revocation: dict[tuple[Hashable, Hashable], int] = {}
        self._requests: dict[tuple[Hashable, Hashable], int] = {}
        self._parameters: dict[tuple[Hashable, bytes], int] = {}

    def issue_trust(self, origin: Origin, address: Hashable) -> None:
        """Give the origin's full trust to address."""
        who = ensure_signed(origin)
        key = (who, address)
        if key in self._issuance:
            raise TrustExists("trust already issued")
        total = self.current_issued
        new_total = _increment(total)
        self._issuance[key] = total
        self.current_issued = new_total
        self.events.deposit(TrustIssued(issuer=who, target=address))

    def remove_trust(self, origin: Origin, address: Hashable) -> None:
        """Return address to an unknown trust state by removing issued trust."""
        who = ensure_signed(origin)
        key = (who, address)
        if key not in self._issuance:
            raise TrustNotFound("trust not issued")
        new_total = _decrement(self.current_issued)
        del self._issuance[key]
        self.current_issued = new_total
        self.events.deposit(TrustIssuanceRemoved(issuer=who, target=address))

    def request_trust(self, origin: Origin, address: Hashable) -> None:
        """Ask address to issue explicit trust to the sender."""
        who = ensure_signed(origin)
        key = (who, address)
        if key in self._requests:
            raise TrustRequestExists("trust request already exists")
        total = self.current_requests
        new_total = _increment(total)
        self.current_requests = new_total
        self._requests[key] = total
        self.events.deposit(TrustRequest(requester=who, target=address))

    def cancel_trust_request(self, origin: Origin, address: Hashable) -> None:
        """Rescind a trust request placed to address."""
        who = ensure_signed(origin)
        key = (who, address)
        if key not in self._requests:
            raise TrustRequestNotFound("trust request not found")
        new_total = _decrement(self.current_requests)
        del self._requests[key]
        self.current_requests = new_total
        self.events.deposit(TrustRequestRemoved(requester=who, target=address))

    def revoke_trust(self, origin: Origin, address: Hashable) -> None:
        """Publicly mark address as untrusted."""
        who = ensure_signed(origin)
        key = (who, address)
        if key in self._revocation:
            raise TrustRevocationExists("trust already revoked")
        total = self.current_revoked
        new_total = _increment(total)
        self._revocation[key] = total
        self.current_revoked = new_total
        self.events.deposit(TrustRevoked(issuer=who, target=address))

    def remove_revoked_trust(self, origin: Origin, address: Hashable) -> None:
        """Return an untrusted address to an unknown trust state."""
        who = ensure_signed(origin)
        key = (who, address)
        if key not in self._revocation:
            raise TrustRevocationNotFound("trust revocation not found")
        new_total = _decrement(self.current_revoked)
        del self._revocation[key]
        self.current_revoked = new_total
        self.events.deposit(TrustRevocationRemoved(issuer=who, target=address))

    def set_trust_parameter(self, origin: Origin, name: Any, value: int) -> None:
        """Define a coefficient participants should use to weight rating functions."""
        who = ensure_signed(origin)
        key = (who, bounded(name, self.max_trust_parameter_size))
        if not 0 <= value <= 0xFF:
            raise ValueError(f"value {value} does not fit in a byte")
        self._parameters[key] = value
        self.events.deposit(TrustParameterSet(who=who))

    def trust_issuance(self, issuer: Hashable, target: Hashable) -> Optional[int]:
        return self._issuance.get((issuer, target))

    def trust_revocation(self, issuer: Hashable, target: Hashable) -> Optional[int]:
        return self._revocation.get((issuer, target))

    def trust_request(self, requester: Hashable, target: Hashable) -> Optional[int]:
        return self._requests.get((requester, target))

    def trust_parameter(self, who: Hashable, name: Any) -> int:
        """The stored parameter value, or 0 when there is none."""
        return self._parameters.get((who, bounded(name, self.max_trust_parameter_size)), 0)