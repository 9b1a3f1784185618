"""The chain runtime: constants, version information and the composed pallets."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable, Iterable, Mapping, Optional

from .frame import (
    ROCKS_DB_WEIGHT,
    U64_MAX,
    Balances,
    EventLog,
    RuntimeDbWeight,
    Weight,
)
from .signal import SignalPallet
from .signal_weights import SignalWeightInfo
from .trust import TrustPallet
from .trust_weights import TrustWeightInfo
from .validator_manager import Session, ValidatorManager, validator_of
from .validator_weights import ValidatorManagerWeightInfo

# Block production timing.
MILLI_SECS_PER_BLOCK = 6000
SLOT_DURATION = MILLI_SECS_PER_BLOCK
MINIMUM_PERIOD = SLOT_DURATION // 2

# Time measured in blocks.
MINUTES = 60_000 // MILLI_SECS_PER_BLOCK
HOURS = MINUTES * 60
DAYS = HOURS * 24

BLOCK_HASH_COUNT = 2400

# Balance units.
UNIT = 1_000_000_000_000
MILLI_UNIT = 1_000_000_000
MICRO_UNIT = 1_000_000
EXISTENTIAL_DEPOSIT = MILLI_UNIT
MAX_LOCKS = 50

# Block limits.
WEIGHT_REF_TIME_PER_SECOND = 1_000_000_000_000
NORMAL_DISPATCH_RATIO_PERCENT = 75
MAXIMUM_BLOCK_WEIGHT = Weight(2 * WEIGHT_REF_TIME_PER_SECOND, U64_MAX)
MAX_BLOCK_LENGTH = 5 * 1024 * 1024
NORMAL_BLOCK_LENGTH = MAX_BLOCK_LENGTH * NORMAL_DISPATCH_RATIO_PERCENT // 100
SS58_PREFIX = 42
MAX_CONSUMERS = 16

# Consensus limits.
MAX_AUTHORITIES = 32

# Session and validator management.
SESSION_PERIOD = 2
SESSION_OFFSET = 0
MIN_AUTHORITIES = 2

# Signal pallet configuration.
SIGNAL_LOCK_ID = b"signallk"
SIGNAL_LOCK_PRICE = 1_000_000_000
SIGNAL_MAX_SIZE = 1024

# Trust pallet configuration.
MAX_TRUST_PARAMETER_SIZE = 64


@dataclass(frozen=True)
class RuntimeVersion:
    """Identifies a runtime build to nodes and clients."""

    spec_name: str
    impl_name: str
    authoring_version: int
    spec_version: int
    impl_version: int
    transaction_version: int
    system_version: int


VERSION = RuntimeVersion(
    spec_name="solochain-runtime",
    impl_name="solochain-runtime",
    authoring_version=1,
    spec_version=100,
    impl_version=1,
    transaction_version=1,
    system_version=1,
)


@dataclass(frozen=True)
class NativeVersion:
    """The runtime version together with the authoring compatibility set."""

    runtime_version: RuntimeVersion
    can_author_with: frozenset = frozenset()


def native_version() -> NativeVersion:
    """Version information used when the runtime runs natively."""
    return NativeVersion(runtime_version=VERSION)


class Runtime:
    """Balances, session, validator manager, signal and trust pallets sharing one event log."""

    def __init__(
        self,
        authorities: Iterable[tuple[Hashable, Hashable]],
        *,
        endowed: Optional[Mapping[Hashable, int]] = None,
        sudo_key: Optional[Hashable] = None,
        db_weight: RuntimeDbWeight = ROCKS_DB_WEIGHT,
    ) -> None:
        authorities = list(authorities)
        if not authorities:
            raise ValueError("the runtime needs at least one authority at genesis")

        self.version = VERSION
        self.sudo_key = sudo_key
        self.db_weight = db_weight
        self.block_number = 0
        self.events = EventLog()

        self.balances = Balances()
        for account, amount in (endowed or {}).items():
            self.balances.make_free_balance_be(account, amount)

        self.validator_manager = ValidatorManager(
            self.events,
            min_authorities=MIN_AUTHORITIES,
            validator_of=validator_of,
            initial_validators=[account for account, _keys in authorities],
        )
        self.session = Session(
            self.validator_manager,
            [(account, account, keys) for account, keys in authorities],
            period=SESSION_PERIOD,
            offset=SESSION_OFFSET,
        )
        self.signal = SignalPallet(
            self.balances,
            self.events,
            max_size=SIGNAL_MAX_SIZE,
            lock_id=SIGNAL_LOCK_ID,
            lock_price=SIGNAL_LOCK_PRICE,
        )
        self.trust = TrustPallet(
            self.events, max_trust_parameter_size=MAX_TRUST_PARAMETER_SIZE
        )

        self.signal_weights = SignalWeightInfo(db_weight)
        self.trust_weights = TrustWeightInfo(db_weight)
        self.validator_manager_weights = ValidatorManagerWeightInfo(db_weight)

    @property
    def timestamp(self) -> int:
        """Milliseconds elapsed since genesis at the current block."""
        return self.block_number * SLOT_DURATION

    def run_to_block(self, block_number: int) -> None:
        """Initialize every block up to and including block_number."""
        if block_number < self.block_number:
            raise ValueError(
                f"cannot go back from block {self.block_number} to {block_number}"
            )
        for number in range(self.block_number + 1, block_number + 1):
            self.block_number = number
            self.session.on_initialize(number)