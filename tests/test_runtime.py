import pytest

from fennelchain.frame import BadOrigin, BoundExceeded, Origin
from fennelchain.runtime import (
    MAX_TRUST_PARAMETER_SIZE,
    MINUTES,
    SESSION_PERIOD,
    SIGNAL_LOCK_ID,
    SIGNAL_LOCK_PRICE,
    SLOT_DURATION,
    VERSION,
    Runtime,
    RuntimeVersion,
    native_version,
)
from fennelchain.signal import InsufficientBalance, RatingSignalSent, SignalLock
from fennelchain.signal_weights import SignalWeightInfo
from fennelchain.trust import TrustIssued
from fennelchain.validator_manager import TooFewValidators


def make_runtime(accounts=(1, 2, 3), **kwargs):
    return Runtime([(a, f"key{a}") for a in accounts], **kwargs)


def test_native_version_fields():
    version = native_version().runtime_version
    assert version.spec_name == "solochain-runtime"
    assert version.impl_name == "solochain-runtime"
    assert version.spec_version == 100


def test_native_version_wraps_runtime_version():
    native = native_version()
    assert isinstance(native.runtime_version, RuntimeVersion)
    assert native.runtime_version == VERSION


def test_one_minute_of_blocks_advances_timestamp_by_a_minute():
    runtime = make_runtime()
    runtime.run_to_block(MINUTES)
    assert runtime.timestamp == 60_000


def test_runtime_requires_authorities():
    with pytest.raises(ValueError):
        Runtime([])


def test_genesis_validators_and_endowment():
    runtime = make_runtime(endowed={1: 500, 7: 42}, sudo_key=1)
    assert runtime.session.validators == [1, 2, 3]
    assert runtime.balances.free_balance(7) == 42
    assert runtime.sudo_key == 1
    assert runtime.block_number == 0


def test_run_to_block_rotates_sessions():
    runtime = make_runtime()
    runtime.run_to_block(7)
    assert runtime.block_number == 7
    assert runtime.session.current_index == 7 // SESSION_PERIOD
    assert runtime.timestamp == 7 * SLOT_DURATION


def test_run_to_block_cannot_go_back():
    runtime = make_runtime()
    runtime.run_to_block(3)
    with pytest.raises(ValueError):
        runtime.run_to_block(2)


def test_registered_validator_becomes_active():
    runtime = make_runtime()
    runtime.session.set_keys(Origin.signed(4), "key4")
    runtime.validator_manager.register_validators(Origin.root(), [4])
    runtime.run_to_block(6)
    assert sorted(runtime.session.validators) == [1, 2, 3, 4]


def test_signed_origin_cannot_register_validators():
    runtime = make_runtime()
    with pytest.raises(BadOrigin):
        runtime.validator_manager.register_validators(Origin.signed(1), [4])


def test_signal_uses_runtime_lock_price():
    runtime = make_runtime(endowed={5: SIGNAL_LOCK_PRICE})
    with pytest.raises(InsufficientBalance):
        runtime.signal.send_rating_signal(Origin.signed(5), b"target", 3)

    runtime.balances.make_free_balance_be(5, SIGNAL_LOCK_PRICE * 2)
    runtime.signal.send_rating_signal(Origin.signed(5), b"target", 3)
    assert runtime.balances.locked(5) == SIGNAL_LOCK_PRICE
    assert runtime.events.contains(SignalLock(account=5, amount=SIGNAL_LOCK_PRICE))
    assert runtime.events.last() == RatingSignalSent(who=5)
    assert SIGNAL_LOCK_ID == b"signallk"


def test_trust_parameter_bound_and_shared_events():
    runtime = make_runtime()
    runtime.trust.set_trust_parameter(Origin.signed(1), b"x" * MAX_TRUST_PARAMETER_SIZE, 9)
    assert runtime.trust.trust_parameter(1, b"x" * MAX_TRUST_PARAMETER_SIZE) == 9
    with pytest.raises(BoundExceeded):
        runtime.trust.set_trust_parameter(
            Origin.signed(1), b"x" * (MAX_TRUST_PARAMETER_SIZE + 1), 9
        )
    runtime.trust.issue_trust(Origin.signed(1), 2)
    assert runtime.events.last() == TrustIssued(issuer=1, target=2)


def test_weight_info_matches_database_weight():
    runtime = make_runtime()
    assert runtime.signal_weights.send_rating_signal() == SignalWeightInfo().send_rating_signal()
    assert (
        runtime.trust_weights.issue_trust_repeatedly(3).ref_time
        > runtime.trust_weights.issue_trust_repeatedly(0).ref_time
    )