import pytest

from fennelchain.frame import BadOrigin, BoundExceeded, EventLog, Origin
from fennelchain.trust import (
    U32_MAX,
    StorageOverflow,
    TrustExists,
    TrustIssuanceRemoved,
    TrustIssued,
    TrustNotFound,
    TrustPallet,
    TrustParameterSet,
    TrustRequest,
    TrustRequestExists,
    TrustRequestNotFound,
    TrustRequestRemoved,
    TrustRevocationExists,
    TrustRevocationNotFound,
    TrustRevocationRemoved,
    TrustRevoked,
)


@pytest.fixture
def pallet():
    return TrustPallet(EventLog())


def test_set_trust_parameter(pallet):
    pallet.set_trust_parameter(Origin.signed(1), b"TEST", 42)
    assert pallet.trust_parameter(1, b"TEST") == 42
    assert pallet.events.last() == TrustParameterSet(who=1)


def test_issue_trust(pallet):
    pallet.issue_trust(Origin.signed(1), 2)
    assert pallet.trust_issuance(1, 2) == 0
    assert pallet.current_issued == 1
    assert pallet.events.last() == TrustIssued(issuer=1, target=2)


def test_issue_trust_error(pallet):
    pallet.issue_trust(Origin.signed(1), 2)
    with pytest.raises(TrustExists):
        pallet.issue_trust(Origin.signed(1), 2)
    assert pallet.current_issued == 1


def test_remove_trust(pallet):
    pallet.issue_trust(Origin.signed(1), 2)
    pallet.remove_trust(Origin.signed(1), 2)
    assert pallet.trust_issuance(1, 2) is None
    assert pallet.current_issued == 0
    assert pallet.events.last() == TrustIssuanceRemoved(issuer=1, target=2)


def test_remove_trust_error(pallet):
    with pytest.raises(TrustNotFound):
        pallet.remove_trust(Origin.signed(1), 2)


def test_request_and_cancel_trust(pallet):
    pallet.request_trust(Origin.signed(1), 2)
    assert pallet.trust_request(1, 2) == 0
    assert pallet.current_requests == 1
    assert pallet.events.last() == TrustRequest(requester=1, target=2)
    pallet.cancel_trust_request(Origin.signed(1), 2)
    assert pallet.current_requests == 0
    assert pallet.events.last() == TrustRequestRemoved(requester=1, target=2)


def test_duplicate_request_is_rejected(pallet):
    pallet.request_trust(Origin.signed(1), 2)
    with pytest.raises(TrustRequestExists):
        pallet.request_trust(Origin.signed(1), 2)


def test_cancel_trust_request_error(pallet):
    with pytest.raises(TrustRequestNotFound):
        pallet.cancel_trust_request(Origin.signed(1), 2)


def test_revoke_and_remove_revoked_trust(pallet):
    pallet.revoke_trust(Origin.signed(1), 2)
    assert pallet.trust_revocation(1, 2) == 0
    assert pallet.events.last() == TrustRevoked(issuer=1, target=2)
    pallet.remove_revoked_trust(Origin.signed(1), 2)
    assert pallet.trust_revocation(1, 2) is None
    assert pallet.events.last() == TrustRevocationRemoved(issuer=1, target=2)


def test_duplicate_revocation_is_rejected(pallet):
    pallet.revoke_trust(Origin.signed(1), 2)
    with pytest.raises(TrustRevocationExists):
        pallet.revoke_trust(Origin.signed(1), 2)
    assert pallet.current_revoked == 1


def test_remove_revoked_trust_error(pallet):
    with pytest.raises(TrustRevocationNotFound):
        pallet.remove_revoked_trust(Origin.signed(1), 2)


def test_issuance_index_is_previous_count(pallet):
    pallet.issue_trust(Origin.signed(1), 2)
    pallet.issue_trust(Origin.signed(1), 3)
    pallet.issue_trust(Origin.signed(4), 2)
    assert [pallet.trust_issuance(1, 2), pallet.trust_issuance(1, 3), pallet.trust_issuance(4, 2)] == [0, 1, 2]
    assert pallet.current_issued == 3


def test_counter_overflow_leaves_storage_untouched(pallet):
    pallet.current_issued = U32_MAX
    with pytest.raises(StorageOverflow):
        pallet.issue_trust(Origin.signed(1), 2)
    assert pallet.trust_issuance(1, 2) is None
    assert pallet.current_issued == U32_MAX


def test_counter_underflow_on_removal(pallet):
    pallet.issue_trust(Origin.signed(1), 2)
    pallet.current_issued = 0
    with pytest.raises(StorageOverflow):
        pallet.remove_trust(Origin.signed(1), 2)
    assert pallet.trust_issuance(1, 2) == 0


def test_unsigned_origin_is_rejected(pallet):
    with pytest.raises(BadOrigin):
        pallet.issue_trust(Origin.root(), 2)
    assert pallet.current_issued == 0


def test_parameter_name_is_bounded():
    pallet = TrustPallet(max_trust_parameter_size=64)
    with pytest.raises(BoundExceeded):
        pallet.set_trust_parameter(Origin.signed(1), bytes(65), 1)
    assert len(pallet.events) == 0


def test_missing_parameter_reads_as_zero(pallet):
    assert pallet.trust_parameter(1, b"NONE") == 0