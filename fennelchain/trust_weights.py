"""Benchmarked weights for the trust pallet's calls."""

from __future__ import annotations

from .frame import ROCKS_DB_WEIGHT, RuntimeDbWeight, Weight

_PROOF = 3565


class TrustWeightInfo:
    """Weights of the trust calls, priced with the given database weight."""

    def __init__(self, db_weight: RuntimeDbWeight = ROCKS_DB_WEIGHT) -> None:
        self.db_weight = db_weight

    def _rw(self, base: Weight, reads: int, writes: int) -> Weight:
        return base.saturating_add(self.db_weight.reads_writes(reads, writes))

    def _linear(self, base_ref: int, slope_ref: int, m: int) -> Weight:
        if m < 0:
            raise ValueError("component must be non-negative")
        base = Weight(base_ref, _PROOF).saturating_add(
            Weight(slope_ref, 0).saturating_mul(m)
        )
        return self._rw(base, 2, 2)

    def set_trust_parameter(self) -> Weight:
        return self._rw(Weight(19_134_000, 0), 0, 1)

    def issue_trust(self) -> Weight:
        return self._rw(Weight(19_368_000, _PROOF), 2, 2)

    def issue_trust_repeatedly(self, m: int) -> Weight:
        return self._linear(27_527_746, 26_265, m)

    def revoke_trust(self) -> Weight:
        return self._rw(Weight(23_328_000, _PROOF), 2, 2)

    def revoke_trust_from_heavy_storage(self, m: int) -> Weight:
        return self._linear(20_151_782, 1_920, m)

    def remove_trust(self) -> Weight:
        return self._rw(Weight(25_182_000, _PROOF), 2, 2)

    def remove_trust_from_heavy_storage(self, m: int) -> Weight:
        return self._linear(31_319_851, 27_504, m)

    def request_trust(self) -> Weight:
        return self._rw(Weight(25_938_000, _PROOF), 2, 2)

    def request_trust_repeatedly(self, m: int) -> Weight:
        return self._linear(29_372_830, 23_364, m)

    def remove_revoked_trust(self) -> Weight:
        return self._rw(Weight(29_628_000, _PROOF), 2, 2)

    def remove_revoked_trust_heavy_storage(self, m: int) -> Weight:
        return self._linear(31_845_618, 27_025, m)

    def cancel_trust_request(self) -> Weight:
        return self._rw(Weight(30_005_000, _PROOF), 2, 2)

    def cancel_trust_request_heavy_storage(self, m: int) -> Weight:
        return self._linear(29_670_714, 26_075, m)