"""Benchmarked weights for the signal pallet's calls."""

from __future__ import annotations

from .frame import ROCKS_DB_WEIGHT, RuntimeDbWeight, Weight


class SignalWeightInfo:
    """Weights of the signal calls, priced with the given database weight."""

    def __init__(self, db_weight: RuntimeDbWeight = ROCKS_DB_WEIGHT) -> None:
        self.db_weight = db_weight

    def _rw(self, base: Weight, reads: int, writes: int) -> Weight:
        return base.saturating_add(self.db_weight.reads(reads)).saturating_add(
            self.db_weight.writes(writes)
        )

    def set_signal_parameter(self) -> Weight:
        return self._rw(Weight(12_131_000, 0), 0, 1)

    def set_signal_parameter_large_input(self) -> Weight:
        return self._rw(Weight(14_516_000, 0), 0, 1)

    def send_rating_signal(self) -> Weight:
        return self._rw(Weight(117_504_000, 4764), 3, 2)

    def send_rating_signal_large_input(self) -> Weight:
        return self._rw(Weight(56_830_000, 4764), 3, 2)

    def update_rating_signal(self) -> Weight:
        return self._rw(Weight(102_081_000, 4764), 3, 2)

    def revoke_rating_signal(self) -> Weight:
        return self._rw(Weight(112_948_000, 4764), 3, 2)

    def send_signal(self) -> Weight:
        return Weight(16_717_000, 0)

    def send_signal_large_input(self) -> Weight:
        return Weight(9_140_000, 0)

    def send_service_signal(self) -> Weight:
        return Weight(18_350_000, 0)

    def send_service_signal_large_input(self) -> Weight:
        return Weight(9_367_000, 0)