"""Benchmarked weights for the validator manager's calls."""

from __future__ import annotations

from .frame import ROCKS_DB_WEIGHT, RuntimeDbWeight, Weight


class ValidatorManagerWeightInfo:
    """Weights of the validator manager calls."""

    def __init__(self, db_weight: RuntimeDbWeight = ROCKS_DB_WEIGHT) -> None:
        self.db_weight = db_weight

    def register_validators(self, count: int) -> Weight:
        """Weight of registering validators; the benchmark showed no slope in count."""
        return Weight(13_935_755, 1491).saturating_add(self.db_weight.reads_writes(1, 1))

    def remove_validator(self) -> Weight:
        return Weight(19_530_000, 1724).saturating_add(self.db_weight.reads_writes(3, 1))