"""In-memory model of a blockchain runtime with signal, trust and validator-management modules."""

__version__ = "0.1.0"

__all__ = [
    "frame",
    "signal_weights",
    "validator_weights",
    "trust_weights",
    "signal",
    "trust",
    "validator_manager",
    "runtime",
]