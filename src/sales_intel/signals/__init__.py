"""Buying-signal detection over prospect activity."""

from sales_intel.clock import is_within_days
from sales_intel.signals.detector import (
    SIGNAL_WEIGHTS,
    BuyingSignal,
    BuyingSignalType,
    classify_buying_signals,
    detect_buying_signals,
    signal_weight,
)

__all__ = [
    "SIGNAL_WEIGHTS",
    "BuyingSignal",
    "BuyingSignalType",
    "classify_buying_signals",
    "detect_buying_signals",
    "is_within_days",
    "signal_weight",
]
