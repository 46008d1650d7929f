from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PriceSample:
    price: float
    source: str
    timestamp: str
    is_live: bool
    is_last_known: bool = False
