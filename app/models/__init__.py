from .fact import Fact, FactRecord, ZERO_TIME

__all__ = [
    "Fact",
    "FactRecord",
    "ZERO_TIME",
]
