from __future__ import annotations

from enum import Enum

"""Coarse booking lifecycle used for dry run triage.

This is not the scheduling board's state machine: historical exports only
carry enough information to tell booked, delivered and collected apart.
"""

__all__ = [
    "JobStatus",
]


class JobStatus(Enum):
    BOOKED = "booked"
    DELIVERED = "delivered"
    COLLECTED = "collected"
