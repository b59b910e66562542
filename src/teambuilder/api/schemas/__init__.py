"""Pydantic models for API I/O."""

from .roster import (
    BenchResponse,
    BullpenSlotResponse,
    LineupSlotResponse,
    MetricResponse,
    ReplacementResponse,
    RosterRequest,
    RosterResponse,
    SquadKpisResponse,
)

__all__ = [
    "BenchResponse",
    "BullpenSlotResponse",
    "LineupSlotResponse",
    "MetricResponse",
    "ReplacementResponse",
    "RosterRequest",
    "RosterResponse",
    "SquadKpisResponse",
]
