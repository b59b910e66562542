from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List

from pydantic import BaseModel, Field

from teambuilder.models import Card
from teambuilder.optimizer import RosterResult


class RosterRequest(BaseModel):
    items: List[Dict[str, Any]] = Field(default_factory=list)


class MetricResponse(BaseModel):
    value: str
    label: str


class LineupSlotResponse(BaseModel):
    slot: int
    position: str
    card: Card


class BenchResponse(BaseModel):
    pinch_runner: Card | None = None
    defensive_sub: Card | None = None
    platoon_vs_left: Card | None = None
    platoon_vs_right: Card | None = None


class BullpenSlotResponse(BaseModel):
    card: Card
    assignment: str
    role: str | None = None


class SquadKpisResponse(BaseModel):
    meta: float
    contact: float
    power: float
    speed: float
    defense: float
    rotation: float
    bullpen: float


class RosterResponse(BaseModel):
    metric: str
    lineup_score: float
    lineup: List[LineupSlotResponse]
    starters: Dict[str, Card]
    dh: Card | None
    bench: BenchResponse
    rotation: List[Card]
    bullpen: List[BullpenSlotResponse]
    kpis: SquadKpisResponse | None = None
    advice: List[str] = Field(default_factory=list)
    skipped_cards: int = 0

    @classmethod
    def from_result(cls, result: RosterResult, *, skipped_cards: int = 0) -> "RosterResponse":
        kpis = result.insights.kpis
        return cls(
            metric=result.metric.value,
            lineup_score=result.lineup_score,
            lineup=[
                LineupSlotResponse(slot=slot.slot, position=slot.position, card=slot.card)
                for slot in result.lineup
            ],
            starters=dict(result.starters),
            dh=result.dh,
            bench=BenchResponse(
                pinch_runner=result.bench.pinch_runner,
                defensive_sub=result.bench.defensive_sub,
                platoon_vs_left=result.bench.platoon_vs_left,
                platoon_vs_right=result.bench.platoon_vs_right,
            ),
            rotation=list(result.rotation),
            bullpen=[
                BullpenSlotResponse(card=slot.card, assignment=slot.assignment, role=slot.role)
                for slot in result.bullpen
            ],
            kpis=SquadKpisResponse(**asdict(kpis)) if kpis is not None else None,
            advice=list(result.insights.advice),
            skipped_cards=skipped_cards,
        )


class ReplacementResponse(BaseModel):
    kind: str
    index: int
    bench_role: str | None = None
    current: Card | None = None
    recommended: Card | None = None
    candidates: List[Card] = Field(default_factory=list)
