"""REST API for the roster builder."""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import Response

from teambuilder.api.schemas import MetricResponse, ReplacementResponse, RosterRequest, RosterResponse
from teambuilder.config import get_rules
from teambuilder.export import export_roster_to_csv
from teambuilder.ingest import records_to_cards
from teambuilder.models import Card
from teambuilder.optimizer import (
    ReplacementError,
    RosterResult,
    RosterSlot,
    SlotKind,
    apply_replacement,
    build_roster,
    replacement_candidates,
    slot_card,
)
from teambuilder.optimizer.replacements import MAX_CANDIDATES
from teambuilder.pool import DEFAULT_METRIC, METRIC_LABELS, Metric


logger = logging.getLogger(__name__)


def _resolve_metric(metric: str) -> Metric:
    try:
        return Metric.parse(metric)
    except KeyError as exc:
        raise HTTPException(status_code=400, detail=f"Unsupported metric {metric!r}") from exc


def _build(
    request: RosterRequest, metric: str, allow_two_way: bool | None
) -> tuple[RosterResult, list[Card], int]:
    resolved = _resolve_metric(metric)
    cards = records_to_cards(request.items)
    skipped = len(request.items) - len(cards)
    result = build_roster(cards, resolved, rules=get_rules(), allow_two_way=allow_two_way)
    return result, cards, skipped


def create_app() -> FastAPI:
    app = FastAPI(title="teambuilder")

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/team-builder/metrics", response_model=list[MetricResponse])
    async def metrics() -> list[MetricResponse]:
        return [MetricResponse(value=metric.value, label=METRIC_LABELS[metric]) for metric in Metric]

    @app.post("/team-builder", response_model=RosterResponse)
    async def team_builder(
        request: RosterRequest,
        metric: str = Query(DEFAULT_METRIC.value),
        allow_two_way: bool | None = Query(None),
    ) -> RosterResponse:
        result, _, skipped = _build(request, metric, allow_two_way)
        return RosterResponse.from_result(result, skipped_cards=skipped)

    @app.post("/team-builder/replacements", response_model=ReplacementResponse)
    async def team_builder_replacements(
        request: RosterRequest,
        kind: SlotKind = Query(...),
        index: int = Query(0, ge=0),
        bench_role: str | None = Query(None),
        q: str | None = Query(None),
        limit: int = Query(MAX_CANDIDATES, ge=1, le=MAX_CANDIDATES),
        metric: str = Query(DEFAULT_METRIC.value),
        allow_two_way: bool | None = Query(None),
    ) -> ReplacementResponse:
        result, cards, _ = _build(request, metric, allow_two_way)
        slot = RosterSlot(kind=kind, index=index, bench_role=bench_role)
        try:
            current = slot_card(result, slot)
            candidates = replacement_candidates(result, cards, slot, query=q, limit=limit)
        except ReplacementError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return ReplacementResponse(
            kind=kind.value,
            index=index,
            bench_role=bench_role,
            current=current,
            recommended=candidates[0] if candidates else None,
            candidates=candidates,
        )

    @app.post("/team-builder/replace", response_model=RosterResponse)
    async def team_builder_replace(
        request: RosterRequest,
        pick_id: str = Query(...),
        kind: SlotKind = Query(...),
        index: int = Query(0, ge=0),
        bench_role: str | None = Query(None),
        metric: str = Query(DEFAULT_METRIC.value),
        allow_two_way: bool | None = Query(None),
    ) -> RosterResponse:
        result, cards, skipped = _build(request, metric, allow_two_way)
        pick = next((card for card in cards if card.id == pick_id), None)
        if pick is None:
            raise HTTPException(status_code=400, detail=f"Unknown card {pick_id!r}")
        try:
            updated = apply_replacement(result, cards, RosterSlot(kind=kind, index=index, bench_role=bench_role), pick)
        except ReplacementError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return RosterResponse.from_result(updated, skipped_cards=skipped)

    @app.post("/team-builder/export.csv")
    async def team_builder_csv(
        request: RosterRequest,
        metric: str = Query(DEFAULT_METRIC.value),
        allow_two_way: bool | None = Query(None),
    ) -> Response:
        result, _, _ = _build(request, metric, allow_two_way)
        return Response(
            content=export_roster_to_csv(result),
            media_type="text/csv",
            headers={"Content-Disposition": f"attachment; filename=roster_{result.metric.value}.csv"},
        )

    return app
