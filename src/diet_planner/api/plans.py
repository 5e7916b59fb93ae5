"""Plan generation endpoints."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

from fastapi import APIRouter, Query, Request

from diet_planner.api.schemas import (
    FoodPayload,
    FoodSummaryOut,
    PlanOut,
    PlanRequest,
    ShoppingSectionOut,
    WeekRequest,
)

if TYPE_CHECKING:
    from diet_planner.containers import AppContainer
    from diet_planner.domain.foods import FoodItem

router = APIRouter(tags=["plans"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


def _catalog(container: AppContainer, foods: list[FoodPayload] | None) -> list[FoodItem]:
    if foods is None:
        return container.catalog
    return [food.to_domain() for food in foods]


def _rng(seed: int | None) -> random.Random | None:
    return random.Random(seed) if seed is not None else None


@router.post("/plans")
def create_plan(payload: PlanRequest, request: Request) -> PlanOut:
    """Generate a calibrated plan for one day."""
    container = _container(request)
    plan = container.plan_service.generate(
        payload.goals.to_domain(),
        _catalog(container, payload.foods),
        payload.day_label,
        payload.patient.to_domain(container.meal_moments),
        rng=_rng(payload.seed),
    )
    return PlanOut.from_domain(plan)


@router.post("/plans/week")
def create_week(payload: WeekRequest, request: Request) -> list[PlanOut]:
    """Generate one plan per requested day."""
    container = _container(request)
    plans = container.plan_service.generate_week(
        payload.goals.to_domain(),
        _catalog(container, payload.foods),
        payload.day_labels,
        payload.patient.to_domain(container.meal_moments),
        rng=_rng(payload.seed),
    )
    return [PlanOut.from_domain(plan) for plan in plans]


@router.post("/shopping-list")
def create_shopping_list(payload: WeekRequest, request: Request) -> list[ShoppingSectionOut]:
    """Generate the requested days and consolidate their shopping list."""
    container = _container(request)
    plans = container.plan_service.generate_week(
        payload.goals.to_domain(),
        _catalog(container, payload.foods),
        payload.day_labels,
        payload.patient.to_domain(container.meal_moments),
        rng=_rng(payload.seed),
    )
    sections = container.shopping_service.build(plans)
    return [ShoppingSectionOut.from_domain(section) for section in sections]


@router.get("/catalog/search")
def search_catalog(
    request: Request,
    q: str = Query(min_length=1),
    limit: int = Query(default=20, ge=1, le=200),
) -> list[FoodSummaryOut]:
    """Return catalog foods whose name contains the query."""
    needle = q.strip().lower()
    hits = [food for food in _container(request).catalog if needle in food.name.lower()]
    hits.sort(key=lambda food: len(food.name))
    return [
        FoodSummaryOut(id=food.id, name=food.name, energy_kcal=food.energy_kcal)
        for food in hits[:limit]
    ]
