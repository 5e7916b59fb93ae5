"""Tests for plan endpoints."""

from fastapi.testclient import TestClient

from diet_planner.api.app import create_app
from tests.conftest import rich_catalog


def _client(container) -> TestClient:
    return TestClient(create_app(container))


def test_health_reports_catalog_size(container) -> None:
    response = _client(container).get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "catalog_size": len(rich_catalog())}


def test_create_plan(container) -> None:
    response = _client(container).post(
        "/plans",
        json={"goals": {"target_calories": 2000}, "day_label": "Monday", "seed": 3},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["day_label"] == "Monday"
    assert data["target_calories"] == 2000
    assert len(data["meals"]) == 4
    assert data["meals"][1]["slot"] == "lunch"
    assert data["meals"][1]["stats"]["calories"] > 0
    item = data["meals"][1]["items"][0]
    assert {"food_id", "quantity_g", "gross_quantity_g", "cooked_quantity_g"} <= set(item)
    assert data["within_tolerance"] is True


def test_create_plan_is_reproducible_with_seed(container) -> None:
    client = _client(container)
    payload = {"goals": {"target_calories": 1800}, "seed": 21}

    first = client.post("/plans", json=payload).json()
    second = client.post("/plans", json=payload).json()

    assert first == second


def test_create_plan_with_patient_constraints(container) -> None:
    response = _client(container).post(
        "/plans",
        json={
            "goals": {"target_calories": 900},
            "seed": 1,
            "patient": {
                "patient_type": "pediatrico",
                "allergies": [{"allergen": "milk", "severity": "fatal"}],
                "meal_moments": [
                    {"name": "Lunch", "slot": "lunch", "ratio": 0.6},
                    {"name": "Dinner", "slot": "dinner", "ratio": 0.4},
                ],
            },
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert [meal["slot"] for meal in data["meals"]] == ["lunch", "dinner"]
    assert any("linear growth" in warning for warning in data["safety_warnings"])
    names = [item["name"].lower() for meal in data["meals"] for item in meal["items"]]
    assert not any("milk" in name or "cheese" in name for name in names)


def test_create_plan_rejects_unknown_patient_type(container) -> None:
    response = _client(container).post(
        "/plans",
        json={"goals": {"target_calories": 2000}, "patient": {"patient_type": "martian"}},
    )

    assert response.status_code == 422


def test_create_plan_with_request_foods(container) -> None:
    foods = [
        {"id": "F1", "name": "Rice, white, raw", "energy_kcal": 360, "carbs_g": 79},
        {"id": "F2", "name": "Chicken, breast, raw", "energy_kcal": 120, "protein_g": 22.5},
        {"id": "F3", "name": "Tomato, raw", "energy_kcal": 18, "carbs_g": 3.9},
    ]

    response = _client(container).post(
        "/plans",
        json={"goals": {"target_calories": 1500}, "seed": 4, "foods": foods},
    )

    assert response.status_code == 200
    ids = {item["food_id"] for meal in response.json()["meals"] for item in meal["items"]}
    assert ids <= {"F1", "F2", "F3"}
    assert ids


def test_create_week(container) -> None:
    response = _client(container).post(
        "/plans/week",
        json={"goals": {"target_calories": 2000}, "day_labels": ["Mon", "Tue"], "seed": 2},
    )

    assert response.status_code == 200
    assert [plan["day_label"] for plan in response.json()] == ["Mon", "Tue"]


def test_create_week_requires_a_day(container) -> None:
    response = _client(container).post(
        "/plans/week",
        json={"goals": {"target_calories": 2000}, "day_labels": []},
    )

    assert response.status_code == 422


def test_shopping_list(container) -> None:
    response = _client(container).post(
        "/shopping-list",
        json={"goals": {"target_calories": 2000}, "day_labels": ["Mon", "Tue"], "seed": 8},
    )

    assert response.status_code == 200
    sections = response.json()
    assert sections
    assert sections[0]["food_group"] == "protein"
    for section in sections:
        for item in section["items"]:
            assert item["gross_g"] >= item["net_g"] - 1
            assert item["practical_quantity"]


def test_catalog_search(container) -> None:
    client = _client(container)

    response = client.get("/catalog/search", params={"q": "rice"})
    limited = client.get("/catalog/search", params={"q": "raw", "limit": 2})

    assert response.status_code == 200
    assert [hit["name"] for hit in response.json()] == ["Rice, white, raw"]
    assert len(limited.json()) == 2


def test_catalog_search_requires_query(container) -> None:
    assert _client(container).get("/catalog/search").status_code == 422
