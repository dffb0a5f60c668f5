"""Unit tests for the plan catalog."""

import json
from decimal import Decimal

import pytest

from app.core.plans import DEFAULT_PLANS, MAX_PRICE_PER_UNIT, MAX_UNITS, Plan, PlanCatalog, build_catalog, load_catalog


@pytest.fixture
def catalog() -> PlanCatalog:
    return PlanCatalog(DEFAULT_PLANS)


def test_default_catalog_contents(catalog: PlanCatalog):
    assert [p.name for p in catalog] == ["Basic Plan", "Standard Plan", "Premium Plan", "Ultra Plan"]
    basic = catalog.find_plan("Basic Plan")
    assert basic.price_per_unit == Decimal("5")
    assert basic.units_included == 100
    assert basic.validity_days == 30
    assert basic.active is True
    assert catalog.find_plan("Ultra Plan").validity_days == 60


@pytest.mark.parametrize("name", ["Basic Plan", "basic plan", "BASIC PLAN", "bAsIc PlAn"])
def test_find_plan_is_case_insensitive(catalog: PlanCatalog, name: str):
    assert catalog.find_plan(name) is catalog.find_plan("Basic Plan")


@pytest.mark.parametrize("name", ["Basic", "Plan", "Basic Plan ", " Basic Plan", "Gold Plan", ""])
def test_find_plan_requires_exact_match(catalog: PlanCatalog, name: str):
    assert catalog.find_plan(name) is None


def test_find_plan_returns_inactive_plans():
    legacy = Plan("Legacy Plan", Decimal("6"), 50, 30, active=False)
    catalog = PlanCatalog((legacy,))
    assert catalog.find_plan("legacy plan") is legacy


def test_duplicate_names_rejected():
    with pytest.raises(ValueError):
        PlanCatalog((
            Plan("Basic Plan", Decimal("5"), 100, 30),
            Plan("BASIC PLAN", Decimal("4"), 200, 30),
        ))


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(name=" ", price_per_unit=Decimal("5"), units_included=100, validity_days=30),
        dict(name="X", price_per_unit=Decimal("0"), units_included=100, validity_days=30),
        dict(name="X", price_per_unit=Decimal("5"), units_included=0, validity_days=30),
        dict(name="X", price_per_unit=Decimal("5"), units_included=100, validity_days=-1),
        dict(name="X", price_per_unit=MAX_PRICE_PER_UNIT + 1, units_included=100, validity_days=30),
        dict(name="X", price_per_unit=Decimal("5"), units_included=int(MAX_UNITS) + 1, validity_days=30),
    ],
)
def test_invalid_plan_values_rejected(kwargs):
    with pytest.raises(ValueError):
        Plan(**kwargs)


def test_plans_are_immutable(catalog: PlanCatalog):
    basic = catalog.find_plan("Basic Plan")
    with pytest.raises(AttributeError):
        basic.price_per_unit = Decimal("1")


def test_load_catalog_defaults_without_path():
    assert load_catalog("").plans == DEFAULT_PLANS


def test_load_catalog_from_file(tmp_path):
    path = tmp_path / "plans.json"
    path.write_text(json.dumps([
        {"name": "Night Saver", "price_per_unit": 2.75, "units_included": 300, "validity_days": 30},
        {"name": "Retired", "price_per_unit": "9", "units_included": 10, "validity_days": 7, "active": False},
    ]))

    catalog = load_catalog(str(path))

    assert len(catalog) == 2
    night = catalog.find_plan("night saver")
    assert night.price_per_unit == Decimal("2.75")
    assert catalog.find_plan("Retired").active is False


def test_load_catalog_rejects_empty_list(tmp_path):
    path = tmp_path / "plans.json"
    path.write_text("[]")
    with pytest.raises(ValueError):
        load_catalog(str(path))


def test_build_catalog_reports_missing_field():
    with pytest.raises(ValueError, match="units_included"):
        build_catalog([{"name": "Broken", "price_per_unit": 1, "validity_days": 30}])


def test_plan_bounds_are_inclusive():
    plan = Plan("Bulk", MAX_PRICE_PER_UNIT, int(MAX_UNITS), 365)
    assert plan.price_per_unit == MAX_PRICE_PER_UNIT
    assert plan.units_included == MAX_UNITS
