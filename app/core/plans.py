"""
Electricity plan catalog.

Plans are fixed for the lifetime of the process. The catalog is an immutable
value handed to the bill processor, so alternate catalogs can be swapped in
via PLANS_FILE or directly in tests.
"""

import json
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Tuple

# Bounds keep every derived amount inside the bill_payments column precision
MAX_UNITS = Decimal("1000000000")
MAX_PRICE_PER_UNIT = Decimal("1000000")


@dataclass(frozen=True)
class Plan:
    """A named prepaid tariff."""
    name: str
    price_per_unit: Decimal
    units_included: int
    validity_days: int
    active: bool = True

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("Plan name cannot be empty")
        if self.price_per_unit <= 0:
            raise ValueError(f"Plan {self.name!r}: price_per_unit must be positive")
        if self.price_per_unit > MAX_PRICE_PER_UNIT:
            raise ValueError(f"Plan {self.name!r}: price_per_unit cannot exceed {MAX_PRICE_PER_UNIT}")
        if self.units_included <= 0:
            raise ValueError(f"Plan {self.name!r}: units_included must be positive")
        if self.units_included > MAX_UNITS:
            raise ValueError(f"Plan {self.name!r}: units_included cannot exceed {MAX_UNITS}")
        if self.validity_days <= 0:
            raise ValueError(f"Plan {self.name!r}: validity_days must be positive")


@dataclass(frozen=True)
class PlanCatalog:
    """Read-only lookup table of plans, keyed case-insensitively by name."""
    plans: Tuple[Plan, ...]

    def __post_init__(self) -> None:
        seen = set()
        for plan in self.plans:
            key = plan.name.lower()
            if key in seen:
                raise ValueError(f"Duplicate plan name: {plan.name!r}")
            seen.add(key)

    def find_plan(self, name: str) -> Optional[Plan]:
        """Exact, case-insensitive match on the plan name.

        Inactive plans are returned too; callers check ``active`` themselves.
        """
        wanted = name.lower()
        for plan in self.plans:
            if plan.name.lower() == wanted:
                return plan
        return None

    def __len__(self) -> int:
        return len(self.plans)

    def __iter__(self):
        return iter(self.plans)


DEFAULT_PLANS: Tuple[Plan, ...] = (
    Plan("Basic Plan", Decimal("5"), 100, 30),
    Plan("Standard Plan", Decimal("4.5"), 250, 30),
    Plan("Premium Plan", Decimal("4"), 500, 30),
    Plan("Ultra Plan", Decimal("3.5"), 1000, 60),
)


def plan_from_dict(raw: Dict[str, Any]) -> Plan:
    """Build a Plan from a JSON object using the catalog file's field names."""
    try:
        return Plan(
            name=str(raw["name"]),
            price_per_unit=Decimal(str(raw["price_per_unit"])),
            units_included=int(raw["units_included"]),
            validity_days=int(raw["validity_days"]),
            active=bool(raw.get("active", True)),
        )
    except KeyError as exc:
        raise ValueError(f"Plan entry missing field {exc.args[0]!r}: {raw!r}") from exc


def build_catalog(entries: Iterable[Dict[str, Any]]) -> PlanCatalog:
    return PlanCatalog(tuple(plan_from_dict(entry) for entry in entries))


def load_catalog(path: str = "") -> PlanCatalog:
    """
    Load the plan catalog.

    Args:
        path: JSON file holding a list of plan objects. Empty means the
            built-in default plans.

    Returns:
        PlanCatalog

    Raises:
        ValueError: If the file is malformed or describes an invalid plan
    """
    if not path:
        return PlanCatalog(DEFAULT_PLANS)

    with Path(path).open(encoding="utf-8") as fh:
        data = json.load(fh)
    if not isinstance(data, list) or not data:
        raise ValueError(f"Plan file {path} must contain a non-empty JSON list")
    return build_catalog(data)
