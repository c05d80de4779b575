"""
Pricing engine — shipping cost for a weight / transport mode / urgency.

    effective_rate = base_rate * (1 + variation)      variation ∈ [-20%, +20%]
    base_cost      = max(weight * effective_rate, minimum_charge)
    surcharge      = base_cost * 50%   (urgent only)
    total          = base_cost + surcharge

The variation is drawn from an injected random source so callers can pin it.
Two estimates for the same input are allowed to differ.
"""

import random
from dataclasses import dataclass, asdict
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from django.core.exceptions import ValidationError

from .status import TransportMode, parse_transport_mode

CENT = Decimal("0.01")
MAX_WEIGHT_KG = Decimal("1000")


def _money(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class CostBreakdown:
    transport_mode:   str
    weight:           Decimal
    urgent:           bool
    calculated_cost:  Decimal
    minimum_charge:   Decimal
    base_cost:        Decimal
    urgent_surcharge: Decimal
    total_cost:       Decimal
    minimum_applied:  bool
    effective_rate:   Decimal

    def as_dict(self) -> dict:
        return asdict(self)


class PricingEngine:
    """
    Rate-table pricing with a randomized per-kg rate.
    `rng` is anything with randint(a, b); defaults to the module RNG.
    """

    BASE_RATES = {
        TransportMode.LAND:  Decimal("12"),
        TransportMode.AIR:   Decimal("30"),
        TransportMode.OCEAN: Decimal("6"),
    }
    MINIMUM_CHARGES = {
        TransportMode.LAND:  Decimal("25"),
        TransportMode.AIR:   Decimal("75"),
        TransportMode.OCEAN: Decimal("15"),
    }
    URGENT_RATE = Decimal("0.5")

    def __init__(self, rng=None, variation_pct: int = 20):
        self.rng = rng or random
        self.variation_pct = variation_pct

    def validate_weight(self, weight) -> Decimal:
        try:
            value = weight if isinstance(weight, Decimal) else Decimal(str(weight))
        except (InvalidOperation, TypeError, ValueError):
            raise ValidationError("Package weight must be a number.", code="invalid_weight")
        if not value.is_finite() or value <= 0 or value > MAX_WEIGHT_KG:
            raise ValidationError(
                "Package weight must be greater than 0 and at most 1000 kg", code="invalid_weight",
            )
        return value

    def sample_variation(self) -> Decimal:
        pct = self.rng.randint(-self.variation_pct, self.variation_pct)
        return Decimal(pct) / Decimal(100)

    def calculate(self, weight, transport_mode, urgent=False) -> CostBreakdown:
        mode   = parse_transport_mode(transport_mode)
        weight = self.validate_weight(weight)
        urgent = bool(urgent)

        rate           = self.BASE_RATES[mode] * (1 + self.sample_variation())
        calculated     = weight * rate
        minimum        = self.MINIMUM_CHARGES[mode]
        base_cost      = _money(max(calculated, minimum))
        surcharge      = _money(base_cost * self.URGENT_RATE) if urgent else _money(Decimal("0"))

        return CostBreakdown(
            transport_mode   = mode.value,
            weight           = weight,
            urgent           = urgent,
            calculated_cost  = _money(calculated),
            minimum_charge   = _money(minimum),
            base_cost        = base_cost,
            urgent_surcharge = surcharge,
            total_cost       = base_cost + surcharge,
            minimum_applied  = calculated < minimum,
            effective_rate   = _money(rate),
        )


def estimate_shipping_cost(weight, transport_mode, urgent=False, rng=None) -> CostBreakdown:
    return PricingEngine(rng=rng).calculate(weight, transport_mode, urgent)
