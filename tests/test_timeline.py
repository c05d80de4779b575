"""
SwiftCargo Timeline / ETA Test Suite
====================================
Covers: event sequence | timestamp clamping | cancelled branch | delivery estimate

The simulator works on anything with status, transport_mode, urgent_delivery
and created_at, so most tests use lightweight pseudo-orders.
"""

import random
from datetime import datetime, timedelta, timezone as dt_timezone
from types import SimpleNamespace

import pytest
from django.core.exceptions import ValidationError

from apps.orders.timeline import TimelineSimulator, build_tracking_view
from conftest import FixedRandom

CREATED = datetime(2026, 3, 2, 9, 0, tzinfo=dt_timezone.utc)   # a Monday
LATER   = CREATED + timedelta(days=30)


LOW  = FixedRandom(0)
HIGH = FixedRandom(10 ** 6)


def pseudo_order(status="pending", transport_mode="land", urgent=False, created_at=CREATED):
    return SimpleNamespace(
        status=status, transport_mode=transport_mode,
        urgent_delivery=urgent, created_at=created_at,
    )


# ═══════════════════════════════════════════════════════════════════════════════
# UNIT TESTS — Timeline
# ═══════════════════════════════════════════════════════════════════════════════

class TestTimeline:

    def test_pending_has_single_current_event(self):
        events = TimelineSimulator(rng=LOW).timeline(pseudo_order("pending"), now=LATER)
        assert [e.status for e in events] == ["pending"]
        only = events[0]
        assert only.is_current and not only.has_happened and not only.is_future
        assert only.timestamp == CREATED
        assert only.label == "Order Received"

    def test_delivered_land_lower_bounds(self):
        events = TimelineSimulator(rng=LOW).timeline(pseudo_order("delivered"), now=LATER)
        assert [e.status for e in events] == ["pending", "confirmed", "processing", "in_transit", "delivered"]
        offsets = [e.timestamp - CREATED for e in events]
        assert offsets == [
            timedelta(0), timedelta(hours=2), timedelta(hours=10),
            timedelta(hours=14), timedelta(hours=38),
        ]
        assert all(e.has_happened for e in events[:-1])
        assert events[-1].is_current and not events[-1].has_happened

    def test_air_delivery_upper_bounds(self):
        events = TimelineSimulator(rng=HIGH).timeline(pseudo_order("delivered", "air"), now=LATER)
        # 6 + 24 + 12 + 24 hours
        assert events[-1].timestamp - CREATED == timedelta(hours=66)

    def test_in_transit_icon_follows_transport_mode(self):
        sim = TimelineSimulator(rng=LOW)
        icons = {
            mode: sim.timeline(pseudo_order("in_transit", mode), now=LATER)[-1].icon
            for mode in ("land", "air", "ocean", "hovercraft")
        }
        assert icons == {"land": "🚛", "air": "✈️", "ocean": "🚢", "hovercraft": "🚚"}

    def test_unknown_mode_uses_default_delivery_hours(self):
        events = TimelineSimulator(rng=LOW).timeline(pseudo_order("delivered", "hovercraft"), now=LATER)
        assert events[-1].timestamp - events[-2].timestamp == timedelta(hours=48)

    def test_timestamps_clamped_to_now(self):
        now = CREATED + timedelta(hours=5)
        events = TimelineSimulator(rng=LOW).timeline(pseudo_order("in_transit"), now=now)
        assert events[1].timestamp == CREATED + timedelta(hours=2)
        assert events[2].timestamp == now
        assert events[3].timestamp == now

    def test_timestamps_monotonic_and_bounded(self):
        for seed in range(100):
            rng = random.Random(seed)
            status = rng.choice(["pending", "confirmed", "processing", "in_transit", "delivered", "cancelled"])
            mode   = rng.choice(["land", "air", "ocean"])
            now    = CREATED + timedelta(hours=rng.randint(0, 400))
            events = TimelineSimulator(rng=rng).timeline(pseudo_order(status, mode), now=now)
            stamps = [e.timestamp for e in events]
            assert stamps == sorted(stamps)
            assert all(CREATED <= ts <= now for ts in stamps)
            assert sum(e.is_current for e in events) == 1
            assert events[-1].status == status

    def test_cancelled_branch(self):
        events = TimelineSimulator(rng=LOW).timeline(pseudo_order("cancelled"), now=LATER)
        assert [e.status for e in events] == ["pending", "confirmed", "cancelled"]
        assert events[0].has_happened and events[1].has_happened
        cancelled = events[-1]
        assert cancelled.is_current and cancelled.is_cancelled
        assert cancelled.timestamp - events[1].timestamp == timedelta(hours=1)

    def test_deleted_order_rejected(self):
        with pytest.raises(ValidationError):
            TimelineSimulator(rng=LOW).timeline(pseudo_order("deleted"), now=LATER)

    def test_unknown_status_rejected(self):
        with pytest.raises(ValidationError):
            TimelineSimulator(rng=LOW).timeline(pseudo_order("lost_at_sea"), now=LATER)

    def test_default_rng_is_stable_per_order(self):
        order = pseudo_order("delivered", "ocean")
        first  = build_tracking_view(order, now=LATER)
        second = build_tracking_view(order, now=LATER)
        assert first == second


# ═══════════════════════════════════════════════════════════════════════════════
# UNIT TESTS — Delivery estimate
# ═══════════════════════════════════════════════════════════════════════════════

class TestDeliveryEstimate:

    def test_delivered(self):
        est = TimelineSimulator(rng=LOW).estimate(pseudo_order("delivered"), now=LATER)
        assert est.status == "delivered"
        assert est.message == "Package has been delivered"
        assert est.date is None and not est.is_estimate

    def test_cancelled(self):
        est = TimelineSimulator(rng=LOW).estimate(pseudo_order("cancelled"), now=LATER)
        assert est.status == "cancelled"
        assert est.message == "Order has been cancelled"
        assert est.days_remaining is None

    def test_pending_land_standard(self):
        est = TimelineSimulator(rng=LOW).estimate(pseudo_order("pending", "land"), now=CREATED)
        assert est.is_estimate
        assert est.message == "Standard delivery"
        assert est.estimated_at == CREATED + timedelta(days=2)
        assert est.date == (CREATED + timedelta(days=2)).date()
        assert est.day_name == "Wednesday"
        assert est.days_remaining == 2

    def test_urgent_air(self):
        est = TimelineSimulator(rng=HIGH).estimate(pseudo_order("confirmed", "air", urgent=True), now=CREATED)
        assert est.message == "Urgent delivery"
        # 1 day, minus half a day for confirmed progress
        assert est.estimated_at == CREATED + timedelta(hours=12)
        assert est.days_remaining == 1

    def test_in_transit_ocean_offset(self):
        est = TimelineSimulator(rng=LOW).estimate(pseudo_order("in_transit", "ocean"), now=CREATED)
        assert est.estimated_at == CREATED + timedelta(days=8, hours=12)
        assert est.days_remaining == 9

    def test_unknown_mode_uses_default_days(self):
        est = TimelineSimulator(rng=LOW).estimate(pseudo_order("pending", "hovercraft"), now=CREATED)
        assert est.estimated_at == CREATED + timedelta(days=3)

    def test_overdue_estimate_never_negative(self):
        est = TimelineSimulator(rng=LOW).estimate(pseudo_order("processing"), now=LATER)
        assert est.days_remaining == 0

    def test_deleted_order_rejected(self):
        with pytest.raises(ValidationError):
            TimelineSimulator(rng=LOW).estimate(pseudo_order("deleted"), now=LATER)


class TestTrackingView:

    def test_build_combines_timeline_and_estimate(self):
        view = build_tracking_view(pseudo_order("processing"), rng=LOW, now=LATER)
        assert [e.status for e in view.timeline] == ["pending", "confirmed", "processing"]
        assert view.estimate.status == "estimated"

    def test_as_dict(self):
        data = build_tracking_view(pseudo_order("pending"), rng=LOW, now=LATER).as_dict()
        assert set(data) == {"timeline", "estimate"}
        assert data["timeline"][0]["status"] == "pending"
        assert data["estimate"]["message"] == "Standard delivery"
