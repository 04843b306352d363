"""
Tests for modeshift/simulation/zones.py module.

Tests cover:
- ZoneCategory enum
- compute_shift_index, compute_elasticity_score, estimate_threshold
- aggregate_zone and aggregate_zones
"""

import pytest

from modeshift.agents.base import (
    DurationType,
    IncomeBracket,
    Persona,
    TimeWindow,
    TypicalTrip,
)
from modeshift.data import load_reference_data
from modeshift.pricing.base import (
    ParkingZoneProfile,
    Scenario,
    TransitZoneProfile,
    baseline_scenario,
)
from modeshift.simulation.zones import (
    ZoneCategory,
    aggregate_zone,
    aggregate_zones,
    compute_elasticity_score,
    compute_shift_index,
    estimate_threshold,
)


@pytest.fixture(scope="module")
def reference():
    return load_reference_data()


@pytest.fixture
def parking_by_zone(reference):
    return {p.zone_id: p for p in reference.parking}


@pytest.fixture
def transit_by_zone(reference):
    return {t.zone_id: t for t in reference.transit}


@pytest.fixture
def poor_transit_centre():
    """Centre with cheap parking and almost no transit."""
    parking = ParkingZoneProfile(
        zone_id="centre", capacity=100, base_price=2.5, friction_index=0.2
    )
    transit = TransitZoneProfile(
        zone_id="centre",
        access_index=0.0,
        time_to_center_min=10,
        peak_headway_min=120,
        offpeak_headway_min=120,
        base_fare=10.0,
    )
    return parking, transit


@pytest.fixture
def captive_driver():
    """Low-income long-stay driver with no real alternative."""
    return Persona(
        persona_id="cd",
        label="Captive driver",
        trip=TypicalTrip(
            origin_zone="north",
            destination_zone="centre",
            time_window=TimeWindow.PEAK,
            duration=DurationType.LONG,
        ),
        value_of_time=30.0,
        schedule_rigidity=0.9,
        transit_affinity=0.1,
        car_dependency=0.9,
        income=IncomeBracket.LOW,
    )


class TestZoneCategory:
    """Tests for ZoneCategory enum."""

    @pytest.mark.parametrize(
        "score,category",
        [
            (100, ZoneCategory.HIGH_POTENTIAL),
            (60, ZoneCategory.HIGH_POTENTIAL),
            (59, ZoneCategory.MODERATE),
            (35, ZoneCategory.MODERATE),
            (34, ZoneCategory.LOW_POTENTIAL),
            (0, ZoneCategory.LOW_POTENTIAL),
        ],
    )
    def test_from_score(self, score, category):
        """Thresholds at 60 and 35."""
        assert ZoneCategory.from_score(score) == category

    def test_colours(self):
        """Traffic-light colours."""
        assert ZoneCategory.HIGH_POTENTIAL.colour == "green"
        assert ZoneCategory.MODERATE.colour == "orange"
        assert ZoneCategory.LOW_POTENTIAL.colour == "red"


class TestShiftIndex:
    """Tests for compute_shift_index function."""

    def test_relative_drop(self):
        """Shift is the relative fall in car share."""
        assert compute_shift_index(0.8, 0.6) == pytest.approx(0.25)

    def test_no_negative_shift(self):
        """A rise in car share clamps to zero."""
        assert compute_shift_index(0.4, 0.5) == 0.0

    def test_small_denominator_floor(self):
        """The denominator is floored at 0.01."""
        assert compute_shift_index(0.005, 0.0) == pytest.approx(0.5)

    def test_unchanged(self):
        """Equal shares give zero shift."""
        assert compute_shift_index(0.3, 0.3) == 0.0


class TestElasticityScore:
    """Tests for compute_elasticity_score function."""

    def test_weighted_sum(self):
        """Score combines shift, access, price signal and alternatives."""
        scenario = Scenario(centre_peak_price=4.5, enable_carpool=True)
        score = compute_elasticity_score(0.5, 0.9, scenario, baseline_scenario())
        # 30 + 10.8 + 4.8 + 10
        assert score == 56

    def test_clamped_high(self):
        """Score never exceeds 100."""
        scenario = Scenario(
            centre_peak_price=10.0,
            enable_carpool=True,
            enable_shuttle=True,
            enable_taxi_vouchers=True,
        )
        assert compute_elasticity_score(1.0, 1.0, scenario, baseline_scenario()) == 100

    def test_clamped_low(self):
        """A price cut cannot push the score below zero."""
        scenario = Scenario(centre_peak_price=0.0)
        assert compute_elasticity_score(0.0, 0.0, scenario, baseline_scenario()) == 0

    def test_integer(self):
        """Scores are integers."""
        score = compute_elasticity_score(0.33, 0.47, Scenario(), baseline_scenario())
        assert isinstance(score, int)

    def test_half_rounds_up(self):
        """An exact half rounds up rather than to even."""
        # 0.375 * 30 * 0.4 = 4.5
        score = compute_elasticity_score(0.0, 0.375, Scenario(), baseline_scenario())
        assert score == 5


class TestEstimateThreshold:
    """Tests for estimate_threshold function."""

    def test_centre(self, parking_by_zone, transit_by_zone):
        """Centre threshold rises as access falls."""
        threshold = estimate_threshold(parking_by_zone["centre"], transit_by_zone["centre"])
        assert threshold == pytest.approx(2.5 * 1.1)

    def test_floor(self, parking_by_zone, transit_by_zone):
        """Free parking still gives the 2 CHF/h floor."""
        threshold = estimate_threshold(
            parking_by_zone["periphery"], transit_by_zone["periphery"]
        )
        assert threshold == 2.0


class TestAggregateZone:
    """Tests for aggregate_zone function."""

    def test_no_personas(self, parking_by_zone, transit_by_zone):
        """A zone nobody visits gives no result."""
        result = aggregate_zone(
            "centre",
            parking_by_zone["centre"],
            transit_by_zone["centre"],
            [],
            Scenario(),
            baseline_scenario(),
        )
        assert result is None

    def test_baseline_against_itself(self, reference, parking_by_zone, transit_by_zone):
        """The baseline shows no shift and no equity risk."""
        baseline = baseline_scenario()
        result = aggregate_zone(
            "east",
            parking_by_zone["east"],
            transit_by_zone["east"],
            reference.personas,
            baseline,
            baseline,
        )
        assert result.shift_index == 0.0
        assert not result.equity_flag
        assert result.equity_reason is None
        assert result.mode_split.as_array().sum() == pytest.approx(1.0)

    def test_price_rise_shifts_car(self, reference, parking_by_zone, transit_by_zone):
        """A steep centre peak price empties cars in a well-served zone."""
        result = aggregate_zone(
            "east",
            parking_by_zone["east"],
            transit_by_zone["east"],
            reference.personas,
            Scenario(centre_peak_price=6.0),
            baseline_scenario(),
        )
        assert result.shift_index > 0.5
        assert 0 <= result.elasticity_score <= 100
        assert result.category == ZoneCategory.from_score(result.elasticity_score)

    def test_threshold_only_for_centre(self, reference, parking_by_zone, transit_by_zone):
        """Only the centre zone carries a price threshold."""
        args = (reference.personas, Scenario(centre_peak_price=4.0), baseline_scenario())
        centre = aggregate_zone(
            "centre", parking_by_zone["centre"], transit_by_zone["centre"], *args
        )
        gare = aggregate_zone("gare", parking_by_zone["gare"], transit_by_zone["gare"], *args)
        assert centre.estimated_threshold == pytest.approx(2.75)
        assert gare.estimated_threshold is None

    def test_equity_flag(self, poor_transit_centre, captive_driver):
        """Low-income driver facing a steep rise without alternative is flagged."""
        parking, transit = poor_transit_centre
        result = aggregate_zone(
            "centre",
            parking,
            transit,
            [captive_driver],
            Scenario(centre_peak_price=5.0),
            baseline_scenario(),
        )
        assert result.equity_flag
        assert result.equity_reason == "Personas at risk: Captive driver"

    def test_carpool_defuses_equity_flag(self, poor_transit_centre, captive_driver):
        """An offered carpool counts as an alternative."""
        parking, transit = poor_transit_centre
        result = aggregate_zone(
            "centre",
            parking,
            transit,
            [captive_driver],
            Scenario(centre_peak_price=5.0, enable_carpool=True),
            baseline_scenario(),
        )
        assert not result.equity_flag

    def test_label_precedence(self, reference, parking_by_zone, transit_by_zone):
        """Explicit labels win over the built-in table."""
        args = (reference.personas, Scenario(), baseline_scenario())
        labelled = aggregate_zone(
            "gare", parking_by_zone["gare"], transit_by_zone["gare"], *args, label="Gare CFF"
        )
        default = aggregate_zone(
            "gare", parking_by_zone["gare"], transit_by_zone["gare"], *args
        )
        assert labelled.label == "Gare CFF"
        assert default.label == "Station (Gare)"


class TestAggregateZones:
    """Tests for aggregate_zones function."""

    def test_all_reference_zones(self, reference, parking_by_zone, transit_by_zone):
        """Every reference zone has personas and both profiles."""
        results = aggregate_zones(
            parking_by_zone,
            transit_by_zone,
            reference.personas,
            Scenario(),
            baseline_scenario(),
            zone_labels=reference.zone_labels,
        )
        assert [r.zone_id for r in results] == list(parking_by_zone)

    def test_zone_without_transit_skipped(self, reference, parking_by_zone, transit_by_zone):
        """A zone lacking a transit profile is left out."""
        transit = dict(transit_by_zone)
        del transit["north"]
        results = aggregate_zones(
            parking_by_zone,
            transit,
            reference.personas,
            Scenario(),
            baseline_scenario(),
        )
        zone_ids = [r.zone_id for r in results]
        assert "north" not in zone_ids
        assert len(zone_ids) == len(parking_by_zone) - 1
