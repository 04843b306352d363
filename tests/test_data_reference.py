"""
Tests for modeshift/data/reference.py module.

Tests cover:
- Loading the packaged dataset
- parse_persona function
- Error handling for missing files and bad records
"""

import pytest
import yaml

from modeshift.agents.base import DurationType, IncomeBracket, TimeWindow
from modeshift.data.reference import (
    DEFAULT_REFERENCE_PATH,
    ReferenceDataError,
    load_reference_data,
    parse_persona,
)


class TestPackagedDataset:
    """Tests for the packaged Sion dataset."""

    @pytest.fixture
    def reference(self):
        """Load the default reference data."""
        return load_reference_data()

    def test_file_exists(self):
        """The dataset ships with the package."""
        assert DEFAULT_REFERENCE_PATH.exists()

    def test_counts(self, reference):
        """Eight zones with both profiles and nine personas."""
        assert len(reference.parking) == 8
        assert len(reference.transit) == 8
        assert len(reference.personas) == 9
        assert set(reference.zone_ids) == {t.zone_id for t in reference.transit}

    def test_zone_labels(self, reference):
        """Display labels are read from the zones section."""
        assert reference.zone_labels["gare"] == "Station (Gare)"
        assert reference.zone_labels["periphery"] == "Periphery"

    def test_profiles_in_range(self, reference):
        """Indices lie in [0, 1] and prices are non-negative."""
        for p in reference.parking:
            assert 0 <= p.friction_index <= 1
            assert p.base_price >= 0
        for t in reference.transit:
            assert 0 <= t.access_index <= 1
            assert 0 <= t.max_offpeak_discount <= 1

    def test_persona_ids_unique(self, reference):
        """Persona identifiers are unique."""
        ids = [p.persona_id for p in reference.personas]
        assert len(ids) == len(set(ids))

    def test_persona_lookup(self, reference):
        """Personas can be looked up by id."""
        nurse = reference.persona("p07")
        assert nurse is not None
        assert nurse.is_low_income
        assert "irregular hours" in nurse.tags
        assert reference.persona("missing") is None


class TestParsePersona:
    """Tests for parse_persona function."""

    def test_minimal_record(self):
        """Optional fields fall back to defaults."""
        persona = parse_persona(
            {
                "persona_id": 7,
                "label": "Visitor",
                "value_of_time": 20,
                "schedule_rigidity": 0.4,
                "transit_affinity": 0.5,
                "car_dependency": 0.5,
                "trip": {"origin_zone": "east", "destination_zone": "centre"},
            }
        )
        assert persona.persona_id == "7"
        assert persona.income == IncomeBracket.MEDIUM
        assert persona.trip.time_window == TimeWindow.PEAK
        assert persona.trip.duration == DurationType.SHORT
        assert persona.alternatives == ()

    def test_missing_field_raises(self):
        """A record without a trip cannot be parsed."""
        with pytest.raises(KeyError):
            parse_persona({"persona_id": "x", "label": "X"})


class TestLoadErrors:
    """Tests for load_reference_data error handling."""

    def test_missing_file(self, tmp_path):
        """A missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_reference_data(tmp_path / "nope.yaml")

    def test_bad_parking_record(self, tmp_path):
        """A parking record without capacity is rejected."""
        path = tmp_path / "bad.yaml"
        path.write_text(
            yaml.safe_dump({"parking": [{"zone_id": "centre", "base_price": 2.5}]})
        )
        with pytest.raises(ReferenceDataError, match="parking record #0"):
            load_reference_data(path)

    def test_bad_income(self, tmp_path):
        """An unknown income bracket is rejected."""
        record = {
            "persona_id": "p",
            "label": "P",
            "value_of_time": 20,
            "schedule_rigidity": 0.4,
            "transit_affinity": 0.5,
            "car_dependency": 0.5,
            "income": "rich",
            "trip": {"origin_zone": "east", "destination_zone": "centre"},
        }
        path = tmp_path / "bad.yaml"
        path.write_text(yaml.safe_dump({"personas": [record]}))
        with pytest.raises(ReferenceDataError, match="persona record #0"):
            load_reference_data(path)

    def test_empty_file(self, tmp_path):
        """An empty file gives empty reference data."""
        path = tmp_path / "empty.yaml"
        path.write_text("")
        reference = load_reference_data(path)
        assert reference.parking == []
        assert reference.personas == []
