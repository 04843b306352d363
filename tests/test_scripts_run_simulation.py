"""
Tests for scripts/run_simulation.py helpers.

Tests cover:
- resolve_reference_path function
"""

from pathlib import Path

from modeshift.data import DEFAULT_REFERENCE_PATH
from scripts.run_simulation import resolve_reference_path


class TestResolveReferencePath:
    """Tests for resolve_reference_path function."""

    def test_default(self):
        """Without override or config entry the packaged dataset is used."""
        assert resolve_reference_path({}) == DEFAULT_REFERENCE_PATH

    def test_empty_reference_section(self):
        """A `reference:` key with no value falls back to the default."""
        assert resolve_reference_path({"reference": None}) == DEFAULT_REFERENCE_PATH

    def test_config_path(self):
        """A configured path is used when there is no override."""
        config = {"reference": {"path": "data/other.yaml"}}
        assert resolve_reference_path(config) == Path("data/other.yaml")

    def test_override_wins(self):
        """The command-line path takes precedence over the config."""
        config = {"reference": {"path": "data/other.yaml"}}
        assert resolve_reference_path(config, Path("cli.yaml")) == Path("cli.yaml")
