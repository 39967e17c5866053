"""Tests for snap configuration."""

import dataclasses

import pytest

from trackplan.layout.settings import (
    DEFAULT_SNAP_SETTINGS,
    SnapSettings,
    load_snap_settings,
)

from conftest import EXAMPLE_CATALOG


class TestSnapSettings:
    """Tests for SnapSettings."""

    def test_defaults(self):
        assert DEFAULT_SNAP_SETTINGS.enabled is True
        assert DEFAULT_SNAP_SETTINGS.threshold == 50.0
        assert DEFAULT_SNAP_SETTINGS.show_indicators is True
        assert DEFAULT_SNAP_SETTINGS.strict_compatibility is False
        assert DEFAULT_SNAP_SETTINGS.angle_tolerance == 15.0

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_SNAP_SETTINGS.threshold = 10.0

    def test_with_overrides_leaves_original(self):
        tight = DEFAULT_SNAP_SETTINGS.with_overrides(threshold=10.0)
        assert tight.threshold == 10.0
        assert DEFAULT_SNAP_SETTINGS.threshold == 50.0

    def test_from_dict_camel_case(self):
        settings = SnapSettings.from_dict({
            "enabled": False,
            "threshold": 30,
            "showIndicators": False,
            "strictCompatibility": True,
            "angleTolerance": 5,
        })
        assert settings == SnapSettings(
            enabled=False,
            threshold=30.0,
            show_indicators=False,
            strict_compatibility=True,
            angle_tolerance=5.0,
        )

    def test_from_dict_snake_case(self):
        settings = SnapSettings.from_dict({"strict_compatibility": True})
        assert settings.strict_compatibility is True
        assert settings.threshold == 50.0

    def test_round_trip_dict(self):
        settings = SnapSettings(threshold=12.5, show_indicators=False)
        assert SnapSettings.from_dict(settings.to_dict()) == settings

    def test_unknown_key(self):
        with pytest.raises(ValueError, match="Unknown snap setting"):
            SnapSettings.from_dict({"snapRadius": 10})

    def test_negative_threshold(self):
        with pytest.raises(ValueError, match="non-negative"):
            SnapSettings.from_dict({"threshold": -1})

    def test_negative_tolerance(self):
        with pytest.raises(ValueError, match="non-negative"):
            SnapSettings.from_dict({"angleTolerance": -1})


class TestLoadSnapSettings:
    """Tests for YAML settings files."""

    def test_example_file(self):
        settings = load_snap_settings(EXAMPLE_CATALOG / "snap-settings.yaml")
        assert isinstance(settings, SnapSettings)
        assert settings.enabled is True

    def test_partial_file(self, tmp_path):
        path = tmp_path / "snap.yaml"
        path.write_text("threshold: 25\nstrictCompatibility: true\n")

        settings = load_snap_settings(path)

        assert settings.threshold == 25.0
        assert settings.strict_compatibility is True
        assert settings.show_indicators is True

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_snap_settings(path) == DEFAULT_SNAP_SETTINGS

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ValueError, match="mapping"):
            load_snap_settings(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            load_snap_settings(tmp_path / "nope.yaml")

    def test_non_finite_settings_rejected(self, tmp_path):
        path = tmp_path / "snap.yaml"
        path.write_text("threshold: .nan\n")
        with pytest.raises(ValueError, match="finite"):
            load_snap_settings(path)

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "snap.yaml"
        path.write_text("enabled: [unclosed\n")
        with pytest.raises(ValueError, match="Malformed snap settings"):
            load_snap_settings(path)


class TestNonFiniteSettings:
    """NaN and infinity never pass validation."""

    @pytest.mark.parametrize("key", ["threshold", "angleTolerance"])
    @pytest.mark.parametrize("value", [float("nan"), float("inf"), "nan", "-inf"])
    def test_rejected(self, key, value):
        with pytest.raises(ValueError, match="finite"):
            SnapSettings.from_dict({key: value})
