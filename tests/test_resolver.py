# ==============================================
# Tests for ThresholdResolver
# ==============================================
#
# TEST CASES:
# -----------
# class TestPrecedence       → profile < user < project < env < CLI
# class TestMalformedInput   → bad values are dropped with a warning
# class TestHelpers          → argv splitting, config generation, help
#
# ==============================================

import json

import pytest

from aden.errors import ConfigurationError
from aden.thresholds import (
    ThresholdResolver,
    default_config_paths,
    generate_config_file,
    split_threshold_args,
    threshold_help,
)


def write_json(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestPrecedence:
    def test_defaults_when_nothing_set(self):
        t = ThresholdResolver().resolve(environ={})
        assert t.high_frequency_threshold == 50
        assert t.profile_name == "default"

    def test_cli_over_profile(self):
        t = ThresholdResolver().resolve("discovery", environ={}, cli_overrides={"high-frequency": "25"})
        assert t.high_frequency_threshold == 25
        assert t.medium_frequency_threshold == 4
        assert t.profile_name == "discovery"

    def test_full_chain(self, tmp_path):
        user = write_json(tmp_path / "user.json", {"highFrequencyThreshold": 60, "mediumFrequencyThreshold": 30})
        project = write_json(tmp_path / "aden-config.json", {"highFrequencyThreshold": 70})
        environ = {"ADEN_HIGH_FREQUENCY_THRESHOLD": "80", "ADEN_MINIMUM_MIGRATION_SCORE": "45"}

        resolver = ThresholdResolver()
        t = resolver.resolve("conservative", [user, project], environ, {"--thresholds.fair": "12"})

        assert t.high_frequency_threshold == 80       # env beats both files
        assert t.medium_frequency_threshold == 30     # only the user file set it
        assert t.minimum_migration_score == 45
        assert t.fair_candidate_threshold == 12       # CLI
        assert t.excellent_candidate_threshold == 180  # untouched profile value

    def test_project_file_beats_user_file(self, tmp_path):
        user = write_json(tmp_path / "user.json", {"highFrequencyThreshold": 60})
        project = write_json(tmp_path / "aden-config.json", {"highFrequencyThreshold": 70})
        t = ThresholdResolver().resolve(config_paths=[user, project], environ={})
        assert t.high_frequency_threshold == 70

    def test_snake_case_file_keys(self, tmp_path):
        path = write_json(tmp_path / "c.json", {"high_read_write_ratio": 4})
        t = ThresholdResolver().resolve(config_paths=[path], environ={})
        assert t.high_read_write_ratio == 4.0

    def test_unknown_profile_is_fatal(self):
        with pytest.raises(ConfigurationError, match="Unknown migration profile: nope"):
            ThresholdResolver().resolve("nope", environ={})

    def test_default_config_paths(self, tmp_path):
        paths = default_config_paths(tmp_path, tmp_path / "u.json")
        assert paths == [tmp_path / "u.json", tmp_path / "aden-config.json"]


class TestMalformedInput:
    def test_bad_env_value_keeps_prior(self):
        resolver = ThresholdResolver()
        t = resolver.resolve("discovery", environ={"ADEN_HIGH_FREQUENCY_THRESHOLD": "abc"})
        assert t.high_frequency_threshold == 10
        assert any("ADEN_HIGH_FREQUENCY_THRESHOLD" in w for w in resolver.warnings)

    def test_bad_cli_value_keeps_prior(self, caplog):
        resolver = ThresholdResolver()
        t = resolver.resolve(environ={}, cli_overrides={"min-score": "lots", "strong": "90"})
        assert t.minimum_migration_score == 30
        assert t.strong_candidate_threshold == 90
        assert "Invalid numeric value for --thresholds.min-score" in caplog.text

    def test_fractional_value_for_integer_field(self, tmp_path):
        path = write_json(tmp_path / "c.json", {"mediumFrequencyThreshold": 12.5, "goodCandidateThreshold": 55.0})
        resolver = ThresholdResolver()
        t = resolver.resolve(config_paths=[path], environ={})
        assert t.medium_frequency_threshold == 20
        assert t.good_candidate_threshold == 55
        assert len(resolver.warnings) == 1

    def test_boolean_is_not_a_number(self, tmp_path):
        path = write_json(tmp_path / "c.json", {"highFrequencyThreshold": True})
        resolver = ThresholdResolver()
        t = resolver.resolve(config_paths=[path], environ={})
        assert t.high_frequency_threshold == 50
        assert resolver.warnings

    def test_unknown_cli_key_warns(self):
        resolver = ThresholdResolver()
        resolver.resolve(environ={}, cli_overrides={"turbo": "1"})
        assert resolver.warnings == ["Unknown threshold option: --thresholds.turbo"]

    def test_missing_file_is_silent(self, tmp_path):
        resolver = ThresholdResolver()
        resolver.resolve(config_paths=[tmp_path / "absent.json"], environ={})
        assert resolver.warnings == []

    def test_broken_file_warns(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        resolver = ThresholdResolver()
        t = resolver.resolve(config_paths=[path], environ={})
        assert t.high_frequency_threshold == 50
        assert any("Failed to load config" in w for w in resolver.warnings)

    def test_comment_key_ignored(self, tmp_path):
        path = write_json(tmp_path / "c.json", {"_comment": "hello", "fairCandidateThreshold": 25})
        resolver = ThresholdResolver()
        t = resolver.resolve(config_paths=[path], environ={})
        assert t.fair_candidate_threshold == 25
        assert resolver.warnings == []

    def test_inconsistent_result_is_reported_not_raised(self):
        resolver = ThresholdResolver()
        t = resolver.resolve(environ={}, cli_overrides={"high-frequency": "5"})
        assert t.high_frequency_threshold == 5
        assert any("should be greater" in w for w in resolver.warnings)

    def test_non_finite_env_value_keeps_prior(self):
        resolver = ThresholdResolver()
        t = resolver.resolve(environ={"ADEN_HIGH_READ_WRITE_RATIO": "nan"})
        assert t.high_read_write_ratio == 10.0
        assert resolver.warnings == ["Invalid numeric value for ADEN_HIGH_READ_WRITE_RATIO: 'nan'"]

    def test_non_finite_cli_and_file_values(self, tmp_path):
        path = write_json(tmp_path / "c.json", {"complexityPenaltyMultiplier": float("nan")})
        resolver = ThresholdResolver()
        t = resolver.resolve(config_paths=[path], environ={}, cli_overrides={"read-write-ratio": "inf"})
        assert t.complexity_penalty_multiplier == 1.0
        assert t.high_read_write_ratio == 10.0
        assert len(resolver.warnings) == 2

    def test_key_without_value_warns(self):
        resolver = ThresholdResolver()
        t = resolver.resolve(environ={}, cli_overrides={"high-frequency": None})
        assert t.high_frequency_threshold == 50
        assert resolver.warnings == ["Missing value for --thresholds.high-frequency"]


class TestHelpers:
    def test_split_threshold_args(self):
        overrides, rest = split_threshold_args(
            ["analyze", "b.json", "--thresholds.high-frequency", "25", "--thresholds.fair=5", "--output", "o.json"]
        )
        assert overrides == {"high-frequency": "25", "fair": "5"}
        assert rest == ["analyze", "b.json", "--output", "o.json"]

    def test_split_does_not_swallow_next_option(self):
        overrides, rest = split_threshold_args(
            ["analyze", "b.json", "--thresholds.high-frequency", "--profile", "retail", "--thresholds.min-score"]
        )
        assert overrides == {"high-frequency": None, "min-score": None}
        assert rest == ["analyze", "b.json", "--profile", "retail"]

    def test_negative_value_is_still_a_value(self):
        overrides, _ = split_threshold_args(["--thresholds.complexity-multiplier", "-1"])
        assert overrides == {"complexity-multiplier": "-1"}

    def test_generate_config_file(self, tmp_path):
        path = generate_config_file(tmp_path / "cfg", "financial")
        data = json.loads(path.read_text(encoding="utf-8"))
        assert path.name == "aden-config.json"
        assert data["_comment"].startswith("Conservative approach for financial")
        assert data["highFrequencyThreshold"] == 125
        assert data["minimumMigrationScore"] == 60

    def test_generated_file_resolves_to_profile_values(self, tmp_path):
        path = generate_config_file(tmp_path, "retail")
        resolver = ThresholdResolver()
        t = resolver.resolve(config_paths=[path], environ={})
        assert t.complex_query_requirement == 3
        assert t.high_read_write_ratio == 5.0
        assert resolver.warnings == []

    def test_generate_config_unknown_profile(self, tmp_path):
        with pytest.raises(ConfigurationError):
            generate_config_file(tmp_path, "nope")

    def test_threshold_help_mentions_every_source(self):
        text = threshold_help()
        assert "--thresholds.high-frequency" in text
        assert "ADEN_PRODUCTION_CO_ACCESS_THRESHOLD" in text
        assert "aden-config.json" in text
        assert "Priority Order" in text
