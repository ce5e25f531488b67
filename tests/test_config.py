"""Unit tests for the config module."""

from pathlib import Path

from pydantic import ValidationError
import pytest

from field_rank.config import Settings
from field_rank.parameters import FieldParameters, ScorerParameters


pytestmark = pytest.mark.unit


class TestConfig:
    """Test configuration loading and validation."""

    def test_values_from_test_environment(self):
        settings = Settings()

        assert settings.log_level == "warning"
        assert settings.json_logs is False
        assert settings.write_parameter_file is False
        assert settings.parameter_file == Path("bm25Para.txt")

    def test_parameters_default_to_scorer_defaults(self):
        settings = Settings()

        assert settings.parameters == ScorerParameters()

    def test_nested_parameter_override(self, monkeypatch):
        monkeypatch.setenv("FIELD_RANK_PARAMETERS__K1", "3.0")
        monkeypatch.setenv("FIELD_RANK_PARAMETERS__PAGE_RANK_LAMBDA", "0.5")

        settings = Settings()

        assert settings.parameters.k1 == 3.0
        assert settings.parameters.page_rank_lambda == 0.5
        assert settings.parameters.page_rank_lambda_prime == 0.7

    def test_nested_field_override_keeps_other_slope(self, monkeypatch):
        monkeypatch.setenv("FIELD_RANK_PARAMETERS__TITLE__WEIGHT", "2.0")

        settings = Settings()

        assert settings.parameters.title == FieldParameters(weight=2.0, b=0.7)

    def test_invalid_parameter_rejected(self, monkeypatch):
        monkeypatch.setenv("FIELD_RANK_PARAMETERS__K1", "-1")

        with pytest.raises(ValidationError):
            Settings()

    def test_log_level_is_normalized(self, monkeypatch):
        monkeypatch.setenv("FIELD_RANK_LOG_LEVEL", " DEBUG ")

        assert Settings().log_level == "debug"

    def test_unknown_log_level_rejected(self, monkeypatch):
        monkeypatch.setenv("FIELD_RANK_LOG_LEVEL", "verbose")

        with pytest.raises(ValidationError, match="log_level"):
            Settings()

    def test_unrelated_environment_is_ignored(self, monkeypatch):
        monkeypatch.setenv("FIELD_RANK_UNKNOWN_OPTION", "1")

        Settings()
