"""
Settings, Error Taxonomy and Logging Setup Tests.
"""

import pytest
import structlog

from etica.config import Settings
from etica.exceptions import ErrorCode, EticaError, RuleEvaluationError, UnknownReferenceError
from etica.observability import add_app_info, configure_logging


class TestSettings:

    def test_defaults(self):
        settings = Settings()
        assert settings.decision_factor == pytest.approx(0.35)
        assert settings.max_coverage_reduction == pytest.approx(0.7)
        assert settings.max_gaps_per_lens == 10
        assert settings.log_format == "console"

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("VIGILANCE_TENSION_FACTOR", "0.25")
        monkeypatch.setenv("ETICA_LOG_LEVEL", "debug")
        settings = Settings()
        assert settings.tension_factor == pytest.approx(0.25)
        assert settings.log_level == "debug"


class TestErrors:

    def test_base_error_to_dict(self):
        error = EticaError("boom", details={"x": 1})
        assert error.to_dict() == {"code": "E1000", "message": "boom", "details": {"x": 1}}

    def test_rule_evaluation_error(self):
        cause = ValueError("bad value")
        error = RuleEvaluationError("D-01", cause, stage="severity")
        assert error.code == ErrorCode.RULE_EVALUATION_FAILED
        assert error.details["error_type"] == "ValueError"
        assert "D-01" in str(error)
        assert isinstance(error, EticaError)

    def test_unknown_reference(self):
        error = UnknownReferenceError("lens", "ISO", code=ErrorCode.UNKNOWN_LENS)
        assert error.message == "Unknown lens: ISO"
        assert error.to_dict()["code"] == "E2002"


class TestLogging:

    @pytest.mark.parametrize("fmt", ["json", "console"])
    def test_configure_logging(self, fmt):
        try:
            configure_logging(level="DEBUG", fmt=fmt)
            assert structlog.is_configured()
        finally:
            structlog.reset_defaults()

    def test_events_carry_app_name_and_version(self):
        event = add_app_info(None, "info", {"event": "tension_detection_complete"})
        assert event["app"] == "ETICA Core"
        assert event["version"] == "1.0.0"

    def test_app_info_does_not_override_event_fields(self):
        event = add_app_info(None, "info", {"event": "x", "version": "custom"})
        assert event["version"] == "custom"
