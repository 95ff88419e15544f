"""Tests for the sprint namer exception hierarchy."""

from sprintnamer.exceptions import (
    AuthenticationError,
    CapacityExceededError,
    ConfigurationError,
    InvalidInputError,
    SprintNamerError,
    UpstreamError,
)


class TestSprintNamerError:
    """Tests for the base SprintNamerError class."""

    def test_error_message(self):
        """Should store and return message."""
        error = SprintNamerError("Something went wrong")
        assert error.message == "Something went wrong"
        assert str(error) == "Something went wrong"

    def test_error_code(self):
        assert SprintNamerError("test").code == "sprint_namer_error"

    def test_to_dict(self):
        """Should convert to API-friendly dict."""
        assert SprintNamerError("Something went wrong").to_dict() == {
            "error": {
                "code": "sprint_namer_error",
                "message": "Something went wrong",
            }
        }

    def test_inheritance(self):
        """All custom exceptions should inherit from SprintNamerError."""
        exceptions = [
            InvalidInputError("seed", "bad"),
            AuthenticationError("invalid"),
            CapacityExceededError(pending=5, max_pending=5),
            UpstreamError("failed"),
            ConfigurationError("missing"),
        ]
        for exc in exceptions:
            assert isinstance(exc, SprintNamerError)
            assert isinstance(exc, Exception)


class TestInvalidInputError:
    """Tests for InvalidInputError."""

    def test_field_and_message(self):
        error = InvalidInputError("seed", "`seed` is required")
        assert error.field == "seed"
        assert error.message == "`seed` is required"
        assert error.code == "invalid_input"

    def test_to_dict_includes_field(self):
        assert InvalidInputError("page_id", "`page_id` is required").to_dict() == {
            "error": {
                "code": "invalid_input",
                "field": "page_id",
                "message": "`page_id` is required",
            }
        }


class TestCapacityExceededError:
    """Tests for CapacityExceededError."""

    def test_attributes(self):
        error = CapacityExceededError(pending=50, max_pending=50)
        assert error.pending == 50
        assert error.max_pending == 50
        assert error.retry_after == 5
        assert error.message == "Server is busy, try again later"

    def test_to_dict_includes_retry_after(self):
        error = CapacityExceededError(pending=1, max_pending=1, retry_after=30)
        assert error.to_dict()["error"]["retry_after"] == 30
        assert error.to_dict()["error"]["code"] == "capacity_exceeded"


class TestUpstreamError:
    """Tests for UpstreamError."""

    def test_attributes(self):
        error = UpstreamError("Notion API request failed: 404", status=404, body='{"code":"x"}')
        assert error.status == 404
        assert error.body == '{"code":"x"}'

    def test_to_dict_omits_body(self):
        error = UpstreamError("Notion API request failed: 500", status=500, body="secret detail")
        result = error.to_dict()

        assert result == {
            "error": {
                "code": "upstream_error",
                "status": 500,
                "message": "Notion API request failed: 500",
            }
        }

    def test_status_optional(self):
        assert UpstreamError("timed out").status is None


class TestOtherErrors:
    """Tests for the remaining error codes."""

    def test_authentication_error_code(self):
        assert AuthenticationError("bad").code == "authentication_error"

    def test_configuration_error_code(self):
        assert ConfigurationError("missing").code == "configuration_error"
