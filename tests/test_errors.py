import pytest

from atelier.errors import (
    ConfigurationError,
    ConnectivityError,
    GenerationError,
    ProcessingError,
    RateLimitError,
    ResponseParseError,
    ServiceError,
    raise_user_facing,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (RuntimeError("429 RESOURCE_EXHAUSTED"), RateLimitError),
        (RuntimeError("Quota exceeded for project"), RateLimitError),
        (RuntimeError("XHR error"), ConnectivityError),
        (RuntimeError("Failed to fetch"), ConnectivityError),
        (OSError("network is unreachable"), ConnectivityError),
        (RuntimeError("400 INVALID_ARGUMENT"), ProcessingError),
        (ResponseParseError("Response is not valid JSON"), ProcessingError),
        (GenerationError("no image"), ProcessingError),
    ],
)
def test_maps_to_fixed_category(raw, expected):
    with pytest.raises(expected) as exc_info:
        raise_user_facing(raw)
    assert str(exc_info.value) == expected.message
    assert exc_info.value.__cause__ is raw


def test_rate_limit_wins_over_connectivity():
    with pytest.raises(RateLimitError):
        raise_user_facing(RuntimeError("network said 429"))


def test_configuration_error_passes_through():
    error = ConfigurationError()
    with pytest.raises(ConfigurationError) as exc_info:
        raise_user_facing(error)
    assert exc_info.value is error


def test_all_categories_are_service_errors():
    for cls in (RateLimitError, ConnectivityError, ProcessingError, ConfigurationError):
        assert issubclass(cls, ServiceError)
        assert issubclass(cls, RuntimeError)
