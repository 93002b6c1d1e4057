"""Tests for Config."""

from dataclasses import FrozenInstanceError

import pytest

from replicate_client import __version__
from replicate_client.config import DEFAULT_BASE_URL, Config
from replicate_client.errors import ConfigError, MissingCredentialsError


ENV_VARS = (
    "REPLICATE_API_TOKEN",
    "REPLICATE_BASE_URL",
    "REPLICATE_TIMEOUT",
    "REPLICATE_VERIFY_SSL",
    "REPLICATE_POLL_INTERVAL_MS",
    "REPLICATE_MAX_POLL_ATTEMPTS",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):  # pylint: disable=unused-argument,redefined-outer-name
    """from_env() without variables falls back to the defaults."""
    config = Config.from_env()
    assert config.api_token is None
    assert config.base_url == DEFAULT_BASE_URL == "https://api.replicate.com/v1"
    assert config.user_agent == f"replicate-client/{__version__}"
    assert config.timeout is None
    assert config.verify_ssl is True
    assert config.poll_interval_ms == 1000
    assert config.max_poll_attempts == 600


def test_from_env_reads_variables(clean_env):  # pylint: disable=redefined-outer-name
    """Every REPLICATE_* variable is honoured."""
    clean_env.setenv("REPLICATE_API_TOKEN", "r8_secret")
    clean_env.setenv("REPLICATE_BASE_URL", "http://localhost:5000/v1")
    clean_env.setenv("REPLICATE_TIMEOUT", "2.5")
    clean_env.setenv("REPLICATE_VERIFY_SSL", "false")
    clean_env.setenv("REPLICATE_POLL_INTERVAL_MS", "200")
    clean_env.setenv("REPLICATE_MAX_POLL_ATTEMPTS", "0")

    config = Config.from_env()
    assert config.api_token == "r8_secret"
    assert config.base_url == "http://localhost:5000/v1"
    assert config.timeout == 2.5
    assert config.verify_ssl is False
    assert config.poll_interval_ms == 200
    assert config.max_poll_attempts is None


def test_check_auth_raises_without_token():
    """An empty token fails validation."""
    with pytest.raises(MissingCredentialsError):
        Config(api_token="").check_auth()
    Config(api_token="token").check_auth()


def test_config_is_immutable():
    """Config cannot be mutated after construction."""
    config = Config(api_token="token")
    with pytest.raises(FrozenInstanceError):
        config.api_token = "other"  # type: ignore[misc]


def test_url_joins_without_double_slashes():
    """url() normalises slashes between base and path."""
    config = Config(base_url="http://host/v1/")
    assert config.url("/predictions") == "http://host/v1/predictions"
    assert config.url("models/a/b") == "http://host/v1/models/a/b"


def test_default_retry_policy_uses_poll_settings():
    """The default policy mirrors the poll fields."""
    policy = Config(poll_interval_ms=50, max_poll_attempts=4).default_retry_policy()
    assert policy.max_attempts == 4
    assert policy.strategy.delay_ms == 50


@pytest.mark.parametrize(
    "name, value",
    [
        ("REPLICATE_POLL_INTERVAL_MS", "fast"),
        ("REPLICATE_POLL_INTERVAL_MS", "-5"),
        ("REPLICATE_MAX_POLL_ATTEMPTS", "1.5"),
        ("REPLICATE_TIMEOUT", "soon"),
    ],
)
def test_malformed_number_raises_config_error(clean_env, name, value):  # pylint: disable=redefined-outer-name
    """A bad numeric variable is a ConfigError naming the variable."""
    clean_env.setenv(name, value)
    with pytest.raises(ConfigError) as excinfo:
        Config.from_env()
    assert name in str(excinfo.value)
    assert not isinstance(excinfo.value, MissingCredentialsError)


def test_empty_numbers_fall_back_to_defaults(clean_env):  # pylint: disable=redefined-outer-name
    """Empty numeric variables behave as if unset."""
    for name in ("REPLICATE_TIMEOUT", "REPLICATE_POLL_INTERVAL_MS", "REPLICATE_MAX_POLL_ATTEMPTS"):
        clean_env.setenv(name, " ")
    config = Config.from_env()
    assert config.timeout is None
    assert config.poll_interval_ms == 1000
    assert config.max_poll_attempts == 600


def test_missing_credentials_is_a_config_error():
    """Callers can catch every configuration problem at once."""
    assert issubclass(MissingCredentialsError, ConfigError)
