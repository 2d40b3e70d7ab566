"""
Configuration management.

ClientConfig holds the connection settings of a ZenMoneyClient and is
immutable once built. Config adds the API token and is what the CLI loads
from YAML (with environment overrides).

Key invariants:
- base_url always ends with "/" so endpoints ("diff/", "suggest/") append cleanly
- A client never reads process-wide settings; everything comes in through ClientConfig
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

DEFAULT_BASE_URL = "https://api.zenmoney.ru/v8/"
DEFAULT_TIMEOUT = 30.0
DEFAULT_RETRY_ATTEMPTS = 3
DEFAULT_RETRY_WAIT_TIME = 1.0


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    pass


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass(frozen=True)
class ClientConfig:
    """Connection settings for the ZenMoney API.

    - base_url: API root, endpoints are appended to it
    - timeout: per-attempt HTTP timeout (seconds)
    - retry_attempts: extra attempts after a transport failure
    - retry_wait_time: fixed pause between attempts (seconds)
    """

    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    retry_attempts: int = DEFAULT_RETRY_ATTEMPTS
    retry_wait_time: float = DEFAULT_RETRY_WAIT_TIME

    def __post_init__(self) -> None:
        if isinstance(self.base_url, str) and self.base_url and not self.base_url.endswith("/"):
            object.__setattr__(self, "base_url", self.base_url + "/")

    def validate(self) -> list[str]:
        """Validate settings.

        Returns:
            List of validation errors (empty if valid)
        """
        errors: list[str] = []

        if not self.base_url:
            errors.append("base_url is required")
        elif not isinstance(self.base_url, str):
            errors.append(f"base_url must be a string, got {self.base_url!r}")
        elif not self.base_url.startswith(("http://", "https://")):
            errors.append(f"base_url must be an http(s) URL: {self.base_url}")
        if not _is_number(self.timeout):
            errors.append(f"timeout must be a number, got {self.timeout!r}")
        elif self.timeout <= 0:
            errors.append("timeout must be positive")
        if not isinstance(self.retry_attempts, int) or isinstance(self.retry_attempts, bool):
            errors.append(f"retry_attempts must be an integer, got {self.retry_attempts!r}")
        elif self.retry_attempts < 0:
            errors.append("retry_attempts must not be negative")
        if not _is_number(self.retry_wait_time):
            errors.append(f"retry_wait_time must be a number, got {self.retry_wait_time!r}")
        elif self.retry_wait_time < 0:
            errors.append("retry_wait_time must not be negative")

        return errors


@dataclass
class Config:
    """Application configuration used by the CLI."""

    token: str = ""
    client: ClientConfig = field(default_factory=ClientConfig)

    def validate(self) -> list[str]:
        """Validate configuration completeness and consistency."""
        errors: list[str] = []

        if not self.token:
            errors.append("token is required (set it in the config file or ZENMONEY_TOKEN)")
        errors.extend(f"client.{e}" for e in self.client.validate())

        return errors


def _env_number(name: str, key: str, fallback, cast):
    raw = os.environ.get(name)
    source = name
    if not raw:
        raw, source = fallback, f"client.{key}"
    try:
        return cast(raw)
    except (TypeError, ValueError) as e:
        raise ConfigValidationError(f"{source} must be a number, got {raw!r}") from e


def load_config(config_path: Path) -> Config:
    """
    Load configuration from YAML file.

    Environment variables override config values:
    - ZENMONEY_TOKEN
    - ZENMONEY_BASE_URL
    - ZENMONEY_TIMEOUT (seconds)
    - ZENMONEY_RETRY_ATTEMPTS
    - ZENMONEY_RETRY_WAIT (seconds)

    A missing file is not an error; defaults and environment are used.
    """
    if config_path.exists():
        with open(config_path) as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigValidationError(f"Invalid YAML in {config_path}: {e}") from e
    else:
        data = {}

    if not isinstance(data, dict):
        raise ConfigValidationError(f"{config_path} must contain a mapping at the top level")

    client_data = data.get("client") or {}
    if not isinstance(client_data, dict):
        raise ConfigValidationError(f"'client' in {config_path} must be a mapping")

    client = ClientConfig(
        base_url=os.environ.get("ZENMONEY_BASE_URL", client_data.get("base_url", DEFAULT_BASE_URL)),
        timeout=_env_number(
            "ZENMONEY_TIMEOUT", "timeout", client_data.get("timeout", DEFAULT_TIMEOUT), float
        ),
        retry_attempts=_env_number(
            "ZENMONEY_RETRY_ATTEMPTS",
            "retry_attempts",
            client_data.get("retry_attempts", DEFAULT_RETRY_ATTEMPTS),
            int,
        ),
        retry_wait_time=_env_number(
            "ZENMONEY_RETRY_WAIT",
            "retry_wait_time",
            client_data.get("retry_wait_time", DEFAULT_RETRY_WAIT_TIME),
            float,
        ),
    )

    return Config(
        token=os.environ.get("ZENMONEY_TOKEN", data.get("token") or ""),
        client=client,
    )


def create_default_config(config_path: Path) -> None:
    """Create a default configuration file."""
    default_config = f"""# ZenMoney sync client configuration
#
# Environment variables override these values:
#   ZENMONEY_TOKEN, ZENMONEY_BASE_URL, ZENMONEY_TIMEOUT,
#   ZENMONEY_RETRY_ATTEMPTS, ZENMONEY_RETRY_WAIT

token: "YOUR_ZENMONEY_TOKEN"

client:
  base_url: "{DEFAULT_BASE_URL}"
  timeout: {DEFAULT_TIMEOUT}              # Per-attempt HTTP timeout (seconds)
  retry_attempts: {DEFAULT_RETRY_ATTEMPTS}              # Extra attempts on connection failure
  retry_wait_time: {DEFAULT_RETRY_WAIT_TIME}        # Fixed pause between attempts (seconds)
"""

    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w") as f:
        f.write(default_config)
