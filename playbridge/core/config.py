"""Application configuration using pydantic-settings."""
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError


class BrowserVariant(str, Enum):
    """Interchangeable browser engines, selected by tag."""
    CHROMIUM = "chromium"
    FIREFOX = "firefox"
    WEBKIT = "webkit"


class Viewport(BaseModel):
    """Viewport dimensions in CSS pixels."""

    width: int = Field(gt=0)
    height: int = Field(gt=0)


EPHEMERAL_VIEWPORT = Viewport(width=1280, height=720)
PERSISTENT_VIEWPORT = Viewport(width=1600, height=900)


class ProxySettings(BaseModel):
    """Proxy server passed through to Playwright."""

    server: str
    username: Optional[str] = None
    password: Optional[str] = None


class LaunchOptions(BaseModel):
    """Recognized browser launch configuration.

    Field aliases match the camelCase keys tool callers send, while the
    snake_case names remain usable from Python.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    browser_type: BrowserVariant = Field(BrowserVariant.CHROMIUM, alias="browserType")
    headless: bool = False
    executable_path: Optional[str] = Field(None, alias="executablePath")
    viewport: Optional[Viewport] = None
    device_scale_factor: float = Field(1, gt=0, alias="deviceScaleFactor")
    proxy: Optional[ProxySettings] = None
    user_agent: Optional[str] = Field(None, alias="userAgent")
    user_data_dir: Optional[str] = Field(None, alias="userDataDir")
    accept_insecure_certs: bool = Field(False, alias="acceptInsecureCerts")
    ignore_https_errors: bool = Field(False, alias="ignoreHTTPSErrors")
    navigation_timeout: Optional[float] = Field(None, gt=0, alias="timeout")

    @property
    def persistent(self) -> bool:
        """True when a non-empty profile directory selects the persistent path."""
        return bool(self.user_data_dir)

    @classmethod
    def from_args(cls, args: Mapping[str, Any]) -> "LaunchOptions":
        """Build options from loosely-typed tool arguments.

        Args:
            args: Mapping using either camelCase aliases or field names.

        Returns:
            Validated LaunchOptions.

        Raises:
            ConfigurationError: If any option is invalid.
        """
        try:
            return cls.model_validate(dict(args))
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
                for err in e.errors()
            )
            raise ConfigurationError(f"Invalid launch options: {problems}") from e


# Launch defaults for browsers opened on behalf of a tool call. They only
# fill fields the caller or settings file left unset.
TOOL_LAUNCH_DEFAULTS: dict[str, Any] = {
    "headless": False,
    "accept_insecure_certs": True,
    "ignore_https_errors": True,
}


def with_tool_defaults(options: LaunchOptions) -> LaunchOptions:
    """Apply ``TOOL_LAUNCH_DEFAULTS`` to every field not explicitly set."""
    unset = {
        name: value
        for name, value in TOOL_LAUNCH_DEFAULTS.items()
        if name not in options.model_fields_set
    }
    return options.model_copy(update=unset)


class BrowserConfig(BaseModel):
    """Defaults applied when a tool call carries no launch arguments."""

    launch: LaunchOptions = Field(default_factory=lambda: with_tool_defaults(LaunchOptions()))

    @field_validator("launch")
    @classmethod
    def apply_tool_defaults(cls, value: LaunchOptions) -> LaunchOptions:
        return with_tool_defaults(value)


class NetworkConfig(BaseModel):
    """Network inspection query defaults."""

    default_limit: int = 50
    body_preview_chars: int = 200


class Settings(BaseSettings):
    """Application settings loaded from YAML or environment."""

    model_config = SettingsConfigDict(env_prefix="PLAYBRIDGE_", env_nested_delimiter="__")

    log_level: str = "INFO"
    browser: BrowserConfig = BrowserConfig()
    network: NetworkConfig = NetworkConfig()

    @classmethod
    def from_yaml(cls, path: Path) -> "Settings":
        """Load settings from a YAML file.

        Args:
            path: Path to the YAML configuration file.

        Returns:
            Settings instance with loaded configuration.
        """
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        return cls(**data)
