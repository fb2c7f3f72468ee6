"""Runtime configuration for the storefront suite.

Values come from ``config/settings.json`` (required), an optional
``config/settings.development.json`` overlay, a ``.env`` file and finally
environment variables prefixed with ``STOREFRONT_`` (nested keys use ``__``,
e.g. ``STOREFRONT_VIEWPORT__WIDTH``). See `config/settings.json` for the
checked-in defaults.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from storefront_e2e.core.errors import ConfigurationMissingError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path("config")
PRIMARY_CONFIG_NAME = "settings.json"
OVERLAY_CONFIG_NAME = "settings.development.json"
ALLURE_RESULTS_ENV = "ALLURE_RESULTS_DIRECTORY"
FALLBACK_OUTPUT_DIR = Path("allure-results")

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124 Safari/537.36"
)


class ViewportSettings(BaseModel):
    width: int = 1366
    height: int = 768


class CredentialSettings(BaseModel):
    email: Optional[str] = Field(default=None, description="Storefront account e-mail")
    password: Optional[str] = Field(default=None, description="Storefront account password")


class Settings(BaseSettings):
    """Captures runtime configuration for a scenario run."""

    base_url: str = Field(
        default="https://demo.nopcommerce.com/",
        description="Storefront landing page opened at the start of a scenario",
    )
    credentials: CredentialSettings = Field(default_factory=CredentialSettings)

    headless: bool = Field(default=False, description="Headed runs trip fewer bot checks")
    slow_mo_ms: int = Field(default=200, description="Slow-mo delay in milliseconds")
    use_chrome_channel: bool = Field(
        default=True,
        description="Launch the installed Chrome channel instead of bundled Chromium",
    )
    user_agent: str = DEFAULT_USER_AGENT
    locale: str = "en-US"
    viewport: ViewportSettings = Field(default_factory=ViewportSettings)

    timeout_ms: int = Field(default=30000, description="Default timeout for page actions")
    navigation_timeout_ms: int = Field(
        default=45000, description="Timeout for navigation, URL and load-state waits"
    )
    element_timeout_ms: int = Field(
        default=15000, description="Timeout for element visibility/attachment waits"
    )
    login_check_timeout_ms: int = Field(
        default=5000, description="How long to wait for the post-login account marker"
    )
    search_grace_ms: int = Field(
        default=250, description="Grace window before falling back to clicking the search button"
    )

    trace: bool = True
    video: bool = False
    output_dir: Optional[Path] = Field(
        default=None, description="Where traces, videos and Allure attachments are written"
    )
    storage_state_path: Optional[Path] = Field(
        default=Path("storageState.json"),
        description="Persisted session reused when the file exists",
    )
    stealth_enabled: bool = Field(default=False, description="Apply playwright-stealth evasions")

    search_data_excel_path: Path = Field(default=Path("data/search_data.xlsx"))
    search_data_sheet: str = "Sheet1"

    log_level: str = Field(default="INFO")
    log_dir: Path = Field(default=Path("logs"))

    model_config = SettingsConfigDict(
        env_prefix="STOREFRONT_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        json_file=(DEFAULT_CONFIG_DIR / PRIMARY_CONFIG_NAME, DEFAULT_CONFIG_DIR / OVERLAY_CONFIG_NAME),
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        json_files = settings_cls.model_config.get("json_file") or ()
        if isinstance(json_files, (str, Path)):
            json_files = (json_files,)
        # One source per file so nested sections merge key by key; later files win.
        json_sources = tuple(
            JsonConfigSettingsSource(settings_cls, json_file=json_file) for json_file in reversed(json_files)
        )
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            *json_sources,
            file_secret_settings,
        )

    @field_validator("output_dir", "storage_state_path", mode="before")
    def _expand_optional_path(cls, value: str | Path | None) -> Optional[Path]:
        if value in (None, ""):
            return None
        return Path(value).expanduser()

    @field_validator("search_data_excel_path", "log_dir", mode="before")
    def _expand_path(cls, value: str | Path) -> Path:
        if isinstance(value, Path):
            return value
        return Path(value).expanduser()

    @field_validator(
        "timeout_ms",
        "navigation_timeout_ms",
        "element_timeout_ms",
        "login_check_timeout_ms",
        "search_grace_ms",
    )
    def _validate_timeout(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("timeouts must be positive")
        return value

    def ensure_directories(self) -> Path:
        """Create the artifact directory and return it."""
        output_dir = resolve_output_dir(self)
        output_dir.mkdir(parents=True, exist_ok=True)
        return output_dir

    def viewport_size(self) -> dict[str, int]:
        return {"width": self.viewport.width, "height": self.viewport.height}

    def chromium_launch_args(self) -> dict[str, object]:
        launch_args: dict[str, object] = {
            "headless": self.headless,
        }
        if self.slow_mo_ms:
            launch_args["slow_mo"] = self.slow_mo_ms
        if self.use_chrome_channel:
            launch_args["channel"] = "chrome"
        return launch_args

    def context_options(self) -> dict[str, object]:
        options: dict[str, object] = {
            "viewport": self.viewport_size(),
            "locale": self.locale,
            "user_agent": self.user_agent,
            "ignore_https_errors": True,
            "accept_downloads": True,
        }
        if self.storage_state_path:
            if self.storage_state_path.exists():
                logger.info("Loading storage state from %s", self.storage_state_path)
                options["storage_state"] = str(self.storage_state_path)
            else:
                logger.debug(
                    "Storage state path %s not found; proceeding without preloaded session",
                    self.storage_state_path,
                )
        if self.video:
            options["record_video_dir"] = str(resolve_output_dir(self))
            options["record_video_size"] = self.viewport_size()
        return options

    def stealth_kwargs(self) -> dict[str, object]:
        if not self.stealth_enabled:
            return {}
        return {
            "navigator_languages_override": (self.locale, self.locale.split("-")[0]),
            "navigator_user_agent_override": self.user_agent,
        }


def resolve_output_dir(settings: Settings, environ: Optional[Mapping[str, str]] = None) -> Path:
    """Resolve the artifact directory: environment, then config, then fallback."""
    env = os.environ if environ is None else environ
    from_env = (env.get(ALLURE_RESULTS_ENV) or "").strip()
    if from_env:
        return Path(from_env).expanduser()
    if settings.output_dir:
        return settings.output_dir
    return FALLBACK_OUTPUT_DIR


def load_settings(config_dir: Path | str = DEFAULT_CONFIG_DIR, **overrides: object) -> Settings:
    """Build settings bound to ``config_dir``.

    The primary ``settings.json`` must exist; the development overlay is
    optional and silently skipped when absent.
    """
    config_dir = Path(config_dir)
    primary = config_dir / PRIMARY_CONFIG_NAME
    if not primary.is_file():
        raise ConfigurationMissingError(f"Primary configuration file not found: {primary.resolve()}")
    overlay = config_dir / OVERLAY_CONFIG_NAME
    if overlay.is_file():
        logger.debug("Applying configuration overlay %s", overlay)

    class _BoundSettings(Settings):
        model_config = SettingsConfigDict(json_file=(primary, overlay))

    return _BoundSettings(**overrides)
