from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from typetest.domain.constants import DEFAULT_LINE_WIDTH, DEFAULT_TEST_LENGTH_SECONDS


class AppConfig(BaseSettings):
    """
    Configuration model for typetest.
    Supports loading from:
    1. Environment variables (TYPETEST_*)
    2. Config file (~/.config/typetest/config.toml)
    3. Manual overrides (CLI)
    """

    model_config = SettingsConfigDict(
        env_prefix="TYPETEST_",
        extra="ignore",
    )

    # Typing test
    test_length_seconds: int = Field(default=DEFAULT_TEST_LENGTH_SECONDS, gt=0)
    line_width: int = Field(default=DEFAULT_LINE_WIDTH, gt=0)
    show_wpm: bool = True
    show_timer: bool = True

    # Word sources
    word_pool_file: Path | None = None
    passage_file: Path | None = None
    seed: int | None = Field(default=None, ge=0)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        from pydantic_settings import TomlConfigSettingsSource

        toml_file = find_config_file()
        # Earlier sources take priority: CLI overrides, then env, then the file
        if toml_file:
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (init_settings, env_settings)

    @field_validator("word_pool_file", "passage_file", mode="before")
    @classmethod
    def resolve_file(cls, v: Any) -> Path | None:
        if v is None or v == "":
            return None
        return Path(v).expanduser().resolve()


def find_config_file() -> Path | None:
    """Returns the first existing config file, if any."""
    for f in config_files():
        if f.exists():
            return f
    return None


def config_files() -> list[Path]:
    # Resolved lazily so a changed HOME (e.g. in tests) is respected
    return [
        Path.home() / ".config/typetest/config.toml",
        Path.home() / ".typetest.toml",
    ]


def config_path() -> Path:
    """The config file in use, or the preferred location if none exists yet."""
    return find_config_file() or config_files()[0]


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. ~/.config/typetest/config.toml (if exists)
    3. Environment variables (TYPETEST_*)
    4. cli_overrides (passed from Typer)
    """
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    return AppConfig(**overrides)
