"""
Application settings using Pydantic Settings.

Defaults below, overridden by GS1_LABEL_* environment variables, then by
explicit overrides (CLI flags, the UI settings page).
"""

from typing import Any, Dict, Literal, Optional, get_args

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


RenderMode = Literal["gs1", "fnc1-caret", "raw"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["console", "json"]

RENDER_MODES = get_args(RenderMode)
LOG_LEVELS = get_args(LogLevel)
LOG_FORMATS = get_args(LogFormat)

ENV_PREFIX = "GS1_LABEL_"


def _env(key: str, suffix: str) -> AliasChoices:
    # Field name for overrides, short variable name for the environment
    return AliasChoices(key, ENV_PREFIX + suffix)


class LabelSettings(BaseSettings):
    """
    Label printer configuration.

    Attributes:
        label_width_mm: Label page width
        label_height_mm: Label page height
        margin_mm: Page margin
        dm_box_mm: DataMatrix side; None = min(w, h) - 2 * margin - 12
        caption_font_size: Caption size in points
        render_mode: gs1, fnc1-caret or raw (see rendering.barcode)
        render_scale: BWIPP module scale for the embedded image
        remap_cyrillic_layout: Fix Russian-layout typing instead of rejecting it
        reject_cyrillic: UI refuses input that contains Cyrillic letters
        auto_print_on_enter: UI prints as soon as a scan is submitted
        beep_enabled: UI plays success/error tones
        log_level: DEBUG, INFO, WARNING or ERROR
        log_format: console or json
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # ==========================================================================
    # Label layout
    # ==========================================================================
    label_width_mm: float = Field(
        default=58.0, gt=0, validation_alias=_env("label_width_mm", "WIDTH_MM")
    )
    label_height_mm: float = Field(
        default=40.0, gt=0, validation_alias=_env("label_height_mm", "HEIGHT_MM")
    )
    margin_mm: float = Field(default=3.0, ge=0)
    dm_box_mm: Optional[float] = Field(default=None, gt=0)
    caption_font_size: float = Field(default=5.0, gt=0)

    # ==========================================================================
    # Rendering
    # ==========================================================================
    render_mode: RenderMode = "gs1"
    render_scale: int = Field(default=6, ge=1)

    # ==========================================================================
    # Operator input and UI
    # ==========================================================================
    remap_cyrillic_layout: bool = Field(
        default=False, validation_alias=_env("remap_cyrillic_layout", "REMAP_CYRILLIC")
    )
    reject_cyrillic: bool = True
    auto_print_on_enter: bool = Field(
        default=True, validation_alias=_env("auto_print_on_enter", "AUTO_PRINT")
    )
    beep_enabled: bool = Field(default=True, validation_alias=_env("beep_enabled", "BEEP"))

    # ==========================================================================
    # Logging
    # ==========================================================================
    log_level: LogLevel = "INFO"
    log_format: LogFormat = "console"

    @field_validator("dm_box_mm", mode="before")
    @classmethod
    def _blank_means_automatic(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: Any) -> Any:
        return value.strip().upper() if isinstance(value, str) else value

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()


DEFAULT_SETTINGS: Dict[str, Any] = {
    name: field.default for name, field in LabelSettings.model_fields.items()
}


def env_var_name(key: str) -> str:
    alias = LabelSettings.model_fields[key].validation_alias
    if isinstance(alias, AliasChoices):
        return alias.choices[-1]
    return ENV_PREFIX + key.upper()


def load_settings(overrides: Optional[Dict[str, Any]] = None) -> LabelSettings:
    """
    Load settings: defaults, then environment, then overrides.

    Args:
        overrides: Explicit values by field name; None entries are ignored
            except for dm_box_mm, where None means automatic sizing

    Raises:
        ValueError: on unknown keys; pydantic.ValidationError (a ValueError)
            on invalid values
    """
    values: Dict[str, Any] = {}
    for key, value in (overrides or {}).items():
        if key not in LabelSettings.model_fields:
            raise ValueError(f"Unknown setting: {key}")
        if value is None and key != "dm_box_mm":
            continue
        values[key] = value
    return LabelSettings(**values)
