"""Configuration management for Snippet Converter."""

import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

try:
    import tomllib  # Python 3.11+
except ImportError:
    import tomli as tomllib  # Python < 3.11

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_DESTINATION = "~/Desktop/"
DEFAULT_OUTPUT_FILE_NAME = "snippet-converter-output.plist"
DEFAULT_CONFIG_FILE = Path("~/.config/snippet-converter/config.toml")


_TRUTHY = {"1", "true", "yes", "y", "on"}


def _parse_bool(value: object, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY
    return default


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return _parse_bool(value, default)


def default_config_file() -> Path:
    """Config file location: SNIPPET_CONVERTER_CONFIG env or ~/.config/snippet-converter/config.toml."""
    env_path = os.environ.get("SNIPPET_CONVERTER_CONFIG")
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_FILE.expanduser()


def load_config_file(config_file: Path) -> dict:
    """Load settings from a TOML file.

    A missing file yields no settings; a malformed one is ignored with a warning.
    """
    if not config_file.exists():
        return {}

    try:
        with open(config_file, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning(f"Ignoring malformed config file {config_file}: {e}")
        return {}

    # Settings may live at the top level or under [output]
    section = data.get("output", data)
    return section if isinstance(section, dict) else {}


class ConverterConfig(BaseModel):
    """Output defaults for conversion runs."""

    output_destination: str = Field(default=DEFAULT_OUTPUT_DESTINATION)
    output_file_name: str = Field(default=DEFAULT_OUTPUT_FILE_NAME)
    escape_markup: bool = Field(default=False)

    @classmethod
    def from_env(cls, config_file: Optional[Path] = None) -> "ConverterConfig":
        """Load configuration from environment variables, the config file, or defaults.

        Precedence (highest first): environment, config file, defaults. CLI
        options are applied on top by the caller.
        """
        file_values = load_config_file(config_file or default_config_file())

        return cls(
            output_destination=os.environ.get(
                "SNIPPET_CONVERTER_OUTPUT_DIR",
                str(file_values.get("destination", DEFAULT_OUTPUT_DESTINATION)),
            ),
            output_file_name=os.environ.get(
                "SNIPPET_CONVERTER_OUTPUT_FILE",
                str(file_values.get("file_name", DEFAULT_OUTPUT_FILE_NAME)),
            ),
            escape_markup=_env_bool(
                "SNIPPET_CONVERTER_ESCAPE_MARKUP",
                _parse_bool(file_values.get("escape_markup"), False),
            ),
        )
