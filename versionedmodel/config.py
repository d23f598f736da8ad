"""User configuration for the versionedmodel command line tools."""

import configparser
import logging
import os
import platform
from typing import Optional, Any

from pathlib import Path

from versionedmodel.codec import FORMATS

APP_NAME = "versionedmodel"

logger = logging.getLogger(__name__)

_home = os.path.expanduser("~")

xdg_config_home = os.environ.get("XDG_CONFIG_HOME") or os.path.join(_home, ".config")

default_cfg = {"codec": {"format": "json", "indent": "2"}}

if platform.system() == "Darwin":
    # macOS
    config_dir = Path("~/Library/Application Support/versionedmodel").expanduser()
else:
    # Linux or others
    config_dir = Path(os.path.join(xdg_config_home, APP_NAME))


def get_config_file():
    return config_dir / f"{APP_NAME}.cfg"


class ConfigAccessor:
    """
    A dict-like accessor for configuration files.

    Missing sections or keys fall back to the given default.

    Usage:
        config = ConfigAccessor()
        value = config.get('codec', 'format', default='json')
    """

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize a ConfigAccessor with an optional config file path.

        Args:
            config_path: Path to the configuration file. If None, uses the default path.
        """
        if config_path is None:
            self.config_path = get_config_file()
        else:
            self.config_path = Path(config_path)

        self.config = configparser.ConfigParser()
        if self.config_path.exists():
            self.config.read(self.config_path)

    def get(self, section: str, key: str, default: Any = None) -> Any:
        """
        Get a configuration value from the specified section and key.

        Returns:
            The configuration value if it exists, otherwise the default value
        """
        try:
            return self.config[section][key]
        except (KeyError, configparser.NoSectionError, configparser.NoOptionError):
            return default

    def set(self, section: str, key: str, value: str) -> None:
        if not self.config.has_section(section):
            self.config.add_section(section)

        self.config[section][key] = value

    def save(self) -> None:
        """
        Save the current configuration to the config file.

        Fails gracefully if the file cannot be written (e.g., read-only filesystem).
        """
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w") as configfile:
                self.config.write(configfile)
        except OSError as e:
            logger.warning(
                f"Could not save configuration to {self.config_path}: {e}. "
                "Configuration changes will not persist."
            )

    def sections(self) -> list:
        return self.config.sections()

    def options(self, section: str) -> list:
        """
        Get all options (keys) in a section.

        Returns:
            List of options in the section or empty list if section doesn't exist
        """
        try:
            return self.config.options(section)
        except configparser.NoSectionError:
            return []


# Create a global config accessor instance
config = ConfigAccessor()


def _check_format(value: str) -> str:
    if value not in FORMATS:
        raise ValueError(f"format must be one of {', '.join(FORMATS)}")
    return value


def _check_indent(value: str) -> str:
    try:
        int(value)
    except ValueError:
        raise ValueError("indent must be an integer (0 for compact JSON)") from None
    return value


CODEC_OPTIONS = {"format": _check_format, "indent": _check_indent}


def set_codec_option(
    key: str, value: str, accessor: Optional[ConfigAccessor] = None
) -> None:
    """
    Validate and persist one ``[codec]`` option.

    Raises:
        ValueError: if the option is unknown or the value is invalid
    """
    accessor = accessor or config
    try:
        check = CODEC_OPTIONS[key]
    except KeyError:
        raise ValueError(f"unknown codec option '{key}'") from None
    accessor.set("codec", key, check(value.strip()))
    accessor.save()


def get_default_format(accessor: Optional[ConfigAccessor] = None) -> str:
    """Byte format used by the CLI when none is given on the command line."""
    accessor = accessor or config
    value = accessor.get("codec", "format", default_cfg["codec"]["format"])
    if value not in FORMATS:
        logger.warning(f"Ignoring unknown codec format '{value}' in configuration")
        return default_cfg["codec"]["format"]
    return value


def get_json_indent(accessor: Optional[ConfigAccessor] = None) -> Optional[int]:
    """Indentation of JSON written by the CLI (None for compact output)."""
    accessor = accessor or config
    value = accessor.get("codec", "indent", default_cfg["codec"]["indent"])
    try:
        indent = int(value)
    except ValueError:
        logger.warning(f"Ignoring invalid codec indent '{value}' in configuration")
        indent = int(default_cfg["codec"]["indent"])
    return indent if indent > 0 else None
