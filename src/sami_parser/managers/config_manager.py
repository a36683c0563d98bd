# src/sami_parser/managers/config_manager.py
import json
import logging
from typing import Any, Dict, Optional

from sami_parser.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)


class ConfigManager:
    """
    A singleton holding the parser configuration read from the bundled settings.json.
    Sections: 'debug' (logging level), 'scanner' and 'grammar'.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ConfigManager, cls).__new__(cls)
            cls._instance._config = {}
            cls._instance.reset()
        return cls._instance

    def get_nested(self, key_path: str, default: Optional[Any] = None) -> Any:
        """
        Safely retrieves a nested value, e.g. 'debug.level'.
        """
        value: Any = self._config
        for key in key_path.split('.'):
            if not isinstance(value, dict):
                return default
            value = value.get(key)
        return default if value is None else value

    def get_section(self, name: str) -> Dict[str, Any]:
        """
        Returns a copy of a top-level section, ready to feed a settings model.
        A missing section yields {}; a section that is not an object is ignored.
        """
        section = self._config.get(name)
        if section is None:
            return {}
        if not isinstance(section, dict):
            logger.warning("Ignoring config section '%s': expected an object, got %s.",
                           name, type(section).__name__)
            return {}
        return dict(section)

    def reset(self) -> None:
        """(Re)loads settings.json; an absent or unreadable file leaves the config empty."""
        config_path = PathUtils.get_settings_file()
        if not config_path.exists():
            logger.warning("settings.json not found at %s. Using built-in defaults.", config_path)
            self._config = {}
            return
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                loaded = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Failed to load %s: %s", config_path, e, exc_info=True)
            self._config = {}
            return
        self._config = loaded if isinstance(loaded, dict) else {}
        logger.debug("Parser configuration loaded from %s.", config_path)


# The global singleton instance shared by the scanner and the tree builder.
config_manager = ConfigManager()
