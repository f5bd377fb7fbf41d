# src/content_auditor/managers/config_manager.py
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError

from content_auditor.config import AnalysisConfig
from content_auditor.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)


class ConfigManager:
    """
    A singleton class to manage the application's configuration.
    It loads settings from a file and allows for in-memory modifications.
    The 'analysis' section is validated into an AnalysisConfig.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ConfigManager, cls).__new__(cls)
            cls._instance._initialize()
        return cls._instance

    def _initialize(self):
        """Loads the configuration from the file."""
        self._config: Dict[str, Any] = {}
        self._settings_path: Optional[Path] = None
        self.reset()
        logger.debug("ConfigManager initialized.")

    def get_all(self) -> Dict[str, Any]:
        """Returns the entire current configuration dictionary."""
        return self._config

    def get_nested(self, key_path: str, default: Optional[Any] = None) -> Any:
        """
        Safely retrieves a nested value from the configuration.
        e.g., 'debug.level'.
        """
        keys = key_path.split('.')
        value = self._config
        for key in keys:
            if isinstance(value, dict):
                value = value.get(key)
            else:
                return default
        return value if value is not None else default

    def set_nested(self, key_path: str, value: Any) -> bool:
        """
        Sets a nested value in the in-memory configuration.
        e.g., 'analysis.keywords.min_length', 5

        Values under 'analysis' must keep the AnalysisConfig valid;
        a rejected value is rolled back and False is returned.
        """
        *parents, leaf = key_path.split('.')
        section = self._config
        for key in parents:
            section = section.setdefault(key, {})
            if not isinstance(section, dict):
                logger.error("Cannot set '%s': '%s' is not a section.", key_path, key)
                return False

        missing = object()
        previous = section.get(leaf, missing)
        if previous is not missing and previous is not None:
            # Keep the type of the value being replaced ('6' -> 6)
            try:
                value = type(previous)(value)
            except (ValueError, TypeError):
                logger.warning("Could not cast '%s' to %s, storing it as given.",
                               key_path, type(previous).__name__)
        section[leaf] = value

        if parents and parents[0] == "analysis":
            try:
                AnalysisConfig.model_validate(self._config.get("analysis", {}))
            except ValidationError as e:
                logger.error("Rejected %s = %r: %s", key_path, value, e)
                if previous is missing:
                    del section[leaf]
                else:
                    section[leaf] = previous
                return False

        logger.info("Configuration updated: %s = %s", key_path, value)
        return True

    def get_analysis_config(self) -> AnalysisConfig:
        """
        Builds the AnalysisConfig from the 'analysis' section.
        Invalid values are logged and the defaults are used instead.
        """
        section = self.get_nested("analysis", {})
        try:
            return AnalysisConfig.model_validate(section)
        except ValidationError as e:
            logger.error("Invalid 'analysis' settings, using defaults: %s", e)
            return AnalysisConfig()

    def load(self, path: Path):
        """Switches to another settings file and loads it."""
        self._settings_path = Path(path)
        self.reset()

    def reset(self):
        """Resets the in-memory configuration from the settings file."""
        config_path = self._settings_path or PathUtils.get_settings_file()
        try:
            if not config_path.exists():
                logger.warning("Settings file not found at %s. Using empty config.", config_path)
                self._config = {}
                return
            with open(config_path, "r", encoding="utf-8") as f:
                self._config = json.load(f)
            logger.info("Configuration has been (re)loaded from %s.", config_path)
        except Exception as e:
            logger.error("Failed to load %s: %s", config_path, e, exc_info=True)
            self._config = {}
