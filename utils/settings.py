"""
Persistent settings manager for keyconf.
Stores user preferences (feature flags, last selected menu) in a JSON file.

Settings file location:
    ~/.keyconf_settings.json, or the path in the KEYCONF_SETTINGS
    environment variable.

A corrupt settings file (invalid JSON) is deleted and defaults are used,
with a warning logged.
"""

import json
import logging
import os
import threading
from typing import Any, Optional

logger = logging.getLogger('keyconf.settings')

SETTINGS_FILE = os.environ.get(
    "KEYCONF_SETTINGS", os.path.expanduser("~/.keyconf_settings.json")
)


class SettingsManager:
    """
    Manages persistent user settings.

    Keys use dot notation for nesting ("features.macros_supported").
    Thread-safe; get_settings() returns the shared instance.
    """

    _instance: Optional['SettingsManager'] = None
    _lock = threading.Lock()

    def __init__(self, file_path: str = SETTINGS_FILE):
        self._settings = {}
        self._file_path = file_path
        self._save_lock = threading.Lock()
        self._load()

    @classmethod
    def shared(cls) -> 'SettingsManager':
        """Get (creating on first use) the process-wide instance."""
        with cls._lock:
            if cls._instance is None:
                cls._instance = cls()
        return cls._instance

    def _load(self):
        """Load settings from the JSON file."""
        if not os.path.exists(self._file_path):
            logger.debug("No settings file found, using defaults")
            self._settings = {}
            return
        try:
            with open(self._file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.warning("Corrupt settings file deleted, using defaults: %s", e)
            self._delete_corrupt_file()
            data = {}
        except OSError as e:
            logger.warning("Could not load settings: %s", e)
            data = {}

        if not isinstance(data, dict):
            logger.warning("Settings file does not hold an object, using defaults")
            data = {}
        self._settings = data
        logger.info("Settings loaded from %s", self._file_path)

    def _delete_corrupt_file(self):
        try:
            os.remove(self._file_path)
            logger.info("Removed corrupt settings file: %s", self._file_path)
        except OSError as e:
            logger.error("Failed to remove corrupt settings file: %s", e)

    def _save(self):
        """Save settings atomically (temp file, then rename)."""
        with self._save_lock:
            temp_path = self._file_path + '.tmp'
            try:
                with open(temp_path, 'w', encoding='utf-8') as f:
                    json.dump(self._settings, f, indent=2)
                os.replace(temp_path, self._file_path)
            except OSError as e:
                logger.warning("Could not save settings: %s", e)
                if os.path.exists(temp_path):
                    try:
                        os.remove(temp_path)
                    except OSError:
                        logger.debug("Could not remove %s", temp_path)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a setting value.

        Args:
            key: Setting key, dot notation for nested values
            default: Value returned when the key is missing

        Returns:
            Setting value or default
        """
        value = self._settings
        for k in key.split('.'):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def set(self, key: str, value: Any, save: bool = True):
        """
        Set a setting value.

        Args:
            key: Setting key, dot notation for nested values
            value: Value to set (must be JSON serialisable)
            save: Whether to write the file immediately
        """
        keys = key.split('.')
        settings = self._settings
        for k in keys[:-1]:
            if not isinstance(settings.get(k), dict):
                settings[k] = {}
            settings = settings[k]
        settings[keys[-1]] = value

        if save:
            self._save()


def get_settings() -> SettingsManager:
    """Get the shared settings manager."""
    return SettingsManager.shared()
