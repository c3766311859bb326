"""
LangKeeper Settings Module
Handles loading and saving of user settings.
"""

import json

import langkeeper_config as config
from core.dialects import DIALECTS
from langkeeper_enums import PlaceholderPolicy
from langkeeper_exceptions import SettingsSaveError
from langkeeper_logger import get_logger
logger = get_logger("settings")


def default_settings():
    """Return a fresh copy of the default settings."""
    return {
        "default_mode": config.DEFAULT_MODE,
        "ui_language": config.DEFAULT_UI_LANGUAGE,
        "placeholder_policy": None,  # None: use the dialect's own policy
        "placeholder_suffix": config.DEFAULT_PLACEHOLDER_SUFFIX,
    }


def load_settings(settings_file=None):
    """Load settings from JSON file, or return defaults if not found."""

    settings_file = settings_file or config.SETTINGS_FILE_PATH
    defaults = default_settings()

    if not settings_file.is_file():
        logger.debug(f"Settings file not found ({settings_file}). Using defaults.")
        return defaults

    try:
        logger.debug(f"Loading settings: {settings_file}")
        with settings_file.open('r', encoding='utf-8') as f:
            loaded_data = json.load(f)
    except json.JSONDecodeError:
        logger.error(f"Settings file ({settings_file}) is corrupt (invalid JSON). Using defaults.")
        return defaults
    except OSError as e:
        logger.error(f"Error reading settings ({settings_file}): {e}. Using defaults.")
        return defaults

    if not isinstance(loaded_data, dict):
        logger.warning("Settings file format is invalid (not a dict). Using defaults.")
        return defaults

    settings = defaults.copy()
    settings.update(loaded_data)

    if settings.get("default_mode") not in DIALECTS:
        logger.warning(f"Invalid 'default_mode' value ({settings.get('default_mode')}). Using default.")
        settings["default_mode"] = defaults["default_mode"]

    if settings.get("ui_language") not in ("en", "zh"):
        logger.warning(f"Invalid 'ui_language' value ({settings.get('ui_language')}). Using default.")
        settings["ui_language"] = defaults["ui_language"]

    policy = settings.get("placeholder_policy")
    if policy is not None and policy not in [p.value for p in PlaceholderPolicy]:
        logger.warning(f"Invalid 'placeholder_policy' value ({policy}). Using dialect default.")
        settings["placeholder_policy"] = None

    if not isinstance(settings.get("placeholder_suffix"), str):
        logger.warning("Invalid 'placeholder_suffix' value. Using default.")
        settings["placeholder_suffix"] = defaults["placeholder_suffix"]

    logger.debug("Settings loaded.")
    return settings


def save_settings(settings_data, settings_file=None):
    """
    Save settings to JSON file.

    Raises:
        SettingsSaveError: If the file cannot be written
    """

    settings_file = settings_file or config.SETTINGS_FILE_PATH
    try:
        logger.debug(f"Saving settings: {settings_file}")
        settings_file.parent.mkdir(parents=True, exist_ok=True)
        with settings_file.open('w', encoding='utf-8') as f:
            json.dump(settings_data, f, indent=4, ensure_ascii=False)
        logger.info("Settings saved.")
    except OSError as e:
        raise SettingsSaveError(f"Could not save settings ({settings_file}): {e}") from e
