import copy
import logging
import os

import yaml
from dotenv import load_dotenv

from eventfinder.constants import CONFIG_FILE, DEFAULT_SETTINGS, ENV_FILE, REQUIRED_API_KEYS
from eventfinder.exceptions import ConfigurationException

# Retrieve main logger
logger = logging.getLogger("main")

# Environment variable -> (section, key, cast)
ENV_OVERRIDES = {
    "TM_API_KEY": ("apis", "ticketmaster_api_key", str),
    "SPOTIFY_CLIENT_ID": ("apis", "spotify_client_id", str),
    "SPOTIFY_CLIENT_SECRET": ("apis", "spotify_client_secret", str),
    "IPINFO_TOKEN": ("apis", "ipinfo_token", str),
    "UPSTREAM_TIMEOUT": ("apis", "timeout", float),
    "DATABASE_URL": ("database", "url", str),
    "HOST": ("server", "host", str),
    "PORT": ("server", "port", int),
    "STATIC_DIR": ("server", "static_dir", str),
    "LOG_LEVEL": ("logging", "level", str),
    "LOG_FORMAT": ("logging", "format", str),
}


def merge_settings(base, overrides):
    """Deep merge `overrides` into a copy of `base`, section by section"""
    merged = copy.deepcopy(base)
    for section, values in (overrides or {}).items():
        if isinstance(values, dict) and isinstance(merged.get(section), dict):
            merged[section].update(values)
        else:
            merged[section] = values
    return merged


def _apply_env_vars(settings):
    for env_name, (section, key, cast) in ENV_OVERRIDES.items():
        value = os.environ.get(env_name)
        if value is None or value == "":
            continue
        try:
            settings.setdefault(section, {})[key] = cast(value)
        except ValueError:
            raise ConfigurationException(f"Environment variable {env_name} has an invalid value: {value!r}")


def load_settings(config_file=None, env_file=None, overrides=None):
    """
    Build the settings dict for one process.

    Order of precedence, lowest first: DEFAULT_SETTINGS, the YAML settings
    file, the .env file, the shell environment, then `overrides`.
    """
    config_file = config_file or os.environ.get("EVENTFINDER_CONFIG", CONFIG_FILE)
    env_file = env_file or ENV_FILE

    settings = copy.deepcopy(DEFAULT_SETTINGS)

    if os.path.exists(config_file):
        logger.debug(f"Reading configuration file: {config_file}")
        with open(config_file, "r") as yaml_file:
            file_settings = yaml.safe_load(yaml_file) or {}
        if not isinstance(file_settings, dict):
            raise ConfigurationException(f"Configuration file {config_file} must contain a mapping")
        settings = merge_settings(settings, file_settings)

    # Shell environment takes precedence over the .env file
    if os.path.exists(env_file):
        load_dotenv(env_file, override=False)
    _apply_env_vars(settings)

    if overrides:
        settings = merge_settings(settings, overrides)

    return settings


def verify_settings(settings):
    success = True
    errors = []

    apis = settings.get("apis", {})
    for key in REQUIRED_API_KEYS:
        if not apis.get(key):
            success = False
            errors.append({"path": f"apis/{key}", "error": f"{key} is not configured."})

    if not settings.get("database", {}).get("url"):
        success = False
        errors.append({"path": "database/url", "error": "Database URL is not configured."})

    return success, errors


def require_valid_settings(settings):
    """Raise ConfigurationException when credentials or the store URL are missing"""
    success, errors = verify_settings(settings)
    if not success:
        missing = [e["path"] for e in errors]
        raise ConfigurationException(f"Missing configuration: {', '.join(missing)}", missing=missing)
    return settings
