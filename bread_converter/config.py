"""
Converter options.

Options come from environment variables (optionally loaded from a .env
file) and explicit overrides, and are validated with a voluptuous schema.
"""
from __future__ import annotations

import logging
import os
from typing import Any

import voluptuous as vol
from dotenv import find_dotenv, load_dotenv

from .const import (
    AVAILABLE_MODELS,
    CONF_API_KEY,
    CONF_DIRECTION,
    CONF_FILL_MISSING_LIQUID,
    CONF_LEVAIN_USES_STARTER_HYDRATION,
    CONF_MODEL,
    CONF_STARTER_HYDRATION,
    CONF_STRICT_UNIT_MODE,
    CONF_USE_AI,
    DEFAULT_MODEL,
    DEFAULT_STARTER_HYDRATION,
    DIRECTIONS,
    ENV_API_KEY,
    ENV_MODEL,
    ENV_STARTER_HYDRATION,
    ENV_STRICT_UNITS,
    MAX_STARTER_HYDRATION,
)

_LOGGER = logging.getLogger(__name__)

OPTIONS_SCHEMA = vol.Schema(
    {
        vol.Optional(CONF_STARTER_HYDRATION, default=DEFAULT_STARTER_HYDRATION): vol.All(
            vol.Coerce(float), vol.Range(min=0, max=MAX_STARTER_HYDRATION)
        ),
        vol.Optional(CONF_STRICT_UNIT_MODE, default=False): vol.Boolean(),
        vol.Optional(CONF_FILL_MISSING_LIQUID, default=False): vol.Boolean(),
        vol.Optional(CONF_LEVAIN_USES_STARTER_HYDRATION, default=False): vol.Boolean(),
        vol.Optional(CONF_USE_AI, default=False): vol.Boolean(),
        vol.Optional(CONF_API_KEY, default=""): str,
        vol.Optional(CONF_MODEL, default=DEFAULT_MODEL): vol.In(AVAILABLE_MODELS),
        vol.Optional(CONF_DIRECTION, default=None): vol.Any(None, vol.In(DIRECTIONS)),
    }
)

ENV_OPTIONS = {
    ENV_API_KEY: CONF_API_KEY,
    ENV_MODEL: CONF_MODEL,
    ENV_STARTER_HYDRATION: CONF_STARTER_HYDRATION,
    ENV_STRICT_UNITS: CONF_STRICT_UNIT_MODE,
}


def validate_options(options: dict[str, Any] | None = None) -> dict[str, Any]:
    """Validate options and fill in defaults.

    Raises:
        voluptuous.Invalid: If an option is unknown or has an invalid value
    """
    return OPTIONS_SCHEMA(dict(options or {}))


def load_options(overrides: dict[str, Any] | None = None) -> dict[str, Any]:
    """Load options from the environment and apply explicit overrides.

    A .env file in the working directory is read first; variables already
    set in the environment win over it. Overrides whose value is None are
    ignored so unset command-line flags do not mask the environment.

    Args:
        overrides: Explicit option values

    Returns:
        The validated options

    Raises:
        voluptuous.Invalid: If an option is unknown or has an invalid value
    """
    load_dotenv(find_dotenv(usecwd=True))

    options: dict[str, Any] = {}
    for env_name, option in ENV_OPTIONS.items():
        value = os.environ.get(env_name)
        if value:
            options[option] = value

    for key, value in (overrides or {}).items():
        if value is not None:
            options[key] = value

    validated = validate_options(options)
    _LOGGER.debug("Loaded options: %s",
                  {k: v for k, v in validated.items() if k != CONF_API_KEY})
    return validated
