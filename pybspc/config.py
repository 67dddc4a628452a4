"""Settings read from the environment."""

import os
from collections.abc import Mapping
from dataclasses import dataclass, replace

__all__ = [
    "BOOL_FALSE_STRINGS",
    "DEFAULT_COMMAND",
    "ENV_COMMAND",
    "ENV_DEBUG",
    "Settings",
    "coerce_to_bool",
    "get_settings",
    "is_debug",
    "load_settings",
    "reset_settings",
    "set_debug",
]

DEFAULT_COMMAND = "bspc"

ENV_COMMAND = "PYBSPC_COMMAND"
ENV_DEBUG = "DEBUG"

BOOL_FALSE_STRINGS = frozenset({"false", "no", "off", "0", "disabled"})


def coerce_to_bool(value: str | None) -> bool:
    """Read an environment flag: unset, blank or one of BOOL_FALSE_STRINGS is False."""
    if value is None:
        return False
    value = value.strip().lower()
    return bool(value) and value not in BOOL_FALSE_STRINGS


@dataclass(frozen=True)
class Settings:
    """Process wide settings.

    Attributes:
        command: The control program to run
        debug: Enables debug logging
    """

    command: str = DEFAULT_COMMAND
    debug: bool = False


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build the settings from environment variables.

    Args:
        environ: Variables to read, defaults to `os.environ`
    """
    if environ is None:
        environ = os.environ
    return Settings(
        command=environ.get(ENV_COMMAND) or DEFAULT_COMMAND,
        debug=coerce_to_bool(environ.get(ENV_DEBUG)),
    )


class _SettingsState:
    """Container for the current settings to avoid global statement."""

    value: Settings | None = None


_settings_state = _SettingsState()


def get_settings() -> Settings:
    """Return the current settings, loading them on first use."""
    if _settings_state.value is None:
        _settings_state.value = load_settings()
    return _settings_state.value


def reset_settings() -> None:
    """Forget the current settings, the environment is read again on next use."""
    _settings_state.value = None


def is_debug() -> bool:
    """Return the current debug state."""
    return get_settings().debug


def set_debug(value: bool) -> None:
    """Set the debug state."""
    _settings_state.value = replace(get_settings(), debug=value)
