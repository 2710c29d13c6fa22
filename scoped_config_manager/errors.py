# =============================================================
#  scoped_config_manager/errors.py
# =============================================================
"""Exception types raised by Scoped-Config-Manager.

Every error derives from :class:`SettingsError` *and* from the builtin that
best describes it, so callers can catch either.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

__all__ = [
    "SettingsError",
    "SettingsDefinitionError",
    "UnknownScopeError",
    "UnknownSettingError",
    "MissingControlError",
    "UnsupportedControlError",
    "StoreError",
]


class SettingsError(Exception):
    """Base exception for all settings errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class SettingsDefinitionError(SettingsError, ValueError):
    """The setting table is malformed. Raised once, after every check ran."""

    def __init__(self, errors: Sequence[str]):
        self.errors: List[str] = list(errors)
        super().__init__(
            "Errors occurred when checking the setting definitions "
            f"({len(self.errors)} found). Check the log."
        )


class UnknownScopeError(SettingsError, ValueError):
    def __init__(self, scope: object):
        super().__init__(f"Scope {scope!r} does not exist.")
        self.scope = scope


class UnknownSettingError(SettingsError, KeyError):
    def __init__(self, name: str, available: Optional[Sequence[str]] = None):
        message = f"Setting not found: {name!r}"
        if available:
            message += f". Available: {', '.join(list(available)[:5])}"
            if len(available) > 5:
                message += f" (+{len(available) - 5} more)"
        super().__init__(message)
        self.name = name


class MissingControlError(SettingsError, LookupError):
    def __init__(self, widget_id: str, setting_name: str):
        super().__init__(
            f"settings error: control #{widget_id} used in setting "
            f"{setting_name} does not exist"
        )
        self.widget_id = widget_id
        self.setting_name = setting_name


class UnsupportedControlError(SettingsError, TypeError):
    def __init__(self, widget_id: str, setting_name: str, widget_kind: str):
        super().__init__(
            f"settings error: unsupported control #{widget_id} ({widget_kind}) "
            f"used in setting {setting_name}"
        )
        self.widget_id = widget_id
        self.setting_name = setting_name
        self.widget_kind = widget_kind


class StoreError(SettingsError, OSError):
    """The preference store could not be read or written."""
