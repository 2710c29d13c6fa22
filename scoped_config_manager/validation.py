# =============================================================
#  scoped_config_manager/validation.py
#  Structural checks for setting definitions
# =============================================================
"""Checks a setting table for structural consistency before it is used.

Definitions may be typed :class:`~scoped_config_manager.models.Setting`
objects or plain mappings::

    {
        "name": "showLineNumbers",
        "default_value": True,
        "callback": None,
        "controls": [
            {"kind": "get", "scope": "get", "param_name": "showLineNumbers"},
            {"kind": "control", "scope": "local", "widget_id": "options-linenoscheck"},
        ],
    }

Every problem found is logged as ``settings error: ...`` and collected;
checking carries on past individual errors so that one run reports as much
as possible. :func:`validate_definitions` then raises a single
:class:`SettingsDefinitionError` carrying the whole list.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any, Iterable, List, Mapping, Sequence

from .errors import SettingsDefinitionError
from .models import ControlKind, Scope, Setting

__all__ = ["check_definitions", "validate_definitions", "is_scope", "ERROR_PREFIX"]

log = logging.getLogger(__name__)

ERROR_PREFIX = "settings error: "

_SCOPE_NAMES = {scope.value for scope in Scope}
_KIND_NAMES = {kind.value for kind in ControlKind}


# ------------------------------------------------------------------
# internal helpers
# ------------------------------------------------------------------

def _record(errors: List[str], msg: str) -> None:
    msg = ERROR_PREFIX + msg
    errors.append(msg)
    log.error(msg)


def _name_of(value: Any) -> Any:
    """Enum members compare by their value."""
    return value.value if isinstance(value, (Scope, ControlKind)) else value


def is_scope(value: Any) -> bool:
    return isinstance(value, (str, Scope)) and _name_of(value) in _SCOPE_NAMES


def _as_mapping(definition: Any) -> Mapping[str, Any] | None:
    if isinstance(definition, Setting):
        return definition.as_definition()
    if isinstance(definition, Mapping):
        return definition
    return None


def _check_control(errors: List[str], control: Any, j: int, label: Any) -> None:
    if not isinstance(control, Mapping):
        control = dict(control) if hasattr(control, "model_fields") else {}

    kind = _name_of(control.get("kind"))
    if not kind:
        _record(errors, f"no kind for control {j} in setting {label}")
    elif kind not in _KIND_NAMES:
        _record(errors, f"invalid kind {kind} for control {j} in setting {label}")

    scope = control.get("scope")
    if not scope:
        _record(errors, f"no scope for control {j} in setting {label}")
    elif not is_scope(scope):
        _record(errors, f"invalid scope {scope} for control {j} in setting {label}")

    if kind == "control":
        if not control.get("widget_id"):
            _record(errors, f"ID of widget for control {j} in setting {label} not given")
    elif kind == "get":
        if not control.get("param_name"):
            _record(
                errors,
                f"name of get-parameter for control {j} in setting {label} not given",
            )
    elif kind == "custom":
        compute = control.get("compute")
        if compute is None:
            _record(errors, f"compute function for control {j} in setting {label} not given")
        elif not callable(compute):
            _record(
                errors,
                f"compute function for control {j} in setting {label} is not callable",
            )


# ------------------------------------------------------------------
# public API
# ------------------------------------------------------------------

def check_definitions(
    definitions: Sequence[Any],
    ignored_scopes: Iterable[Any] = (),
) -> List[str]:
    """Return every structural error found; an empty list means success."""
    errors: List[str] = []

    for scope in ignored_scopes:
        if not is_scope(scope):
            _record(errors, f"ignored scope {_name_of(scope)} does not exist.")

    names = Counter()
    for i, definition in enumerate(definitions):
        raw = _as_mapping(definition)
        if raw is None:
            _record(errors, f"setting {i} is not a mapping or Setting")
            continue

        name = raw.get("name")
        if not name or not isinstance(name, str):
            _record(errors, f"name of setting {i} not given")
            label: Any = i
        else:
            names[name] += 1
            label = name

        callback = raw.get("callback")
        if callback is not None and not callable(callback):
            _record(errors, f"callback of setting {label} is not callable")

        controls = raw.get("controls")
        if controls is None:
            _record(errors, f"controls of setting {label} not given")
            continue

        for j, control in enumerate(controls):
            _check_control(errors, control, j, label)

    for name, count in names.items():
        if count > 1:
            _record(errors, f"setting {name} is defined {count} times")

    return errors


def validate_definitions(
    definitions: Sequence[Any],
    ignored_scopes: Iterable[Any] = (),
) -> None:
    """Raise :class:`SettingsDefinitionError` if any check fails."""
    errors = check_definitions(definitions, ignored_scopes)
    if errors:
        raise SettingsDefinitionError(errors)
