# =============================================================
#  scoped_config_manager/models.py
# =============================================================
"""
Pydantic models describing settings and the ways they bind to the outside
world.

A setting owns an ordered list of *control bindings*. Each binding is one of
three kinds, told apart by its ``kind`` tag:

* ``"control"`` – a UI widget that mirrors (and can change) one scope,
* ``"get"``     – a query-string parameter seeding one scope at load time,
* ``"custom"``  – a function computing the initial value of one scope.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Callable, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "Scope",
    "ControlKind",
    "SCOPES",
    "PRECEDENCE",
    "WidgetBinding",
    "QueryParamBinding",
    "ComputedBinding",
    "ControlBinding",
    "Setting",
    "ChangeCallback",
    "ComputeFn",
]


class Scope(str, Enum):
    LOCAL = "local"
    GLOBAL = "global"
    GET = "get"


class ControlKind(str, Enum):
    CONTROL = "control"
    GET = "get"
    CUSTOM = "custom"


# Declared order. The last member is the most important one and overrides
# all others.
SCOPES: tuple[Scope, ...] = (Scope.LOCAL, Scope.GLOBAL, Scope.GET)

# Order in which the resolver looks for a value.
PRECEDENCE: tuple[Scope, ...] = tuple(reversed(SCOPES))


# callback(setting, effective_value)
ChangeCallback = Callable[["Setting", Any], None]
# compute(setting, scope) -> value, None for "no value"
ComputeFn = Callable[["Setting", Scope], Any]


class _Binding(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    scope: Scope


class WidgetBinding(_Binding):
    """A checkbox or single-select widget reflecting ``scope``."""

    kind: Literal["control"] = "control"
    widget_id: str


class QueryParamBinding(_Binding):
    """Initial value of ``scope`` taken from the query string."""

    kind: Literal["get"] = "get"
    param_name: str


class ComputedBinding(_Binding):
    """Initial value of ``scope`` returned by ``compute(setting, scope)``.

    Returning ``None`` leaves the scope without a value.
    """

    kind: Literal["custom"] = "custom"
    compute: ComputeFn


ControlBinding = Annotated[
    Union[WidgetBinding, QueryParamBinding, ComputedBinding],
    Field(discriminator="kind"),
]


class Setting(BaseModel):
    """One configurable property.

    ``values`` maps a scope to the raw value that scope currently holds.
    Read it through the resolver, which applies precedence and ignored
    scopes; write it through :meth:`SettingsResolver.set_value`.
    """

    model_config = ConfigDict(extra="ignore")

    name: str
    default_value: Any = None
    callback: Optional[ChangeCallback] = None
    controls: List[ControlBinding] = Field(default_factory=list)
    values: Dict[Scope, Any] = Field(default_factory=dict, exclude=True)

    def bindings(self, kind: ControlKind | str | None = None, scope: Scope | str | None = None):
        """Yield bindings, optionally filtered by ``kind`` and ``scope``."""
        for control in self.controls:
            if kind is not None and control.kind != ControlKind(kind).value:
                continue
            if scope is not None and control.scope is not Scope(scope):
                continue
            yield control

    def as_definition(self) -> Dict[str, Any]:
        """Plain mapping view used by the definition checker."""
        return {
            "name": self.name,
            "default_value": self.default_value,
            "callback": self.callback,
            "controls": [dict(control) for control in self.controls],
        }


# the callable aliases refer to Setting, which only exists from here on
ComputedBinding.model_rebuild()
Setting.model_rebuild()
