# =============================================================
#  scoped_config_manager/helpers.py
# =============================================================
from __future__ import annotations

from typing import Any, Iterable, Optional

from .models import (
    ChangeCallback,
    ComputedBinding,
    ComputeFn,
    QueryParamBinding,
    Scope,
    Setting,
    WidgetBinding,
)

__all__ = ["SettingDef", "widget", "query_param", "computed"]


def widget(scope: Scope | str, widget_id: str) -> WidgetBinding:
    return WidgetBinding(scope=scope, widget_id=widget_id)


def query_param(scope: Scope | str, param_name: str) -> QueryParamBinding:
    return QueryParamBinding(scope=scope, param_name=param_name)


def computed(scope: Scope | str, compute: ComputeFn) -> ComputedBinding:
    return ComputedBinding(scope=scope, compute=compute)


def SettingDef(
    name: str,
    default: Any = None,
    *,
    callback: Optional[ChangeCallback] = None,
    controls: Iterable[Any] = (),
) -> Setting:
    """Wrapper around :class:`Setting` taking the bindings positionally."""

    return Setting(
        name=name,
        default_value=default,
        callback=callback,
        controls=list(controls),
    )
