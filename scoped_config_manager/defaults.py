# =============================================================
#  scoped_config_manager/defaults.py
# =============================================================
"""
Stock setting table of the collaborative editor client.

Scopes per setting follow the client's needs: identity and embedding
parameters only come from the query string, view options additionally have
a personal (``local``) and a site-wide (``global``) widget.
"""

from __future__ import annotations

from typing import List, Optional

from .helpers import SettingDef, computed, query_param, widget
from .models import Scope, Setting
from .sources import QueryParams
from .widgets import CheckboxWidget, SelectWidget, WidgetToolkit

__all__ = ["default_settings", "default_toolkit"]


def default_settings(query: Optional[QueryParams] = None) -> List[Setting]:
    """Return a fresh copy of the stock table.

    ``query`` feeds computed bindings that need more than a plain parameter
    lookup.
    """
    query = query or {}

    def _author_colors_from_query(setting, scope):
        # noColors=true means showAuthorColors=false
        if query.get("noColors") is not None:
            return query["noColors"] == "false"
        return None

    return [
        # special settings
        SettingDef("name", None, controls=[query_param(Scope.GET, "userName")]),
        SettingDef("userId", None),
        SettingDef("userColor", None, controls=[query_param(Scope.GET, "userColor")]),
        SettingDef("language", "en", controls=[query_param(Scope.GET, "lang")]),
        SettingDef("rtl", False, controls=[query_param(Scope.GET, "rtl")]),
        SettingDef(
            "ignoreGlobal",
            False,
            controls=[
                query_param(Scope.GET, "ignoreGlobal"),
                widget(Scope.LOCAL, "options-ignore-global"),
            ],
        ),
        # normal UI settings
        SettingDef(
            "showAuthorColors",
            True,
            controls=[
                widget(Scope.LOCAL, "options-colorscheck"),
                widget(Scope.GLOBAL, "options-colorscheck-global"),
                computed(Scope.GET, _author_colors_from_query),
            ],
        ),
        SettingDef(
            "showLineNumbers",
            True,
            controls=[
                query_param(Scope.GET, "showLineNumbers"),
                widget(Scope.LOCAL, "options-linenoscheck"),
                widget(Scope.GLOBAL, "options-linenoscheck-global"),
            ],
        ),
        SettingDef(
            "useMonospaceFont",
            False,
            controls=[
                query_param(Scope.GET, "useMonospaceFont"),
                widget(Scope.LOCAL, "viewfontmenu"),
                widget(Scope.GLOBAL, "viewfontmenu-global"),
            ],
        ),
        SettingDef(
            "stickychat",
            False,
            controls=[
                query_param(Scope.GET, "alwaysShowChat"),
                widget(Scope.LOCAL, "options-stickychat"),
            ],
        ),
        # pure get parameters, used for embedding
        SettingDef("showControls", True, controls=[query_param(Scope.GET, "showControls")]),
        SettingDef("showChat", True, controls=[query_param(Scope.GET, "showChat")]),
    ]


def default_toolkit() -> WidgetToolkit:
    """Widgets the stock table binds to, in their initial state."""
    checkboxes = [
        "options-ignore-global",
        "options-colorscheck",
        "options-colorscheck-global",
        "options-linenoscheck",
        "options-linenoscheck-global",
        "options-stickychat",
    ]
    toolkit = WidgetToolkit([CheckboxWidget(widget_id) for widget_id in checkboxes])
    for widget_id in ("viewfontmenu", "viewfontmenu-global"):
        toolkit.add(SelectWidget(widget_id, options=[False, True]))
    return toolkit
