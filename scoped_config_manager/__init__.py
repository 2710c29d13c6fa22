# =============================================================
#  scoped_config_manager/__init__.py
# =============================================================
"""
Scoped-Config-Manager
=====================

Resolves one *effective* value per setting out of several independent
sources (*scopes*), keeps bound UI widgets in sync with it and saves the
user's own preferences to a local store.

Main ideas
~~~~~~~~~~
* Every setting is a **Pydantic** model with a default and a list of
  *control bindings*: a widget, a query-string parameter or a computed value,
  each tied to one scope (``local``, ``global`` or ``get``).
* The table is checked once, up front, and a malformed definition aborts
  start-up with **all** problems logged.
* Scope precedence follows the declared order ``local`` → ``global`` →
  ``get``: the *last* scope holding a value wins, unless it is ignored.
* Every change goes through :meth:`SettingsResolver.set_value`, which mirrors
  the value into bound widgets, runs the setting's callback and, once loading
  finished, persists the ``local`` values.

Quick example
~~~~~~~~~~~~~
```python
from scoped_config_manager import (
    SettingDef, SettingRegistry, SettingsResolver, MemoryStore,
    parse_query_string, query_param, widget,
)

registry = SettingRegistry([
    SettingDef("showChat", True, controls=[query_param("get", "showChat")]),
    SettingDef("stickychat", False, controls=[widget("local", "options-stickychat")]),
])

resolver = SettingsResolver(
    registry,
    query=parse_query_string("https://example.com/p/pad?showChat=false"),
    store=MemoryStore(),
)
resolver.load_settings()                 # validate → seed → persist
print(resolver.get_value("showChat"))    # → False

resolver.set_ignore_scope("get", True)
print(resolver.get_value("showChat"))    # → True (default, local scope)
```
"""

from __future__ import annotations

from importlib import metadata as _meta
import logging as _logging

# --------------------------------------------------------------------- #
# Version
# --------------------------------------------------------------------- #
try:  # When installed (pip/poetry)
    __version__: str = _meta.version("scoped_config_manager")
except _meta.PackageNotFoundError:  # Editable checkout / source tree
    __version__ = "0.1.0"

# --------------------------------------------------------------------- #
# Logging
# --------------------------------------------------------------------- #
_logging.getLogger(__name__).addHandler(_logging.NullHandler()) # *never* touch the root logger.

# --------------------------------------------------------------------- #
# Public re-exports
# --------------------------------------------------------------------- #
from .config import ResolverConfig  # noqa: E402
from .defaults import default_settings, default_toolkit  # noqa: E402
from .errors import (  # noqa: E402
    MissingControlError,
    SettingsDefinitionError,
    SettingsError,
    StoreError,
    UnknownScopeError,
    UnknownSettingError,
    UnsupportedControlError,
)
from .helpers import SettingDef, computed, query_param, widget  # noqa: E402
from .manager import SettingsResolver  # noqa: E402
from .models import (  # noqa: E402
    PRECEDENCE,
    SCOPES,
    ComputedBinding,
    ControlKind,
    QueryParamBinding,
    Scope,
    Setting,
    WidgetBinding,
)
from .registry import SettingRegistry  # noqa: E402
from .sources import coerce_query_value, parse_query_string  # noqa: E402
from .store import FileStore, MemoryStore, PreferenceStore  # noqa: E402
from .validation import check_definitions, validate_definitions  # noqa: E402
from .widgets import CheckboxWidget, SelectWidget, TextWidget, WidgetToolkit  # noqa: E402

__all__ = [
    "SettingsResolver",
    "SettingRegistry",
    "ResolverConfig",
    "Setting",
    "SettingDef",
    "Scope",
    "ControlKind",
    "SCOPES",
    "PRECEDENCE",
    "WidgetBinding",
    "QueryParamBinding",
    "ComputedBinding",
    "widget",
    "query_param",
    "computed",
    "check_definitions",
    "validate_definitions",
    "parse_query_string",
    "coerce_query_value",
    "PreferenceStore",
    "MemoryStore",
    "FileStore",
    "WidgetToolkit",
    "CheckboxWidget",
    "SelectWidget",
    "TextWidget",
    "default_settings",
    "default_toolkit",
    "SettingsError",
    "SettingsDefinitionError",
    "UnknownScopeError",
    "UnknownSettingError",
    "MissingControlError",
    "UnsupportedControlError",
    "StoreError",
]
