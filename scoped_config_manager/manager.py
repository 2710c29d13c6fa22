# =============================================================
#  scoped_config_manager/manager.py
# =============================================================
from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

from .config import ResolverConfig
from .errors import (
    MissingControlError,
    StoreError,
    UnknownScopeError,
    UnsupportedControlError,
)
from .models import PRECEDENCE, SCOPES, ControlKind, Scope, Setting
from .registry import SettingRegistry
from .sources import QueryParams, coerce_query_value
from .store import PreferenceStore
from .validation import is_scope
from .widgets import WidgetToolkit, write_widget

__all__ = ["SettingsResolver"]

log = logging.getLogger(__name__)


def _to_scope(scope: Any) -> Scope:
    try:
        return Scope(scope)
    except ValueError:
        raise UnknownScopeError(scope) from None


def _restored_local(setting: Setting, saved: Dict[str, Any]) -> Any:
    """Local value to restore from one exported entry.

    Falsy values are never exported, so an entry without ``local`` stands
    for ``False`` on boolean settings. For other settings the kind of falsy
    value is lost and the default is kept.
    """
    if Scope.LOCAL.value in saved:
        return saved[Scope.LOCAL.value]
    if isinstance(setting.default_value, bool):
        return False
    return setting.default_value


class SettingsResolver:
    """
    Resolves one effective value per setting out of its scope values.

    Parameters
    ----------
    registry : SettingRegistry
        The table of settings; validated on :meth:`load_settings` if needed.
    query : Mapping[str, str | None], optional
        Parsed query string of the current navigation.
    toolkit : WidgetToolkit, optional
        Live widgets. Without one, widget bindings are not mirrored.
    store : PreferenceStore, optional
        Where exported ``local`` values go. Without one nothing is persisted.
    config : ResolverConfig, optional
        Store slot name, initially ignored scopes, restore behaviour. With
        ``restore_saved`` a saved entry lacking a ``local`` value (falsy values
        are not exported) restores as ``False`` for boolean settings and as
        the default for any other setting.
    """

    def __init__(
        self,
        registry: SettingRegistry,
        *,
        query: Optional[QueryParams] = None,
        toolkit: Optional[WidgetToolkit] = None,
        store: Optional[PreferenceStore] = None,
        config: Optional[ResolverConfig] = None,
    ):
        self.registry = registry
        self.config = config or ResolverConfig()
        self._query: Mapping[str, Optional[str]] = dict(query or {})
        self._toolkit = toolkit
        self._store = store
        # kept raw until validation so unknown names are reported, not raised
        self._ignored: List[Any] = list(self.config.ignored_scopes)
        self._loaded = False

    # ------------ state ----------------------------------------------- #

    @property
    def loaded(self) -> bool:
        return self._loaded

    @property
    def ignored_scopes(self) -> frozenset[Scope]:
        return frozenset(Scope(s) for s in self._ignored if is_scope(s))

    # ------------ loading --------------------------------------------- #

    def load_settings(self) -> None:
        """Validate the registry, seed every scope and switch to *loaded*."""
        self._loaded = False
        self.registry.validate(self._ignored)
        self._ignored = list(dict.fromkeys(Scope(s) for s in self._ignored))

        saved = self._saved_local_values() if self.config.restore_saved else {}

        for setting in self.registry:
            setting.values = {Scope.LOCAL: setting.default_value}
            if setting.name in saved:
                setting.values[Scope.LOCAL] = _restored_local(setting, saved[setting.name])

            for control in setting.controls:
                if control.kind == ControlKind.GET.value:
                    value = coerce_query_value(self._query.get(control.param_name))
                    if value is not None:
                        setting.values[control.scope] = value
                elif control.kind == ControlKind.CUSTOM.value:
                    value = control.compute(setting, control.scope)
                    if value is not None:
                        setting.values[control.scope] = value

            for scope in SCOPES:
                if scope in setting.values:
                    self.set_value(setting.name, scope, setting.values[scope])

        # callbacks of settings nothing was committed for run here too
        for setting in self.registry:
            if setting.callback is not None:
                setting.callback(setting, self.get_value(setting.name))

        self._loaded = True
        log.info("Loaded %d settings", len(self.registry))
        self.persist()

    def _saved_local_values(self) -> Dict[str, Dict[str, Any]]:
        if self._store is None:
            return {}
        exported = self._store.load(self.config.store_key) or {}
        return {name: scopes for name, scopes in exported.items() if isinstance(scopes, dict)}

    # ------------ value access ---------------------------------------- #

    def get_setting(self, name: str) -> Setting:
        return self.registry.get(name)

    def get_value(self, name: str) -> Any:
        """Effective value of ``name``, or ``None`` if no scope supplies one."""
        scope = self.effective_scope(name)
        if scope is None:
            return None
        return self.registry.get(name).values[scope]

    get = get_value

    def effective_scope(self, name: str) -> Optional[Scope]:
        """The scope the effective value of ``name`` comes from."""
        setting = self.registry.get(name)
        for scope in PRECEDENCE:
            if scope not in self._ignored and scope in setting.values:
                return scope
        return None

    def set_value(self, name: str, scope: Scope | str, value: Any) -> None:
        """Set ``name`` for one scope, mirror it, notify and persist."""
        scope = _to_scope(scope)
        setting = self.registry.get(name)

        setting.values[scope] = value

        if self._toolkit is not None:
            for control in setting.bindings(ControlKind.CONTROL, scope):
                try:
                    write_widget(self._toolkit, control.widget_id, setting.name, value)
                except (MissingControlError, UnsupportedControlError) as exc:
                    log.error("%s", exc)
                    raise
        else:
            log.debug("No widget toolkit; '%s' is not mirrored.", name)

        if setting.callback is not None:
            setting.callback(setting, self.get_value(name))

        if self._loaded:
            self.persist()

    def set_ignore_scope(self, scope: Scope | str, ignore: bool) -> None:
        scope = _to_scope(scope)
        if ignore and scope not in self._ignored:
            self._ignored.append(scope)
        elif not ignore and scope in self._ignored:
            self._ignored.remove(scope)

    # ------------ widget events --------------------------------------- #

    def handle_widget_change(self, widget_id: str, value: Any) -> None:
        """Route a user edit of widget ``widget_id`` through :meth:`set_value`."""
        for setting in self.registry:
            for control in setting.bindings(ControlKind.CONTROL):
                if control.widget_id == widget_id:
                    self.set_value(setting.name, control.scope, value)

    def connect_widgets(self) -> None:
        """Subscribe to change events of every bound widget in the toolkit."""
        if self._toolkit is None:
            return
        bound = {
            control.widget_id
            for setting in self.registry
            for control in setting.bindings(ControlKind.CONTROL)
        }
        for widget in self._toolkit:
            if widget.widget_id in bound:
                widget.connect(self.handle_widget_change)

    # ------------ export / persistence -------------------------------- #

    def export_settings(self, scope: Scope | str | None = None) -> Dict[str, Dict[str, Any]]:
        """``{name: {scope: value}}``; falsy values are left out."""
        only = _to_scope(scope) if scope else None
        out: Dict[str, Dict[str, Any]] = {}
        for setting in self.registry:
            out[setting.name] = {
                s.value: setting.values[s]
                for s in SCOPES
                if (only is None or s is only) and setting.values.get(s)
            }
        return out

    def persist(self) -> bool:
        if self._store is None:
            log.debug("No preference store; nothing persisted.")
            return False
        try:
            self._store.save(self.config.store_key, self.export_settings(Scope.LOCAL))
            return True
        except StoreError as exc:
            log.warning("Could not save preferences: %s", exc, exc_info=True)
            return False
