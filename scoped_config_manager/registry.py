# =============================================================
#  scoped_config_manager/registry.py
# =============================================================
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence

from pydantic import ValidationError

from .errors import SettingsDefinitionError, UnknownSettingError
from .models import Setting
from .validation import ERROR_PREFIX, validate_definitions

__all__ = ["SettingRegistry"]

log = logging.getLogger(__name__)


class SettingRegistry:
    """
    Static table of settings, built once and never resized.

    Lifecycle is *build → validate → load*: the constructor only stores the
    definitions, :meth:`validate` checks them and turns mappings into
    :class:`Setting` models, and a
    :class:`~scoped_config_manager.manager.SettingsResolver` loads values.
    """

    def __init__(self, definitions: Iterable[Setting | Dict[str, Any]]):
        self._definitions: List[Any] = list(definitions)
        self._settings: List[Setting] = []
        self._by_name: Dict[str, Setting] = {}
        self._validated = False

    @classmethod
    def build(
        cls,
        definitions: Iterable[Setting | Dict[str, Any]],
        *,
        ignored_scopes: Iterable[Any] = (),
    ) -> "SettingRegistry":
        registry = cls(definitions)
        registry.validate(ignored_scopes)
        return registry

    # ---------- validation -------------------------------------------- #

    @property
    def validated(self) -> bool:
        return self._validated

    def validate(self, ignored_scopes: Iterable[Any] = ()) -> None:
        """Check every definition; raise :class:`SettingsDefinitionError` on failure."""
        validate_definitions(self._definitions, ignored_scopes)
        if self._validated:
            return

        settings: List[Setting] = []
        errors: List[str] = []
        for i, definition in enumerate(self._definitions):
            if isinstance(definition, Setting):
                settings.append(definition)
                continue
            try:
                settings.append(Setting.model_validate(definition))
            except ValidationError as e:
                msg = f"{ERROR_PREFIX}setting {definition.get('name', i)} is malformed: {e}"
                log.error(msg)
                errors.append(msg)
        if errors:
            raise SettingsDefinitionError(errors)

        self._settings = settings
        self._by_name = {s.name: s for s in settings}
        self._validated = True
        log.debug("Validated %d setting definitions", len(settings))

    def _require_validated(self) -> None:
        if not self._validated:
            raise RuntimeError("Setting registry has not been validated yet.")

    # ---------- lookup ------------------------------------------------ #

    def get(self, name: str) -> Setting:
        self._require_validated()
        try:
            return self._by_name[name]
        except KeyError:
            raise UnknownSettingError(name, self.names()) from None

    def find(self, name: str) -> Optional[Setting]:
        self._require_validated()
        return self._by_name.get(name)

    def names(self) -> List[str]:
        return [s.name for s in self._settings]

    def __getitem__(self, name: str) -> Setting:
        return self.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[Setting]:
        self._require_validated()
        return iter(self._settings)

    def __len__(self) -> int:
        return len(self._definitions)

    @property
    def definitions(self) -> Sequence[Any]:
        return tuple(self._definitions)
