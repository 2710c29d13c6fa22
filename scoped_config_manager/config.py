# =============================================================
#  scoped_config_manager/config.py
# =============================================================
"""Runtime configuration of the resolver, read from ``SCOPED_CONFIG_*`` env vars."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import List, Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .store import FileStore

__all__ = ["ResolverConfig", "DEFAULT_STORE_KEY"]

DEFAULT_STORE_KEY = "epl_prefs"


def _default_store_path() -> Path:
    return Path(tempfile.gettempdir()) / "scoped_config_manager" / "prefs.json"


class ResolverConfig(BaseSettings):
    """Knobs for :class:`~scoped_config_manager.manager.SettingsResolver`."""

    store_key: str = Field(
        default=DEFAULT_STORE_KEY,
        description="Slot name the exported local values are saved under.",
    )
    store_path: Path = Field(
        default_factory=_default_store_path,
        description="File backing the preference store.",
    )
    store_format: Optional[Literal["json", "yaml", "toml"]] = Field(
        default=None,
        description="File format; guessed from the suffix of store_path when unset.",
    )
    # plain strings so that unknown names reach the definition checker
    ignored_scopes: List[str] = Field(
        default_factory=list,
        description="Scopes excluded from resolution from the start.",
    )
    restore_saved: bool = Field(
        default=False,
        description=(
            "Seed the local scope from previously saved preferences. Falsy values "
            "are never exported, so a setting saved without a local entry comes "
            "back as False when its default is a boolean and as its default "
            "otherwise."
        ),
    )

    model_config = SettingsConfigDict(env_prefix="SCOPED_CONFIG_", extra="ignore")

    def file_store(self) -> FileStore:
        """Preference file described by ``store_path`` and ``store_format``."""
        return FileStore(self.store_path, file_format=self.store_format)
