# =============================================================
#  scoped_config_manager/store.py
# =============================================================
"""Persistence back-ends for exported preferences.

A store keeps named *slots*; the resolver writes its exported ``local``
values into one slot (``"epl_prefs"`` unless configured otherwise) every
time a value changes after loading.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Protocol, runtime_checkable

from pydantic_core import to_jsonable_python

from .errors import StoreError

__all__ = ["PreferenceStore", "MemoryStore", "FileStore"]

log = logging.getLogger(__name__)


@runtime_checkable
class PreferenceStore(Protocol):
    def save(self, key: str, data: Dict[str, Any]) -> None: ...

    def load(self, key: str) -> Optional[Dict[str, Any]]: ...


class MemoryStore:
    """In-process store; keeps a copy of every save in ``history``."""

    def __init__(self, initial: Optional[Dict[str, Dict[str, Any]]] = None):
        self._slots: Dict[str, Dict[str, Any]] = {k: dict(v) for k, v in (initial or {}).items()}
        self.history: list[tuple[str, Dict[str, Any]]] = []

    def save(self, key: str, data: Dict[str, Any]) -> None:
        snapshot = json.loads(json.dumps(data, default=to_jsonable_python))
        self._slots[key] = snapshot
        self.history.append((key, snapshot))

    def load(self, key: str) -> Optional[Dict[str, Any]]:
        data = self._slots.get(key)
        return None if data is None else dict(data)

    @property
    def save_count(self) -> int:
        return len(self.history)


# ---------- file I/O -------------------------------------------------------- #


def _detect_format(path: Path) -> str:
    ext = path.suffix.lower().lstrip(".")
    return {"yml": "yaml", "yaml": "yaml", "toml": "toml"}.get(ext, "json")


def _load_file(path: Path, *, file_format: Optional[str] = None) -> Dict[str, Any]:
    fmt = (file_format or _detect_format(path)).lower()
    text = path.read_text(encoding="utf-8")
    if fmt == "yaml":
        try:
            import yaml
        except ImportError as e:
            raise ImportError(
                "YAML support requires PyYAML. Install with 'pip install scoped-config-manager[yaml]'"
            ) from e
        return yaml.safe_load(text) or {}
    if fmt == "toml":
        try:
            import tomli
        except ImportError:
            try:
                import tomllib as tomli
            except ImportError as e:
                raise ImportError(
                    "TOML support requires tomli/tomllib. Install with 'pip install scoped-config-manager[toml]'"
                ) from e
        return tomli.loads(text)
    return json.loads(text) if text.strip() else {}


def _dump_file(path: Path, data: Dict[str, Any], *, file_format: Optional[str] = None):
    fmt = (file_format or _detect_format(path)).lower()
    if fmt == "yaml":
        try:
            import yaml
        except ImportError as e:
            raise ImportError(
                "YAML support requires PyYAML. Install with 'pip install scoped-config-manager[yaml]'"
            ) from e
        path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
    elif fmt == "toml":
        try:
            import tomli_w
        except ImportError as e:
            raise ImportError(
                "TOML write support requires tomli-w. Install with 'pip install scoped-config-manager[toml]'"
            ) from e
        path.write_text(tomli_w.dumps(data), encoding="utf-8")
    else:  # json
        path.write_text(
            json.dumps(data, indent=4, ensure_ascii=False, default=to_jsonable_python),
            encoding="utf-8",
        )


class FileStore:
    """Every slot lives in one JSON / YAML / TOML document on disk."""

    def __init__(self, path: str | os.PathLike, *, file_format: Optional[str] = None):
        self.path = Path(path).expanduser()
        self.file_format = file_format

    def _read_all(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = _load_file(self.path, file_format=self.file_format)
        except ImportError:
            raise
        except Exception as e:  # parser errors differ per format
            raise StoreError(f"Could not read preferences from {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StoreError(f"Preferences file {self.path} does not hold a mapping")
        return data

    def save(self, key: str, data: Dict[str, Any]) -> None:
        try:
            document = self._read_all()
        except StoreError as e:
            log.warning("Replacing unreadable preferences file: %s", e)
            document = {}
        document[key] = data
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            _dump_file(self.path, document, file_format=self.file_format)
        except (OSError, TypeError, ValueError) as e:
            raise StoreError(f"Could not save preferences to {self.path}: {e}") from e
        log.info("Preferences '%s' saved to %s", key, self.path)

    def load(self, key: str) -> Optional[Dict[str, Any]]:
        try:
            data = self._read_all().get(key)
        except StoreError as e:
            log.warning("Bad data in %s; ignoring saved preferences.  (%s)", self.path, e)
            return None
        return data if isinstance(data, dict) else None
