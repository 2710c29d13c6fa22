# =============================================================
#  scoped_config_manager/cli.py
# =============================================================
from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from .config import DEFAULT_STORE_KEY, ResolverConfig
from .defaults import default_settings
from .errors import SettingsDefinitionError
from .manager import SettingsResolver
from .models import SCOPES, Scope
from .registry import SettingRegistry
from .sources import coerce_query_value, parse_query_string
from .store import FileStore, _dump_file, _load_file


def _cmd_validate(args: argparse.Namespace) -> int:
    registry = SettingRegistry(default_settings())
    try:
        registry.validate(args.ignore or ())
    except SettingsDefinitionError as e:
        for msg in e.errors:
            print(msg)
        return 1
    print(f"{len(registry)} settings OK")
    return 0


def _cmd_resolve(args: argparse.Namespace) -> int:
    query = parse_query_string(args.query or "")
    config = ResolverConfig(ignored_scopes=args.ignore or [])
    if args.no_store:
        store = None
    elif args.store:
        store = FileStore(args.store)
    else:
        store = config.file_store()
    resolver = SettingsResolver(
        SettingRegistry(default_settings(query)),
        query=query,
        store=store,
        config=config,
    )
    try:
        resolver.load_settings()
    except SettingsDefinitionError as e:
        for msg in e.errors:
            print(msg)
        return 1
    if resolver.get_value("ignoreGlobal"):
        resolver.set_ignore_scope(Scope.GLOBAL, True)

    if args.export is not None:
        out = resolver.export_settings(args.export or None)
    else:
        out = {s.name: resolver.get_value(s.name) for s in resolver.registry}
    print(json.dumps(out, indent=4))
    return 0


def _cmd_show(args: argparse.Namespace) -> int:
    data = _load_file(Path(args.file))
    print(json.dumps(data, indent=4))
    return 0


def _cmd_set(args: argparse.Namespace) -> int:
    path = Path(args.file)
    data = _load_file(path) if path.exists() else {}
    slot = data.setdefault(args.key, {})
    slot.setdefault(args.name, {})[Scope.LOCAL.value] = coerce_query_value(args.value)
    path.parent.mkdir(parents=True, exist_ok=True)
    _dump_file(path, data)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Scoped Config Manager CLI")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log to stderr")
    sub = parser.add_subparsers(dest="cmd", required=True)
    scope_names = [s.value for s in SCOPES]

    p_val = sub.add_parser("validate", help="Check the stock setting table")
    p_val.add_argument("--ignore", action="append", metavar="SCOPE")
    p_val.set_defaults(func=_cmd_validate)

    p_res = sub.add_parser("resolve", help="Print effective values of the stock table")
    p_res.add_argument("--query", default="", help="Query string or full URL")
    p_res.add_argument("--ignore", action="append", metavar="SCOPE")
    p_res.add_argument("--store", help="Preferences file to persist into (default: store_path from the config)")
    p_res.add_argument("--no-store", action="store_true", help="Do not persist anything")
    p_res.add_argument(
        "--export",
        nargs="?",
        const="",
        choices=["", *scope_names],
        help="Print exported scope values instead (optionally one scope)",
    )
    p_res.set_defaults(func=_cmd_resolve)

    p_show = sub.add_parser("show", help="Display preferences file")
    p_show.add_argument("file")
    p_show.set_defaults(func=_cmd_show)

    p_set = sub.add_parser("set", help="Set a local preference in a preferences file")
    p_set.add_argument("file")
    p_set.add_argument("name")
    p_set.add_argument("value")
    p_set.add_argument("--key", default=DEFAULT_STORE_KEY, help="Store slot")
    p_set.set_defaults(func=_cmd_set)

    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    return args.func(args)


if __name__ == "__main__":  # pragma: no cover - manual use
    raise SystemExit(main())
