#!/usr/bin/env python3
# =============================================================
#  examples/pad_settings_example.py
# =============================================================
"""
Example wiring the stock editor settings to widgets and a preferences file.

Shows how to:
1. Build, validate and load the registry from a navigation URL
2. React to changes through a setting callback
3. Route widget edits through the resolver and persist them
4. Ignore the site-wide scope on request
"""

import logging
import tempfile
from pathlib import Path

from scoped_config_manager import (
    FileStore,
    Scope,
    SettingRegistry,
    SettingsResolver,
    default_settings,
    default_toolkit,
    parse_query_string,
)


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    url = "https://pad.example.org/p/demo?userName=Ann&lang=de&noColors=true"
    query = parse_query_string(url)

    settings = default_settings(query)
    for setting in settings:
        if setting.name == "useMonospaceFont":
            setting.callback = lambda s, value: print(f"   font -> {'monospace' if value else 'normal'}")

    prefs = Path(tempfile.mkdtemp(prefix="scoped_cfg_")) / "prefs.json"
    toolkit = default_toolkit()
    resolver = SettingsResolver(
        SettingRegistry(settings),
        query=query,
        toolkit=toolkit,
        store=FileStore(prefs),
    )

    print("=== Loading ===")
    resolver.load_settings()
    for name in ("name", "language", "showAuthorColors", "useMonospaceFont"):
        print(f"   {name:<18} = {resolver.get_value(name)!r} ({resolver.effective_scope(name).value})")

    print("\n=== User ticks the monospace option ===")
    resolver.connect_widgets()
    toolkit["viewfontmenu"].user_change(True)
    print(f"   saved: {prefs.read_text()}")

    print("\n=== Site-wide override, then ignoring it ===")
    resolver.set_value("useMonospaceFont", Scope.GLOBAL, False)
    resolver.set_ignore_scope(Scope.GLOBAL, True)
    print(f"   useMonospaceFont = {resolver.get_value('useMonospaceFont')!r}")


if __name__ == "__main__":
    main()
