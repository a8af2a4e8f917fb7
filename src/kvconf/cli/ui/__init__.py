from __future__ import annotations

from kvconf.cli.ui.formatters import (
    UI,
    get_ui,
    render_entries_table,
    render_json,
    setup_logging,
)

__all__ = [
    "UI",
    "get_ui",
    "render_entries_table",
    "render_json",
    "setup_logging",
]
