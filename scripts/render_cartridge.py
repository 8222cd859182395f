"""Render a cartridge to an annotated HTML fragment.

Usage:
    python scripts/render_cartridge.py <cartridge.md> [output.html]
"""

from __future__ import annotations

import sys
from pathlib import Path

from cartridge.domain.cartridge import load_cartridge
from cartridge.main import configure_logging


def render(source: Path, output: Path | None = None) -> None:
    if not source.is_file():
        print(f"Error: Cartridge '{source}' not found.")
        sys.exit(1)

    cartridge = load_cartridge(source.read_text(encoding="utf-8"))

    if cartridge.decode_error:
        print(f"Warning: definitions block ignored: {cartridge.decode_error}", file=sys.stderr)
    for term, error in cartridge.entry_errors.items():
        print(f"Warning: definition '{term}' skipped: {error}", file=sys.stderr)

    print("Outline:", file=sys.stderr)
    for entry in cartridge.outline:
        indent = "  " * (entry.level - 1)
        print(f"{indent}- {entry.text} (#{entry.id})", file=sys.stderr)

    if output is None:
        print(cartridge.html)
    else:
        output.write_text(cartridge.html, encoding="utf-8")
        print(f"Wrote {output} ({len(cartridge.roll_tables)} roll tables).", file=sys.stderr)


if __name__ == "__main__":
    if len(sys.argv) not in (2, 3):
        print("Usage: python scripts/render_cartridge.py <cartridge.md> [output.html]")
        sys.exit(1)
    configure_logging()
    render(Path(sys.argv[1]), Path(sys.argv[2]) if len(sys.argv) == 3 else None)
