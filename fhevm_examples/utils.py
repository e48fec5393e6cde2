"""Shared utility functions for the FHEVM examples toolkit.

Byte-exact reads, atomic writes, JSON I/O, slugs, and the Rich console
helpers every command reports through.
"""

from __future__ import annotations

import json
import os
import re
import tempfile
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule
from rich.table import Table

console = Console()

# ---------------------------------------------------------------------------
# String / name helpers
# ---------------------------------------------------------------------------


def slugify(text: str) -> str:
    """Convert text to a URL/filename-safe slug (hyphenated).

    Examples::

        slugify("FHE Counter") -> "fhe-counter"
        slugify("ERC7984 Wrapper (ERC20 ↔ Confidential)") -> "erc7984-wrapper-erc20-confidential"
    """
    slug = re.sub(r"[^a-z0-9]+", "-", text.lower().strip())
    return slug.strip("-")


# ---------------------------------------------------------------------------
# File I/O
# ---------------------------------------------------------------------------


def read_text_exact(path: str | Path) -> str:
    """Read a UTF-8 file without newline translation, so CRLF endings survive."""
    return Path(path).read_bytes().decode("utf-8")


def write_text_atomic(path: str | Path, content: str) -> Path:
    """Replace *path* with *content* via a sibling temp file and ``os.replace``.

    Readers see either the old file or the new one, never a partial write.
    Parent directories are created and newlines are written untranslated.
    """
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{target.name}.", suffix=".tmp", dir=str(target.parent)
    )
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(content.encode("utf-8"))
        os.replace(tmp_name, target)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    return target


def load_json(path: str | Path) -> dict[str, Any]:
    """Parse a JSON file; a non-object document comes back as ``{"_root": data}``.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
    """
    data = json.loads(read_text_exact(path))
    return data if isinstance(data, dict) else {"_root": data}


def save_json(data: dict[str, Any] | list[Any], path: str | Path) -> Path:
    """Atomically write *data* as two-space-indented JSON plus a final newline."""
    return write_text_atomic(path, json.dumps(data, indent=2, ensure_ascii=False) + "\n")


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_header(title: str, color: str = "bright_cyan") -> None:
    """Print a full-width rule with *title* in the middle."""
    console.print()
    console.print(Rule(f"[bold {color}] {title} [/bold {color}]", style=color))
    console.print()


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(escape(key), escape(str(value)))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")


def print_info(message: str) -> None:
    """Print a blue informational message."""
    console.print(f"[blue]{escape(message)}[/blue]")
