"""``SUMMARY.md`` index maintenance.

The index is a GitBook table of contents grouped by ``## <category>``
headers, each followed by ``- [Title](page.md)`` links.  Only header lines
are structural; every other line (notes, comments, hand-added links) is
kept exactly where it is.  Updates are append-only and idempotent: a page
that is already linked anywhere in the file is never linked twice.
"""

from __future__ import annotations

import os
import posixpath
import re
from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import quote, unquote

from fhevm_examples.utils import read_text_exact, write_text_atomic

CATEGORY_PREFIX = "## "

_HEADER_RE = re.compile(r"^#{1,6}\s")
_LINK_RE = re.compile(
    r"^\s*[-*+]\s+\[(?P<title>(?:\\.|[^\]\\])*)\]"
    r"\((?:<(?P<angled>[^<>\n]+)>|(?P<target>[^)\s]+))\)"
)
_ESCAPED_RE = re.compile(r"\\(.)")
_UNSAFE_TARGET_RE = re.compile(r"[\s()<>]")


# ---------------------------------------------------------------------------
# Parsed structure
# ---------------------------------------------------------------------------


@dataclass
class SummaryLink:
    """A ``- [title](target)`` line."""

    title: str
    target: str
    line_no: int


@dataclass
class SummarySection:
    """Lines from one header up to (not including) the next header.

    ``category`` is ``None`` for the preamble before the first header and
    for headers that are not ``## `` category headers.
    """

    category: str | None
    start: int
    end: int
    links: list[SummaryLink] = field(default_factory=list)


def parse_summary(lines: list[str]) -> list[SummarySection]:
    """Split index lines into sections at header markers."""
    sections: list[SummarySection] = [SummarySection(category=None, start=0, end=0)]
    for idx, line in enumerate(lines):
        if _HEADER_RE.match(line):
            sections[-1].end = idx
            category = line[len(CATEGORY_PREFIX):].strip() if line.startswith(CATEGORY_PREFIX) else None
            sections.append(SummarySection(category=category, start=idx, end=idx))
            continue
        match = _LINK_RE.match(line)
        if match:
            sections[-1].links.append(
                SummaryLink(
                    title=_ESCAPED_RE.sub(r"\1", match.group("title")),
                    target=match.group("angled") or match.group("target"),
                    line_no=idx,
                )
            )
    sections[-1].end = len(lines)
    return sections


def link_target(index_path: str | Path, output_path: str | Path) -> str:
    """Path of *output_path* relative to the index directory, POSIX style."""
    index_dir = Path(index_path).resolve().parent
    rel = os.path.relpath(Path(output_path).resolve(), index_dir)
    return Path(rel).as_posix()


def format_link(title: str, target: str) -> str:
    """Bullet link that :func:`parse_summary` reads back to the same title and target."""
    title = re.sub(r"([\\\[\]])", r"\\\1", title)
    if _UNSAFE_TARGET_RE.search(target):
        target = quote(target, safe="/")
    return f"- [{title}]({target})"


def _same_target(a: str, b: str) -> bool:
    return posixpath.normpath(unquote(a)) == posixpath.normpath(unquote(b))


# ---------------------------------------------------------------------------
# SummaryIndex
# ---------------------------------------------------------------------------


class SummaryIndex:
    """Incremental editor for a category-grouped ``SUMMARY.md``."""

    def __init__(self, path: str | Path, default_category: str = "Basic") -> None:
        self.path = Path(path)
        self.default_category = default_category

    def ensure_exists(self) -> bool:
        """Create the index with an empty default section. Returns ``True`` if created."""
        if self.path.exists():
            return False
        write_text_atomic(self.path, f"{CATEGORY_PREFIX}{self.default_category}\n\n")
        return True

    def read_lines(self) -> list[str]:
        """Index lines split on ``\\n`` only; CRLF lines keep their ``\\r``."""
        if not self.path.exists():
            return []
        lines = read_text_exact(self.path).split("\n")
        if lines[-1] == "":
            lines.pop()
        return lines

    def sections(self) -> list[SummarySection]:
        return parse_summary(self.read_lines())

    def contains(self, output_path: str | Path) -> bool:
        target = link_target(self.path, output_path)
        return any(
            _same_target(link.target, target)
            for section in self.sections()
            for link in section.links
        )

    def upsert(self, category: str, title: str, output_path: str | Path) -> bool:
        """Link *output_path* under *category*.

        Returns ``False`` (and leaves the file untouched) when the page is
        already linked anywhere in the index.
        """
        self.ensure_exists()
        lines = self.read_lines()
        sections = parse_summary(lines)
        target = link_target(self.path, output_path)

        for section in sections:
            if any(_same_target(link.target, target) for link in section.links):
                return False

        # New lines follow the file's line ending so CRLF indexes stay CRLF.
        eol = "\r" if any(line.endswith("\r") for line in lines) else ""
        link = format_link(title, target) + eol
        section = next((s for s in sections if s.category == category), None)

        if section is None:
            while lines and not lines[-1].strip():
                lines.pop()
            if lines:
                lines.append(eol)
            lines.extend([f"{CATEGORY_PREFIX}{category}{eol}", eol, link])
        else:
            _insert_into_section(lines, section, link, eol)

        if eol and not lines[-1].endswith(eol):
            lines[-1] += eol
        write_text_atomic(self.path, "\n".join(lines) + "\n")
        return True


def _insert_into_section(
    lines: list[str], section: SummarySection, link: str, blank: str = ""
) -> None:
    """Insert *link* at the end of the section's link block."""
    if section.links:
        pos = section.links[-1].line_no + 1
        lines.insert(pos, link)
    else:
        anchor = section.start
        for idx in range(section.end - 1, section.start, -1):
            if lines[idx].strip():
                anchor = idx
                break
        pos = anchor + 2
        if pos - 1 < len(lines) and not lines[pos - 1].strip():
            lines.insert(pos, link)
        else:
            lines[anchor + 1:anchor + 1] = [blank, link]

    after = pos + 1
    if after < len(lines) and _HEADER_RE.match(lines[after]):
        lines.insert(after, blank)
