"""GitBook markdown rendering for a single example.

Turns an :class:`ExampleEntry` plus its contract and test sources into a
:class:`GeneratedDocument`: a lead-in paragraph, an info hint, and a tab
group with one fenced code block per source file.  Sources are embedded
verbatim; the only thing added around them is the fence.
"""

from __future__ import annotations

import re
from pathlib import PurePosixPath

from pydantic import BaseModel, Field

from fhevm_examples.config import DocsConfig
from fhevm_examples.registry import ExampleEntry

DEFAULT_CONTRACT_NAME = "Contract"

_DECLARATION_RE = re.compile(
    r"^\s*(?:abstract\s+)?(?:contract|library|interface)\s+([A-Za-z_]\w*)",
    re.MULTILINE,
)
_NOTICE_RE = re.compile(r"@notice\s+(.+)")
_BACKTICK_RUN_RE = re.compile(r"`+")

_LANGUAGES: dict[str, str] = {
    ".sol": "solidity",
    ".ts": "typescript",
    ".js": "javascript",
}


# ---------------------------------------------------------------------------
# Data Models
# ---------------------------------------------------------------------------


class CodeTab(BaseModel):
    """One GitBook tab holding a fenced source file."""

    title: str
    language: str = ""
    source: str

    def to_markdown(self) -> str:
        fence = fence_for(self.source)
        return (
            f'{{% tab title="{self.title}" %}}\n\n'
            f"{fence}{self.language}\n"
            f"{self.source}\n"
            f"{fence}\n\n"
            "{% endtab %}\n\n"
        )


class GeneratedDocument(BaseModel):
    """A rendered example page, in section order."""

    example_id: str
    description: str = ""
    hint: str = ""
    tabs: list[CodeTab] = Field(default_factory=list)

    def to_markdown(self) -> str:
        parts = [f"{self.description}\n\n"] if self.description else []
        parts.append('{% hint style="info" %}\n')
        parts.append(self.hint)
        parts.append("{% endhint %}\n\n")
        parts.append("{% tabs %}\n\n")
        parts.extend(tab.to_markdown() for tab in self.tabs)
        parts.append("{% endtabs %}\n")
        return "".join(parts)


# ---------------------------------------------------------------------------
# Renderer
# ---------------------------------------------------------------------------


class MarkdownRenderer:
    """Renders example sources into GitBook markdown."""

    def __init__(self, docs_config: DocsConfig | None = None) -> None:
        self.docs_config = docs_config or DocsConfig()

    def render_document(
        self, entry: ExampleEntry, contract_content: str, test_content: str
    ) -> GeneratedDocument:
        contract_name = extract_contract_name(contract_content)
        description = entry.description or extract_description(contract_content)

        return GeneratedDocument(
            example_id=entry.id,
            description=description,
            hint=self._hint_text(),
            tabs=[
                CodeTab(
                    title=f"{contract_name}.sol",
                    language=language_for(entry.contract_path),
                    source=contract_content,
                ),
                CodeTab(
                    title=entry.test_filename,
                    language=language_for(entry.test_path),
                    source=test_content,
                ),
            ],
        )

    def render(self, entry: ExampleEntry, contract_content: str, test_content: str) -> str:
        """Shortcut returning the markdown text directly."""
        return self.render_document(entry, contract_content, test_content).to_markdown()

    def _hint_text(self) -> str:
        contracts = self.docs_config.hint_contracts_dir
        tests = self.docs_config.hint_tests_dir
        return (
            "To run this example correctly, make sure the files are placed in the "
            "following directories:\n\n"
            f"- `.sol` file → `<your-project-root-dir>/{contracts}/`\n"
            f"- `.ts` file → `<your-project-root-dir>/{tests}/`\n\n"
            "This ensures Hardhat can compile and test your contracts as expected.\n"
        )


# ---------------------------------------------------------------------------
# Source heuristics
# ---------------------------------------------------------------------------


def extract_contract_name(source: str) -> str:
    """Return the first declared contract/library/interface name.

    Falls back to ``"Contract"`` when the source declares none.
    """
    match = _DECLARATION_RE.search(source)
    return match.group(1) if match else DEFAULT_CONTRACT_NAME


def _summary_line(text: str) -> str:
    """Drop NatSpec tag lines; keep the text of an ``@notice`` tag."""
    if not text.startswith("@"):
        return text
    tag, _, rest = text.partition(" ")
    return rest.strip() if tag == "@notice" else ""


def extract_description(source: str) -> str:
    """Best-effort one-line summary taken from the contract's doc comments.

    Scans for the first ``///`` line or the first content line of a
    ``/** ... */`` block, then falls back to the first ``@notice`` tag.
    Tag lines such as ``@title`` or ``@author`` are skipped.
    Returns an empty string when nothing matches.
    """
    in_block = False
    for raw in source.splitlines():
        line = raw.strip()
        text = ""
        if in_block:
            if line.startswith("*/"):
                in_block = False
                continue
            text = line.lstrip("*").strip()
            if text.endswith("*/"):
                text = text[:-2].strip()
                in_block = False
        elif line.startswith("/**"):
            text = line[3:].strip()
            if text.endswith("*/"):
                text = text[:-2].strip()
            else:
                in_block = True
        elif line.startswith("///"):
            text = line[3:].strip()
        text = _summary_line(text)
        if text:
            return text

    notice = _NOTICE_RE.search(source)
    return notice.group(1).strip() if notice else ""


def language_for(path: str) -> str:
    """Fence language for *path*, by extension (empty if unknown)."""
    return _LANGUAGES.get(PurePosixPath(path).suffix.lower(), "")


def fence_for(source: str) -> str:
    """Return a backtick fence longer than any backtick run in *source*."""
    longest = max((len(run) for run in _BACKTICK_RUN_RE.findall(source)), default=0)
    return "`" * max(3, longest + 1)
