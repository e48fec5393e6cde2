"""GitBook documentation generation: page rendering and ``SUMMARY.md`` upkeep."""

from fhevm_examples.docgen.markdown import (
    CodeTab,
    GeneratedDocument,
    MarkdownRenderer,
    extract_contract_name,
    extract_description,
)
from fhevm_examples.docgen.summary import SummaryIndex, parse_summary

__all__ = [
    "CodeTab",
    "GeneratedDocument",
    "MarkdownRenderer",
    "SummaryIndex",
    "extract_contract_name",
    "extract_description",
    "parse_summary",
]
