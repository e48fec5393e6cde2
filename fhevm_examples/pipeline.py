"""FHEVM examples pipeline orchestrator and CLI.

Drives registry lookup, source loading, rendering, output writing and
``SUMMARY.md`` maintenance for one example, a list of examples, or the
whole catalogue, and scaffolds standalone projects.

Usage::

    python -m fhevm_examples docs fhe-counter
    python -m fhevm_examples docs --all
    python -m fhevm_examples create fhe-counter ./my-fhe-counter
    python -m fhevm_examples list
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Iterable
from pathlib import Path

from pydantic import BaseModel, Field
from rich.table import Table

from fhevm_examples.config import Config
from fhevm_examples.docgen.markdown import MarkdownRenderer
from fhevm_examples.docgen.summary import SummaryIndex
from fhevm_examples.errors import ConfigError, GenerationError, UnknownExample
from fhevm_examples.loader import SourceLoader
from fhevm_examples.registry import ExampleEntry, Registry
from fhevm_examples.scaffolder.generator import ProjectScaffolder, ScaffoldResult
from fhevm_examples.utils import (
    console,
    print_error,
    print_header,
    print_info,
    print_success,
    print_summary_table,
    print_warning,
    write_text_atomic,
)


# ---------------------------------------------------------------------------
# Report model
# ---------------------------------------------------------------------------


class BatchReport(BaseModel):
    """Outcome of a multi-example documentation run."""

    succeeded: list[str] = Field(default_factory=list)
    failed: dict[str, str] = Field(default_factory=dict, description="id -> error message")
    indexed: list[str] = Field(default_factory=list, description="ids newly linked in the index")

    @property
    def success(self) -> bool:
        return not self.failed


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


class ExamplePipeline:
    """Documentation and scaffolding orchestrator.

    Attributes:
        config: Toolkit configuration.
        registry: The example catalogue; a ``ConfigError`` while loading it
            aborts construction before any file is touched.
    """

    def __init__(self, config: Config, registry: Registry | None = None) -> None:
        self.config = config
        self.registry = registry if registry is not None else self._load_registry()
        self.loader = SourceLoader(config.project_root)
        self.renderer = MarkdownRenderer(config.docs)
        self.summary = SummaryIndex(config.summary_path, config.docs.default_category)
        self.scaffolder = ProjectScaffolder(
            self.loader, config.template_path, config.scaffold
        )

    def _load_registry(self) -> Registry:
        if self.config.registry_path is None:
            return Registry.default()
        return Registry.from_file(self.config.registry_path)

    # ------------------------------------------------------------------
    # Documentation
    # ------------------------------------------------------------------

    def render_doc(self, example_id: str) -> tuple[ExampleEntry, Path]:
        """Look up, load, render and write one example page (no index update)."""
        entry = self.registry.lookup(example_id)
        print_info(f"Generating documentation for: {entry.title}")

        contract_content = self.loader.read(entry.contract_path)
        test_content = self.loader.read(entry.test_path)
        markdown = self.renderer.render(entry, contract_content, test_content)

        output = self.loader.resolve(entry.output_path)
        write_text_atomic(output, markdown)
        print_success(f"Documentation generated: {entry.output_path}")
        return entry, output

    def index(self, entry: ExampleEntry) -> bool:
        """Link *entry*'s page in ``SUMMARY.md``. Returns ``True`` if a link was added."""
        output = self.loader.resolve(entry.output_path)
        added = self.summary.upsert(entry.category, entry.title, output)
        if added:
            print_success(f"Updated {self.config.docs.summary_file}: {entry.title}")
        else:
            print_info(f"{entry.title} already in {self.config.docs.summary_file}")
        return added

    def generate(self, example_id: str, *, update_summary: bool = True) -> Path:
        """Generate one example page and, unless disabled, index it.

        Raises:
            UnknownExample, SourceNotFound: Propagated unchanged.
        """
        entry, output = self.render_doc(example_id)
        if update_summary:
            self.index(entry)
        return output

    def generate_many(
        self, example_ids: Iterable[str], *, update_summary: bool = True
    ) -> BatchReport:
        """Generate several pages, continuing past per-example failures.

        Index updates run only after every page has been attempted, and
        only for pages that were written.
        """
        report = BatchReport()
        rendered: list[ExampleEntry] = []

        for example_id in example_ids:
            try:
                entry, _ = self.render_doc(example_id)
            except GenerationError as exc:
                print_error(f"Failed to generate docs for {example_id}: {exc}")
                report.failed[example_id] = str(exc)
                continue
            rendered.append(entry)
            report.succeeded.append(example_id)

        if update_summary and rendered:
            print_info(f"Updating {self.config.docs.summary_file}...")
            for entry in rendered:
                if self.index(entry):
                    report.indexed.append(entry.id)

        return report

    def generate_all(self, *, update_summary: bool = True) -> BatchReport:
        """Generate every registered example in registry order."""
        return self.generate_many(self.registry.all_ids(), update_summary=update_summary)

    # ------------------------------------------------------------------
    # Scaffolding
    # ------------------------------------------------------------------

    def scaffold(self, example_id: str, destination: str | Path) -> ScaffoldResult:
        """Create a standalone project for *example_id* at *destination*."""
        entry = self.registry.lookup(example_id)
        print_info(f"Creating standalone project for: {entry.title}")
        result = self.scaffolder.create(entry, destination)
        print_success(f"Project created: {result.project_path}")
        return result


# ---------------------------------------------------------------------------
# Console reporting
# ---------------------------------------------------------------------------


def print_examples(registry: Registry, loader: SourceLoader | None = None) -> None:
    """Print every registered example with its title and category.

    With a *loader*, a ``Sources`` column flags entries whose contract or
    test file is missing under the project root.
    """
    table = Table(title="Available examples", show_header=True, header_style="bold cyan")
    table.add_column("Example", style="green", no_wrap=True)
    table.add_column("Title")
    table.add_column("Category", style="dim")
    if loader is not None:
        table.add_column("Sources")
    for entry in registry:
        row = [entry.id, entry.title, entry.category]
        if loader is not None:
            row.append(_source_status(loader, entry))
        table.add_row(*row)
    console.print(table)


def _source_status(loader: SourceLoader, entry: ExampleEntry) -> str:
    missing = [
        label
        for label, path in (("contract", entry.contract_path), ("test", entry.test_path))
        if not loader.exists(path)
    ]
    return f"[red]missing {', '.join(missing)}[/red]" if missing else "[green]ok[/green]"


def print_report(report: BatchReport) -> None:
    """Print the aggregate outcome of a batch run."""
    print_header("Documentation summary", color="green" if report.success else "red")
    data = {
        "Generated": str(len(report.succeeded)),
        "Failed": str(len(report.failed)),
        "Newly indexed": str(len(report.indexed)),
    }
    for example_id, reason in report.failed.items():
        data[f"  {example_id}"] = reason
    print_summary_table(data, title="Batch report")
    if report.success:
        print_success(f"Generated {len(report.succeeded)} documentation files")
    else:
        print_error(f"Failed: {len(report.failed)} ({', '.join(report.failed)})")


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--root",
        default=None,
        help="Examples hub root (default: $FHEVM_PROJECT_ROOT or the current directory)",
    )
    common.add_argument(
        "--registry",
        default=None,
        help="JSON registry file replacing the built-in example catalogue",
    )
    common.add_argument(
        "--template",
        default=None,
        help="Base Hardhat template directory, relative to the root",
    )

    parser = argparse.ArgumentParser(
        prog="fhevm-examples",
        description="FHEVM examples -- GitBook docs generator and project scaffolder",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  fhevm-examples docs fhe-counter\n"
            "  fhevm-examples docs --all\n"
            "  fhevm-examples create fhe-counter ./my-fhe-counter\n"
            "  fhevm-examples list\n"
        ),
    )
    sub = parser.add_subparsers(dest="command", required=True)

    docs = sub.add_parser("docs", parents=[common], help="Generate GitBook documentation")
    docs.add_argument("examples", nargs="*", help="Example ids to generate")
    docs.add_argument("--all", action="store_true", help="Generate documentation for all examples")
    docs.add_argument(
        "--no-summary", action="store_true", help="Do not update the SUMMARY.md index"
    )

    create = sub.add_parser("create", parents=[common], help="Scaffold a standalone project")
    create.add_argument("example", help="Example id to extract")
    create.add_argument("destination", help="New project directory (must not exist)")

    sub.add_parser("list", parents=[common], help="List available examples")
    return parser


def _config_from_args(args: argparse.Namespace) -> Config:
    config = Config.from_env()
    if args.root:
        config.project_root = Path(args.root)
    if args.registry:
        config.registry_path = Path(args.registry)
    if args.template:
        config.scaffold.template_dir = args.template
    return config


def _run_docs(pipeline: ExamplePipeline, args: argparse.Namespace) -> int:
    update_summary = not args.no_summary

    if args.all and args.examples:
        print_error("Pass example ids or --all, not both")
        return 1
    if not args.all and not args.examples:
        print_error("Specify an example name or --all")
        print_examples(pipeline.registry)
        return 1

    if len(args.examples) == 1:
        try:
            pipeline.generate(args.examples[0], update_summary=update_summary)
        except UnknownExample as exc:
            print_error(str(exc))
            print_examples(pipeline.registry)
            return 1
        except GenerationError as exc:
            print_error(f"Error: {exc}")
            return 1
        return 0

    if args.all:
        print_info("Generating documentation for all examples...")
        report = pipeline.generate_all(update_summary=update_summary)
    else:
        report = pipeline.generate_many(args.examples, update_summary=update_summary)
    print_report(report)
    if any(example_id not in pipeline.registry for example_id in report.failed):
        print_examples(pipeline.registry)
    return 0 if report.success else 1


def _run_create(pipeline: ExamplePipeline, args: argparse.Namespace) -> int:
    try:
        result = pipeline.scaffold(args.example, args.destination)
    except UnknownExample as exc:
        print_error(str(exc))
        print_examples(pipeline.registry)
        return 1
    except GenerationError as exc:
        print_error(f"Error: {exc}")
        return 1

    if not result.removed:
        print_warning("No template placeholder files were found to remove")
    console.print()
    console.print("Next steps:")
    console.print(f"  cd {result.project_path}")
    console.print("  npm install")
    console.print("  npx hardhat test")
    return 0


def run(argv: list[str] | None = None) -> int:
    """Parse *argv*, run the selected command, and return an exit code."""
    args = _build_parser().parse_args(argv)
    config = _config_from_args(args)

    try:
        pipeline = ExamplePipeline(config)
    except ConfigError as exc:
        print_error(f"Configuration error: {exc}")
        return 1

    if args.command == "list":
        print_examples(pipeline.registry, pipeline.loader)
        return 0
    if args.command == "create":
        return _run_create(pipeline, args)
    return _run_docs(pipeline, args)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``fhevm-examples`` / ``python -m fhevm_examples``."""
    sys.exit(run(argv))


def generate_docs_main() -> None:
    """``generate-docs`` console script: ``fhevm-examples docs ...``."""
    main(["docs", *sys.argv[1:]])


def create_example_main() -> None:
    """``create-fhevm-example`` console script: ``fhevm-examples create ...``."""
    main(["create", *sys.argv[1:]])

