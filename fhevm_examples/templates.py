"""Jinja2 rendering for the files a scaffolded project gets regenerated.

Only the project README and the hardhat-deploy script are templated.  The
GitBook pages are assembled in :mod:`fhevm_examples.docgen.markdown` because
GitBook's ``{% tab %}`` / ``{% hint %}`` tags share Jinja2's block syntax.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from fhevm_examples.utils import slugify, write_text_atomic

BUNDLED_TEMPLATES = Path(__file__).parent / "templates"


class TemplateRenderer:
    """Jinja2 environment bound to one template directory.

    Rendering is strict: a name missing from the context raises
    :class:`jinja2.UndefinedError` rather than rendering as an empty string.
    Output is never HTML-escaped since every target is TypeScript or Markdown.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        self.template_dir = Path(template_dir) if template_dir is not None else BUNDLED_TEMPLATES
        self.env = Environment(
            loader=FileSystemLoader(self.template_dir),
            autoescape=False,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )
        self.env.filters["slugify"] = slugify

    def render(self, name: str, context: dict[str, Any]) -> str:
        """Render the template *name* (e.g. ``"project/README.md.j2"``)."""
        return self.env.get_template(name).render(context)

    def render_to_file(self, name: str, output_path: str | Path, context: dict[str, Any]) -> Path:
        """Render *name* and atomically replace *output_path* with the result."""
        return write_text_atomic(output_path, self.render(name, context))

