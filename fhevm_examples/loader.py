"""Project file loader.

Reads example sources relative to a project root and refuses anything that
resolves outside it, so a malformed registry entry cannot pull in arbitrary
files.
"""

from __future__ import annotations

from pathlib import Path

from fhevm_examples.errors import SourceNotFound
from fhevm_examples.utils import read_text_exact


class SourceLoader:
    """Reads files under a fixed project root.

    Content is returned exactly as stored on disk (UTF-8, no newline
    translation).
    """

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root).resolve()

    def resolve(self, relative: str | Path) -> Path:
        """Return the absolute path for *relative*, checked against the root.

        Raises:
            SourceNotFound: If the path escapes the project root.
        """
        candidate = (self.root / relative).resolve()
        if not candidate.is_relative_to(self.root):
            raise SourceNotFound(relative, reason="Path escapes project root")
        return candidate

    def exists(self, relative: str | Path) -> bool:
        """Return ``True`` if *relative* is a file under the root."""
        try:
            return self.resolve(relative).is_file()
        except SourceNotFound:
            return False

    def read(self, relative: str | Path) -> str:
        """Read a file under the root.

        Raises:
            SourceNotFound: If the file is missing, not a regular file, or
                outside the project root.
        """
        path = self.resolve(relative)
        if not path.is_file():
            raise SourceNotFound(relative)
        try:
            return read_text_exact(path)
        except (OSError, UnicodeDecodeError) as exc:
            raise SourceNotFound(relative, reason=f"Unreadable file ({exc})") from exc
