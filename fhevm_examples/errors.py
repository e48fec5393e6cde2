"""Error taxonomy shared by the registry, loader, renderers and pipeline."""

from __future__ import annotations

from pathlib import Path


class GenerationError(Exception):
    """Base class for every error the generators raise on purpose."""


class ConfigError(GenerationError):
    """Raised when the registry or configuration is invalid.

    Fatal for the whole run: nothing is written once this is raised.
    """


class UnknownExample(GenerationError):
    """Raised when an example id is not in the registry."""

    def __init__(self, example_id: str, available: list[str] | None = None) -> None:
        self.example_id = example_id
        self.available = list(available or [])
        super().__init__(f"Unknown example: {example_id}")


class SourceNotFound(GenerationError):
    """Raised when a source file is missing or lies outside the project root."""

    def __init__(self, path: str | Path, reason: str = "File not found") -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"{reason}: {self.path}")


class DestinationExists(GenerationError):
    """Raised when a scaffold target directory already exists."""

    def __init__(self, path: str | Path) -> None:
        self.path = str(path)
        super().__init__(f"Destination already exists: {self.path}")
