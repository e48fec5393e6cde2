"""Standalone project scaffolding for a single FHEVM example.

Quick usage::

    from fhevm_examples.loader import SourceLoader
    from fhevm_examples.registry import Registry
    from fhevm_examples.scaffolder import ProjectScaffolder

    loader = SourceLoader(".")
    scaffolder = ProjectScaffolder(loader, "fhevm-hardhat-template")
    result = scaffolder.create(Registry.default().lookup("fhe-counter"), "/tmp/fhe-counter")
"""

from fhevm_examples.scaffolder.generator import ProjectScaffolder, ScaffoldResult

__all__ = [
    "ProjectScaffolder",
    "ScaffoldResult",
]
