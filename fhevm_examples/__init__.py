"""FHEVM examples documentation and scaffolding toolkit.

Generates GitBook markdown for the registered FHE example contracts,
maintains the ``docs/SUMMARY.md`` index, and scaffolds standalone Hardhat
projects from the base template.

Quick usage::

    from fhevm_examples import Config, ExamplePipeline

    pipeline = ExamplePipeline(Config(project_root=Path(".")))
    report = pipeline.generate_all()
"""

from fhevm_examples.config import Config
from fhevm_examples.pipeline import BatchReport, ExamplePipeline
from fhevm_examples.registry import ExampleEntry, Registry

__version__ = "0.1.0"

__all__ = [
    "BatchReport",
    "Config",
    "ExampleEntry",
    "ExamplePipeline",
    "Registry",
]
