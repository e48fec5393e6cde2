"""Example registry.

A static, ordered mapping from example id to :class:`ExampleEntry`.  The
built-in catalogue mirrors the examples shipped in the hub repository; a
JSON file with the same shape can replace it via ``Registry.from_file``::

    {
      "examples": {
        "fhe-counter": {
          "title": "FHE Counter",
          "description": "...",
          "contract": "contracts/basic/FHECounter.sol",
          "test": "test/basic/FHECounter.ts",
          "output": "docs/fhe-counter.md",
          "category": "Basic"
        }
      }
    }
"""

from __future__ import annotations

import json
import posixpath
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path, PurePosixPath
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from fhevm_examples.errors import ConfigError, UnknownExample
from fhevm_examples.utils import load_json


# ---------------------------------------------------------------------------
# Entry model
# ---------------------------------------------------------------------------


class ExampleEntry(BaseModel):
    """One registered example: a contract, its test, and where its doc goes."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., min_length=1, description="Stable unique key")
    title: str = Field(..., min_length=1, description="Human-readable display name")
    description: str = Field(default="", description="Lead-in paragraph for the doc")
    contract_path: str = Field(..., alias="contract", description="Solidity source, relative")
    test_path: str = Field(..., alias="test", description="Test source, relative")
    output_path: str = Field(..., alias="output", description="Generated markdown, relative")
    category: str = Field(default="Basic", min_length=1, description="Index section")

    @field_validator("contract_path", "test_path", "output_path")
    @classmethod
    def _relative_path(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("path must not be empty")
        pure = PurePosixPath(value.replace("\\", "/"))
        if pure.is_absolute():
            raise ValueError(f"path must be relative to the project root: {value}")
        if ".." in pure.parts:
            raise ValueError(f"path must not leave the project root: {value}")
        return value

    @property
    def test_filename(self) -> str:
        """Base name of the test file (used as its tab title)."""
        return PurePosixPath(self.test_path).name

    @property
    def contract_filename(self) -> str:
        return PurePosixPath(self.contract_path).name


# ---------------------------------------------------------------------------
# Built-in catalogue
# ---------------------------------------------------------------------------

EXAMPLES_CONFIG: dict[str, dict[str, str]] = {
    "fhe-counter": {
        "title": "FHE Counter",
        "description": (
            "This example demonstrates how to build a confidential counter using FHEVM, "
            "in comparison to a simple counter."
        ),
        "contract": "contracts/basic/FHECounter.sol",
        "test": "test/basic/FHECounter.ts",
        "output": "docs/fhe-counter.md",
        "category": "Basic",
    },
    "encrypt-single-value": {
        "title": "Encrypt Single Value",
        "description": (
            "This example demonstrates the FHE encryption mechanism and highlights a "
            "common pitfall developers may encounter."
        ),
        "contract": "contracts/basic/encrypt/EncryptSingleValue.sol",
        "test": "test/basic/encrypt/EncryptSingleValue.ts",
        "output": "docs/fhe-encrypt-single-value.md",
        "category": "Basic - Encryption",
    },
    "encrypt-multiple-values": {
        "title": "Encrypt Multiple Values",
        "description": (
            "This example shows how to encrypt and handle multiple values in a single transaction."
        ),
        "contract": "contracts/basic/encrypt/EncryptMultipleValues.sol",
        "test": "test/basic/encrypt/EncryptMultipleValues.ts",
        "output": "docs/fhe-encrypt-multiple-values.md",
        "category": "Basic - Encryption",
    },
    "user-decrypt-single-value": {
        "title": "User Decrypt Single Value",
        "description": (
            "This example demonstrates the FHE user decryption mechanism and highlights "
            "common pitfalls developers may encounter."
        ),
        "contract": "contracts/basic/decrypt/UserDecryptSingleValue.sol",
        "test": "test/basic/decrypt/UserDecryptSingleValue.ts",
        "output": "docs/fhe-user-decrypt-single-value.md",
        "category": "Basic - Decryption",
    },
    "user-decrypt-multiple-values": {
        "title": "User Decrypt Multiple Values",
        "description": "This example shows how to decrypt multiple encrypted values for a user.",
        "contract": "contracts/basic/decrypt/UserDecryptMultipleValues.sol",
        "test": "test/basic/decrypt/UserDecryptMultipleValues.ts",
        "output": "docs/fhe-user-decrypt-multiple-values.md",
        "category": "Basic - Decryption",
    },
    "fhe-add": {
        "title": "FHE Add Operation",
        "description": (
            "This example demonstrates how to perform addition operations on encrypted values."
        ),
        "contract": "contracts/basic/fhe-operations/FHEAdd.sol",
        "test": "test/basic/fhe-operations/FHEAdd.ts",
        "output": "docs/fheadd.md",
        "category": "Basic - FHE Operations",
    },
    "fhe-if-then-else": {
        "title": "FHE If-Then-Else",
        "description": "This example shows conditional operations on encrypted values using FHE.",
        "contract": "contracts/basic/fhe-operations/FHEIfThenElse.sol",
        "test": "test/basic/fhe-operations/FHEIfThenElse.ts",
        "output": "docs/fheifthenelse.md",
        "category": "Basic - FHE Operations",
    },
    "access-control": {
        "title": "Access Control in FHEVM",
        "description": (
            "This example demonstrates FHE access control mechanisms including FHE.allow(), "
            "FHE.allowTransient(), and permission management patterns."
        ),
        "contract": "contracts/basic/AccessControlExample.sol",
        "test": "test/basic/AccessControlExample.ts",
        "output": "docs/access-control.md",
        "category": "Advanced - Access Control",
    },
    "input-proof": {
        "title": "Understanding Input Proofs",
        "description": (
            "This example provides a comprehensive guide to input proofs - what they are, "
            "why they are needed, and how to use them correctly."
        ),
        "contract": "contracts/basic/InputProofExample.sol",
        "test": "test/basic/InputProofExample.ts",
        "output": "docs/input-proof.md",
        "category": "Advanced - Security",
    },
    "handles": {
        "title": "Understanding Encrypted Handles",
        "description": (
            "This example explains encrypted value handles in depth - how they are generated, "
            "their lifecycle, symbolic execution, and different handle types."
        ),
        "contract": "contracts/basic/HandlesExample.sol",
        "test": "test/basic/HandlesExample.ts",
        "output": "docs/handles.md",
        "category": "Advanced - Core Concepts",
    },
    "erc7984-example": {
        "title": "ERC7984 Confidential Token",
        "description": (
            "This example demonstrates the ERC7984 standard for confidential tokens with "
            "encrypted balances, transfers, and operator patterns."
        ),
        "contract": "contracts/openzeppelin/ERC7984Example.sol",
        "test": "test/openzeppelin/ERC7984Example.ts",
        "output": "docs/erc7984-example.md",
        "category": "OpenZeppelin - Tokens",
    },
    "erc7984-wrapper": {
        "title": "ERC7984 Wrapper (ERC20 ↔ Confidential)",
        "description": (
            "This example shows how to wrap standard ERC20 tokens into confidential ERC7984 "
            "tokens and unwrap them using a gateway."
        ),
        "contract": "contracts/openzeppelin/ERC7984WrapperExample.sol",
        "test": "test/openzeppelin/ERC7984WrapperExample.ts",
        "output": "docs/erc7984-wrapper.md",
        "category": "OpenZeppelin - Tokens",
    },
    "vesting-wallet-confidential": {
        "title": "Confidential Vesting Wallet",
        "description": (
            "This example demonstrates time-locked confidential token vesting with cliff "
            "periods and linear release schedules."
        ),
        "contract": "contracts/openzeppelin/VestingWalletConfidentialExample.sol",
        "test": "test/openzeppelin/VestingWalletConfidentialExample.ts",
        "output": "docs/vesting-wallet-confidential.md",
        "category": "OpenZeppelin - Finance",
    },
    "confidential-swap": {
        "title": "Confidential Token Swap (AMM)",
        "description": (
            "This example shows a privacy-preserving automated market maker for swapping "
            "confidential tokens without revealing trade sizes."
        ),
        "contract": "contracts/openzeppelin/ConfidentialSwapExample.sol",
        "test": "test/openzeppelin/ConfidentialSwapExample.ts",
        "output": "docs/confidential-swap.md",
        "category": "OpenZeppelin - DeFi",
    },
}


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class Registry:
    """Read-only, insertion-ordered collection of :class:`ExampleEntry`.

    Duplicate ids or output paths raise :class:`ConfigError` at construction,
    before any file is read or written.
    """

    def __init__(self, entries: Iterable[ExampleEntry]) -> None:
        self._entries: dict[str, ExampleEntry] = {}
        owners: dict[str, str] = {}
        for entry in entries:
            if entry.id in self._entries:
                raise ConfigError(f"Duplicate example id: {entry.id}")
            key = _normalise_path(entry.output_path)
            if key in owners:
                raise ConfigError(
                    f"Duplicate output path {entry.output_path!r} "
                    f"(used by {owners[key]!r} and {entry.id!r})"
                )
            owners[key] = entry.id
            self._entries[entry.id] = entry

    # -- Construction ------------------------------------------------------

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Mapping[str, Any]]) -> "Registry":
        """Build a registry from ``{id: {title, description, contract, ...}}``."""
        entries: list[ExampleEntry] = []
        for example_id, raw in mapping.items():
            if not isinstance(raw, Mapping):
                raise ConfigError(f"Example {example_id!r}: expected an object")
            try:
                entries.append(ExampleEntry(id=example_id, **raw))
            except (ValidationError, TypeError) as exc:
                raise ConfigError(f"Example {example_id!r} is invalid: {exc}") from exc
        return cls(entries)

    @classmethod
    def default(cls) -> "Registry":
        """Return the built-in catalogue."""
        return cls.from_mapping(EXAMPLES_CONFIG)

    @classmethod
    def from_file(cls, path: str | Path) -> "Registry":
        """Load a registry from a JSON file (see module docstring for the shape)."""
        file_path = Path(path)
        try:
            data = load_json(file_path)
        except FileNotFoundError as exc:
            raise ConfigError(f"Registry file not found: {file_path}") from exc
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ConfigError(f"Registry file is not valid JSON: {file_path}: {exc}") from exc

        examples = data.get("examples")
        if not isinstance(examples, dict):
            raise ConfigError(f"{file_path}: expected a top-level 'examples' object")
        return cls.from_mapping(examples)

    # -- Queries -----------------------------------------------------------

    def lookup(self, example_id: str) -> ExampleEntry:
        """Return the entry for *example_id* or raise :class:`UnknownExample`."""
        try:
            return self._entries[example_id]
        except KeyError:
            raise UnknownExample(example_id, self.all_ids()) from None

    def all_ids(self) -> list[str]:
        """Every registered id, in insertion order."""
        return list(self._entries)

    def categories(self) -> list[str]:
        """Distinct categories in order of first appearance."""
        seen: dict[str, None] = {}
        for entry in self._entries.values():
            seen.setdefault(entry.category, None)
        return list(seen)

    def __contains__(self, example_id: object) -> bool:
        return example_id in self._entries

    def __iter__(self) -> Iterator[ExampleEntry]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)


def _normalise_path(path: str) -> str:
    return posixpath.normpath(path.replace("\\", "/"))
