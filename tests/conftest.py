"""Shared pytest fixtures for the fhevm-examples test suite.

Provides reusable fixtures for:
- A temporary examples hub (contracts, tests, docs directory)
- A small three-example registry pointing into that hub
- A base Hardhat template tree for scaffolding
- A ready-to-use ExamplePipeline
"""

from __future__ import annotations

import json
import textwrap
from pathlib import Path

import pytest

from fhevm_examples.config import Config
from fhevm_examples.pipeline import ExamplePipeline
from fhevm_examples.registry import Registry


# ---------------------------------------------------------------------------
# Sample sources
# ---------------------------------------------------------------------------

ALPHA_CONTRACT = textwrap.dedent("""\
    // SPDX-License-Identifier: BSD-3-Clause-Clear
    pragma solidity ^0.8.24;

    import {FHE, euint32, externalEuint32} from "@fhevm/solidity/lib/FHE.sol";
    import {SepoliaConfig} from "@fhevm/solidity/config/ZamaConfig.sol";

    /**
     * A confidential counter that never reveals its value.
     * @notice Increment and decrement an encrypted counter.
     */
    contract AlphaCounter is SepoliaConfig {
        euint32 private _count;

        function increment(externalEuint32 inputEuint32, bytes calldata inputProof) external {
            euint32 value = FHE.fromExternal(inputEuint32, inputProof);
            _count = FHE.add(_count, value);
            FHE.allowThis(_count);
            FHE.allow(_count, msg.sender);
        }
    }
    """)

ALPHA_TEST = textwrap.dedent("""\
    import { expect } from "chai";
    import { ethers, fhevm } from "hardhat";

    describe("AlphaCounter", function () {
      it("starts uninitialized", async function () {
        const factory = await ethers.getContractFactory("AlphaCounter");
        const contract = await factory.deploy();
        expect(await contract.getAddress()).to.be.properAddress;
      });
    });
    """)

BETA_CONTRACT = textwrap.dedent("""\
    pragma solidity ^0.8.24;

    /// Encrypts a single value and stores it.
    contract BetaEncrypt {
        uint256 public stored;
    }
    """)

BETA_TEST = 'describe("BetaEncrypt", function () {});\n'

GAMMA_CONTRACT = "pragma solidity ^0.8.24;\n\ncontract GammaHandles {}\n"

GAMMA_TEST = 'describe("GammaHandles", function () {});\n'


HUB_EXAMPLES: dict[str, dict[str, str]] = {
    "alpha": {
        "title": "Alpha Counter",
        "description": "A confidential counter.",
        "contract": "contracts/basic/AlphaCounter.sol",
        "test": "test/basic/AlphaCounter.ts",
        "output": "docs/alpha.md",
        "category": "Basic",
    },
    "beta": {
        "title": "Beta Encrypt",
        "description": "",
        "contract": "contracts/basic/encrypt/BetaEncrypt.sol",
        "test": "test/basic/encrypt/BetaEncrypt.ts",
        "output": "docs/beta.md",
        "category": "Basic",
    },
    "gamma": {
        "title": "Gamma Handles",
        "description": "Encrypted handles in depth.",
        "contract": "contracts/advanced/GammaHandles.sol",
        "test": "test/advanced/GammaHandles.ts",
        "output": "docs/gamma.md",
        "category": "Advanced - Core Concepts",
    },
}

_SOURCES: dict[str, tuple[str, str]] = {
    "alpha": (ALPHA_CONTRACT, ALPHA_TEST),
    "beta": (BETA_CONTRACT, BETA_TEST),
    "gamma": (GAMMA_CONTRACT, GAMMA_TEST),
}


# ---------------------------------------------------------------------------
# Hub layout
# ---------------------------------------------------------------------------

@pytest.fixture
def hub_root(tmp_path: Path) -> Path:
    """Temporary examples hub with contract and test sources on disk."""
    root = tmp_path / "hub"
    for example_id, (contract, test) in _SOURCES.items():
        meta = HUB_EXAMPLES[example_id]
        contract_path = root / meta["contract"]
        test_path = root / meta["test"]
        contract_path.parent.mkdir(parents=True, exist_ok=True)
        test_path.parent.mkdir(parents=True, exist_ok=True)
        contract_path.write_bytes(contract.encode("utf-8"))
        test_path.write_bytes(test.encode("utf-8"))
    yield root


@pytest.fixture
def hub_examples() -> dict[str, dict[str, str]]:
    """Fresh copy of the raw registry mapping (safe to mutate)."""
    return {example_id: dict(meta) for example_id, meta in HUB_EXAMPLES.items()}


@pytest.fixture
def hub_sources() -> dict[str, tuple[str, str]]:
    """``{id: (contract_source, test_source)}`` as written to the hub."""
    return dict(_SOURCES)


@pytest.fixture
def hub_registry() -> Registry:
    """Registry with the three hub examples, in alpha/beta/gamma order."""
    return Registry.from_mapping(HUB_EXAMPLES)


@pytest.fixture
def hub_config(hub_root: Path) -> Config:
    return Config(project_root=hub_root)


@pytest.fixture
def pipeline(hub_config: Config, hub_registry: Registry) -> ExamplePipeline:
    """ExamplePipeline wired to the temporary hub."""
    return ExamplePipeline(hub_config, registry=hub_registry)


# ---------------------------------------------------------------------------
# Base template
# ---------------------------------------------------------------------------

HARDHAT_CONFIG = textwrap.dedent("""\
    import "@fhevm/hardhat-plugin";
    import "@nomicfoundation/hardhat-chai-matchers";
    import "hardhat-deploy";
    import type { HardhatUserConfig } from "hardhat/config";

    import "./tasks/accounts";
    import "./tasks/FHECounter";

    const config: HardhatUserConfig = {
      defaultNetwork: "hardhat",
      solidity: { version: "0.8.27" },
    };

    export default config;
    """)

TEMPLATE_DEPLOY = textwrap.dedent("""\
    import { DeployFunction } from "hardhat-deploy/types";

    const func: DeployFunction = async function () {};
    export default func;
    func.tags = ["FHECounter"];
    """)


@pytest.fixture
def template_dir(hub_root: Path) -> Path:
    """Minimal fhevm-hardhat-template tree inside the hub."""
    root = hub_root / "fhevm-hardhat-template"
    files = {
        "package.json": json.dumps(
            {
                "name": "fhevm-hardhat-template",
                "description": "Hardhat-based template for developing FHEVM Solidity smart contracts",
                "version": "0.1.0",
                "scripts": {"test": "hardhat test"},
            },
            indent=2,
        )
        + "\n",
        "hardhat.config.ts": HARDHAT_CONFIG,
        "contracts/FHECounter.sol": "contract FHECounter {}\n",
        "test/FHECounter.ts": 'describe("FHECounter", function () {});\n',
        "tasks/FHECounter.ts": "export {};\n",
        "tasks/accounts.ts": "export {};\n",
        "deploy/deploy.ts": TEMPLATE_DEPLOY,
        "node_modules/hardhat/index.js": "module.exports = {};\n",
        "artifacts/build-info/x.json": "{}\n",
    }
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    yield root
