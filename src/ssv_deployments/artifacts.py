"""Build system access: hardhat compilation and artifact loading."""

import json
import logging
import os
import subprocess
from pathlib import Path
from typing import Dict, List, Optional, Union

from .exceptions import BuildArtifactNotFoundError, BuildError
from .types import ContractArtifact

logger = logging.getLogger(__name__)


def compile_contracts(project_dir: Optional[Union[Path, str]] = None) -> None:
    """
    Compile the contracts with hardhat.

    Args:
        project_dir: Hardhat project root (defaults to current directory)

    Raises:
        BuildError: If the compiler cannot be run or compilation fails
    """
    cwd = Path(project_dir) if project_dir is not None else Path.cwd()
    logger.info("Compiling contracts in %s", cwd)

    env = os.environ.copy()
    # Never block on npx install prompts
    env["npm_config_yes"] = "true"
    try:
        subprocess.run(
            ["npx", "hardhat", "compile"],
            cwd=cwd,
            check=True,
            capture_output=True,
            env=env,
        )
    except FileNotFoundError as e:
        raise BuildError(f"Failed to run compiler: {e}") from e
    except subprocess.CalledProcessError as e:
        raise BuildError(f"Compilation failed: {e.stderr.decode()}") from e


def parse_artifact(file_path: Path) -> ContractArtifact:
    """
    Parse a hardhat artifact JSON file.

    Args:
        file_path: Path to <ContractName>.json

    Returns:
        ContractArtifact with name, abi and creation bytecode

    Raises:
        BuildError: If the file is not a valid hardhat artifact
    """
    try:
        with open(file_path) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise BuildError(f"Malformed artifact {file_path}: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get("abi"), list):
        raise BuildError(f"Malformed artifact {file_path}: missing 'abi'")

    bytecode = data.get("bytecode", "0x")
    if not isinstance(bytecode, str):
        raise BuildError(f"Malformed artifact {file_path}: 'bytecode' must be a hex string")
    if not bytecode.startswith("0x"):
        bytecode = "0x" + bytecode

    return ContractArtifact(
        name=data.get("contractName", file_path.stem),
        abi=data["abi"],
        bytecode=bytecode,
    )


class ArtifactStore:
    """Looks up compiled contracts in a hardhat artifacts directory."""

    def __init__(self, artifacts_dir: Union[Path, str]):
        self.artifacts_dir = Path(artifacts_dir)
        self._loaded: Dict[str, ContractArtifact] = {}

    def _candidates(self, contract: str) -> List[Path]:
        if not self.artifacts_dir.exists():
            return []
        return sorted(
            p
            for p in self.artifacts_dir.rglob(f"{contract}.json")
            if "build-info" not in p.parts and not p.name.endswith(".dbg.json")
        )

    def load(self, contract: str) -> ContractArtifact:
        """
        Load the artifact for a contract name.

        Args:
            contract: Contract name (e.g., "SSVNetwork")

        Returns:
            ContractArtifact

        Raises:
            BuildArtifactNotFoundError: If no artifact exists for the name
            BuildError: If the name is ambiguous or the contract has no bytecode
        """
        if contract in self._loaded:
            return self._loaded[contract]

        candidates = self._candidates(contract)
        if not candidates:
            raise BuildArtifactNotFoundError(
                f"Artifact for contract '{contract}' not found in {self.artifacts_dir}"
            )
        if len(candidates) > 1:
            sources = ", ".join(str(p.relative_to(self.artifacts_dir)) for p in candidates)
            raise BuildError(
                f"Multiple artifacts found for contract '{contract}': {sources}"
            )

        artifact = parse_artifact(candidates[0])
        if artifact.bytecode == "0x":
            # Interfaces and abstract contracts compile to empty bytecode
            raise BuildError(f"Contract '{contract}' has no deployable bytecode")

        self._loaded[contract] = artifact
        return artifact
