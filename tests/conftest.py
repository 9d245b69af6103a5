"""Shared pytest fixtures for ssv-deployments tests."""

from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import pytest
from eth_utils import to_checksum_address

from ssv_deployments.artifacts import ArtifactStore
from ssv_deployments.config import InitializerParams
from ssv_deployments.deployers import ImplementationDeployer
from ssv_deployments.exceptions import TransactionError
from ssv_deployments.types import ContractArtifact, DeploymentSummary

DEPLOYER = to_checksum_address("0xf39fd6e51aad88f6f4ce6ab8827279cfffb92266")

# Creation bytecode of each fixture artifact
BYTECODES = {
    "0x6001": "SSVToken",
    "0x6002": "SSVOperators",
    "0x6003": "SSVClusters",
    "0x6004": "SSVDAO",
    "0x6005": "SSVViews",
    "0x6006": "SSVNetwork",
    "0x6007": "SSVNetworkViews",
    "0x6008": "BasicWhitelisting",
    "0x6009": "SSVRegistry",
    "0x600a": "ERC1967Proxy",
}


class FakeChain:
    """Chain connection double that assigns sequential addresses."""

    def __init__(self, deployer: str = DEPLOYER, fail_on: Optional[str] = None):
        self.deployer = deployer
        self.fail_on = fail_on
        # (contract, address, constructor args)
        self.deployed: List[Tuple[str, str, Tuple[Any, ...]]] = []
        self._implementations: Dict[str, str] = {}

    def contracts(self) -> List[str]:
        return [contract for contract, _, _ in self.deployed]

    def deploy(self, artifact: ContractArtifact, args: Sequence[Any] = ()) -> Tuple[str, str]:
        contract = BYTECODES[artifact.bytecode]
        if contract == self.fail_on:
            raise TransactionError(f"Transaction 0x{len(self.deployed):064x} reverted")

        n = len(self.deployed) + 1
        address = to_checksum_address(f"0x{n:040x}")
        if contract == "ERC1967Proxy":
            implementation, _ = args
            self._implementations[address] = to_checksum_address(implementation)

        self.deployed.append((contract, address, tuple(args)))
        return address, f"0x{n:064x}"

    def proxy_init_data(self, proxy_address: str) -> bytes:
        for contract, address, args in self.deployed:
            if address == proxy_address:
                return args[1]
        raise KeyError(proxy_address)

    def implementation_address(self, proxy_address: str) -> str:
        return self._implementations[proxy_address]


class RecordingReporter:
    """Reporter double that keeps everything it is given."""

    def __init__(self):
        self.lines: List[str] = []
        self.summaries: List[DeploymentSummary] = []
        self.records: List[dict] = []

    def progress(self, line: str) -> None:
        self.lines.append(line)

    def complete(self, summary: DeploymentSummary) -> None:
        self.summaries.append(summary)

    def result(self, record: dict) -> None:
        self.records.append(record)


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def artifacts_dir(fixtures_dir: Path) -> Path:
    """Return the hardhat artifacts fixture directory."""
    return fixtures_dir / "artifacts"


@pytest.fixture
def artifact_store(artifacts_dir: Path) -> ArtifactStore:
    return ArtifactStore(artifacts_dir)


@pytest.fixture
def fake_chain() -> FakeChain:
    return FakeChain()


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def implementations(
    artifact_store: ArtifactStore, fake_chain: FakeChain, reporter: RecordingReporter
) -> ImplementationDeployer:
    return ImplementationDeployer(artifact_store, fake_chain, reporter)


@pytest.fixture
def initializer_params() -> InitializerParams:
    return InitializerParams(
        minimum_blocks_before_liquidation=214800,
        minimum_liquidation_collateral=1000000000000000000,
        validators_per_operator_limit=500,
        declare_operator_fee_period=604800,
        execute_operator_fee_period=604800,
        operator_max_fee_increase=3,
    )


@pytest.fixture
def initializer_env() -> Dict[str, str]:
    """Environment variables matching the initializer_params fixture."""
    return {
        "MINIMUM_BLOCKS_BEFORE_LIQUIDATION": "214800",
        "MINIMUM_LIQUIDATION_COLLATERAL": "1000000000000000000",
        "VALIDATORS_PER_OPERATOR_LIMIT": "500",
        "DECLARE_OPERATOR_FEE_PERIOD": "604800",
        "EXECUTE_OPERATOR_FEE_PERIOD": "604800",
        "OPERATOR_MAX_FEE_INCREASE": "3",
    }


@pytest.fixture
def deployer_address() -> str:
    return DEPLOYER


@pytest.fixture
def chain_factory():
    """Return the FakeChain class for tests that need a customised chain."""
    return FakeChain


@pytest.fixture
def reporter_factory():
    return RecordingReporter
