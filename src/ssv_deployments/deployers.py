"""Single-step deployers: implementations, token, modules and proxies."""

import logging
from typing import Any, Optional, Sequence

from .artifacts import ArtifactStore
from .chain import ChainConnection
from .config import InitializerParams
from .constants import (
    INITIALIZER_NAME,
    NETWORK_CONTRACT,
    NETWORK_VIEWS_CONTRACT,
    PROXY_CONTRACT,
    TOKEN_CONTRACT,
)
from .encoding import encode_function_call
from .modules import validate_module
from .reporting import Reporter
from .types import DeploymentRequest, DeploymentResult

logger = logging.getLogger(__name__)


class ImplementationDeployer:
    """Deploys a contract with no constructor arguments and no proxy."""

    def __init__(self, artifacts: ArtifactStore, chain: ChainConnection, reporter: Reporter):
        self.artifacts = artifacts
        self.chain = chain
        self.reporter = reporter

    def deploy(self, contract: str) -> DeploymentResult:
        """
        Deploy one implementation contract.

        Args:
            contract: Contract name of an already-built artifact

        Returns:
            DeploymentResult with the implementation address

        Raises:
            BuildArtifactNotFoundError: If the contract was never built
            TransactionError: If deployment fails or reverts
        """
        request = DeploymentRequest(contract=contract)
        artifact = self.artifacts.load(request.contract)
        logger.info("Deploying %s implementation", request.contract)

        address, tx_hash = self.chain.deploy(artifact, request.args)

        self.reporter.progress(f"{request.contract} implementation deployed to: {address}")
        return DeploymentResult(contract=request.contract, address=address, transaction_hash=tx_hash)


class TokenProvisioner:
    """Resolves the SSV token used by SSVNetwork."""

    def __init__(
        self,
        implementations: ImplementationDeployer,
        configured_address: Optional[str] = None,
    ):
        self.implementations = implementations
        self.configured_address = configured_address

    def provision(self) -> str:
        """
        Return the network's pre-existing token, deploying one only when none is configured.

        Returns:
            Token address
        """
        if self.configured_address:
            self.implementations.reporter.progress(
                f"Using SSV Network Token at: {self.configured_address}"
            )
            return self.configured_address
        return self.deploy()

    def deploy(self) -> str:
        """Always deploy a fresh token and return its address."""
        self.implementations.reporter.progress("Deploying SSV Network Token")
        return self.implementations.deploy(TOKEN_CONTRACT).address


class ModuleDeployer:
    """Deploys one SSV module implementation after validating its name."""

    def __init__(self, implementations: ImplementationDeployer):
        self.implementations = implementations

    def deploy(self, module: str) -> DeploymentResult:
        """
        Deploy a module.

        Args:
            module: Module value string (e.g., "SSVOperators")

        Returns:
            DeploymentResult with the module address

        Raises:
            InvalidModuleError: If module is not a known module, before any transaction
        """
        kind = validate_module(module)
        return self.implementations.deploy(kind.value)


class ProxyDeployer:
    """Deploys UUPS contracts behind an ERC1967Proxy."""

    def __init__(self, implementations: ImplementationDeployer):
        self.implementations = implementations

    @property
    def artifacts(self) -> ArtifactStore:
        return self.implementations.artifacts

    @property
    def chain(self) -> ChainConnection:
        return self.implementations.chain

    @property
    def reporter(self) -> Reporter:
        return self.implementations.reporter

    def deploy(
        self, contract: str, initializer_args: Optional[Sequence[Any]] = None
    ) -> DeploymentResult:
        """
        Deploy an implementation and a proxy pointing at it.

        Args:
            contract: Implementation contract name
            initializer_args: Arguments for initialize(...), in order.
                None deploys the proxy without calling an initializer.

        Returns:
            DeploymentResult carrying both the proxy and implementation addresses

        Raises:
            ConfigurationError: If the arguments do not match the initializer
            TransactionError: If any deployment fails or the initializer reverts
        """
        request = DeploymentRequest(
            contract=contract,
            args=tuple(initializer_args) if initializer_args is not None else (),
        )
        artifact = self.artifacts.load(request.contract)

        # Encode before submitting anything so bad arguments cost no transaction
        init_data = b""
        if initializer_args is not None:
            init_data = encode_function_call(artifact, INITIALIZER_NAME, request.args)
        proxy_artifact = self.artifacts.load(PROXY_CONTRACT)

        implementation = self.implementations.deploy(request.contract)

        logger.info("Deploying %s proxy", request.contract)
        proxy_address, tx_hash = self.chain.deploy(
            proxy_artifact, (implementation.address, init_data)
        )
        implementation_address = self.chain.implementation_address(proxy_address)

        self.reporter.progress(f"{request.contract} proxy deployed to: {proxy_address}")
        return DeploymentResult(
            contract=request.contract,
            address=proxy_address,
            implementation_address=implementation_address,
            transaction_hash=tx_hash,
        )

    def deploy_network(
        self,
        ssv_token: str,
        operators_module: str,
        clusters_module: str,
        dao_module: str,
        views_module: str,
        params: InitializerParams,
    ) -> DeploymentResult:
        """Deploy the SSVNetwork proxy wired to the token and module addresses."""
        self.reporter.progress(f"Deploying {NETWORK_CONTRACT} with ssvToken {ssv_token}")
        args = [
            ssv_token,
            operators_module,
            clusters_module,
            dao_module,
            views_module,
            *params.as_args(),
        ]
        return self.deploy(NETWORK_CONTRACT, args)

    def deploy_network_views(self, ssv_network: str) -> DeploymentResult:
        """Deploy the SSVNetworkViews proxy wired to the SSVNetwork proxy."""
        return self.deploy(NETWORK_VIEWS_CONTRACT, [ssv_network])
