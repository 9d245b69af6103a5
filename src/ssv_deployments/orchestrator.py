"""Full SSV Network deployment: token, modules, SSVNetwork and SSVNetworkViews."""

import logging
from typing import Callable, Dict, Optional

from .config import InitializerParams, load_initializer_params
from .deployers import ModuleDeployer, ProxyDeployer, TokenProvisioner
from .modules import ModuleKind
from .reporting import Reporter
from .types import DeploymentSummary

logger = logging.getLogger(__name__)


class DeploymentOrchestrator:
    """
    Runs every deployment step in order, each step feeding the next.

    Steps run strictly one after another from a single deployer account.
    Any failure aborts the run with the failing step's exception; contracts
    deployed by earlier steps stay on chain and no summary is reported.
    """

    def __init__(
        self,
        deployer: str,
        token: TokenProvisioner,
        modules: ModuleDeployer,
        proxies: ProxyDeployer,
        reporter: Reporter,
        build: Optional[Callable[[], None]] = None,
        params: Optional[InitializerParams] = None,
    ):
        """
        Args:
            deployer: Address of the account submitting every transaction
            token: Token provisioner
            modules: Module deployer
            proxies: Proxy deployer for SSVNetwork and SSVNetworkViews
            reporter: Receives progress lines and the final summary
            build: Compilation step to run first, if any
            params: SSVNetwork initializer parameters; read from the
                environment when the SSVNetwork step runs if None
        """
        self.deployer = deployer
        self.token = token
        self.modules = modules
        self.proxies = proxies
        self.reporter = reporter
        self.build = build
        self.params = params

    def run(self) -> DeploymentSummary:
        """
        Deploy everything and report the summary once.

        Returns:
            DeploymentSummary with every deployed address
        """
        if self.build is not None:
            self.build()

        self.reporter.progress(f"Deploying contracts with the account:{self.deployer.lower()}")

        ssv_token = self.token.provision()

        module_addresses: Dict[ModuleKind, str] = {}
        for kind in ModuleKind:
            result = self.modules.deploy(kind.value)
            module_addresses[kind] = result.address

        params = self.params if self.params is not None else load_initializer_params()
        network = self.proxies.deploy_network(
            ssv_token,
            module_addresses[ModuleKind.OPERATORS],
            module_addresses[ModuleKind.CLUSTERS],
            module_addresses[ModuleKind.DAO],
            module_addresses[ModuleKind.VIEWS],
            params,
        )

        views = self.proxies.deploy_network_views(network.address)

        summary = DeploymentSummary(
            ssv_token=ssv_token,
            operators_module=module_addresses[ModuleKind.OPERATORS],
            clusters_module=module_addresses[ModuleKind.CLUSTERS],
            dao_module=module_addresses[ModuleKind.DAO],
            views_module=module_addresses[ModuleKind.VIEWS],
            ssv_network=network.address,
            ssv_network_views=views.address,
        )
        logger.info(
            "Deployment complete: %s, SSVNetworkViews at %s",
            summary.to_dict(),
            summary.ssv_network_views,
        )
        self.reporter.complete(summary)
        return summary
