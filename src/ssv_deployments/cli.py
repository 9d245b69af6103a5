"""Click command line: the deploy:* tasks."""

from __future__ import annotations

import functools
from pathlib import Path
from typing import Callable, Optional

import click
from dotenv import find_dotenv, load_dotenv

from .artifacts import ArtifactStore, compile_contracts
from .chain import ChainConnection, connect, first_account
from .config import NetworkConfig, load_initializer_params, resolve_network
from .constants import (
    DEFAULT_ARTIFACTS_DIR,
    DEFAULT_CONFIRMATION_TIMEOUT,
    DEFAULT_NETWORK,
    DEPLOYER_ENV,
    REGISTRY_CONTRACT,
    WHITELISTING_CONTRACT,
)
from .deployers import ImplementationDeployer, ModuleDeployer, ProxyDeployer, TokenProvisioner
from .exceptions import ConfigurationError, DeploymentError
from .logging import configure_logging
from .modules import validate_module
from .orchestrator import DeploymentOrchestrator
from .reporting import ConsoleReporter, Reporter, reporter_for

machine_option = click.option(
    "--machine",
    type=click.BOOL,
    default=False,
    show_default=True,
    help="Print one JSON record instead of progress lines.",
)


class DeploymentContext:
    """Per-invocation settings; the chain connection is opened on first use."""

    def __init__(
        self,
        network: str,
        rpc_url: Optional[str],
        artifacts_dir: Path,
        project_dir: Path,
        deployer: Optional[str],
        confirmation_timeout: float,
    ):
        self.network_name = network
        self.rpc_url = rpc_url
        self.artifacts_dir = artifacts_dir
        self.project_dir = project_dir
        self.deployer = deployer
        self.confirmation_timeout = confirmation_timeout
        self._network: Optional[NetworkConfig] = None
        self._chain: Optional[ChainConnection] = None

    @property
    def network(self) -> NetworkConfig:
        if self._network is None:
            self._network = resolve_network(self.network_name, rpc_url=self.rpc_url)
        return self._network

    def chain(self) -> ChainConnection:
        if self._chain is None:
            if not self.network.rpc_url:
                raise ConfigurationError(
                    f"No RPC URL configured for network '{self.network.name}'"
                )
            w3 = connect(self.network.rpc_url)
            # The deployer is fixed once here and passed explicitly from then on
            deployer = self.deployer or first_account(w3)
            chain = ChainConnection(w3, deployer, confirmation_timeout=self.confirmation_timeout)

            chain_id = chain.chain_id()
            if chain_id != self.network.chain_id:
                raise ConfigurationError(
                    f"Node at {self.network.rpc_url} reports chain id {chain_id}, "
                    f"expected {self.network.chain_id} for network '{self.network.name}'"
                )
            self._chain = chain
        return self._chain

    def build_step(self, machine: bool) -> Optional[Callable[[], None]]:
        """Compilation runs only for interactive invocations."""
        if machine:
            return None
        return functools.partial(compile_contracts, self.project_dir)

    def implementations(self, reporter: Reporter) -> ImplementationDeployer:
        return ImplementationDeployer(ArtifactStore(self.artifacts_dir), self.chain(), reporter)


pass_deployment = click.make_pass_decorator(DeploymentContext)


class DeploymentGroup(click.Group):
    """Reports deployment failures as `Error: <message>` on stderr with exit status 1."""

    def invoke(self, ctx: click.Context):
        try:
            return super().invoke(ctx)
        except DeploymentError as e:
            raise click.ClickException(str(e)) from e


def _run_build(deployment: DeploymentContext, machine: bool) -> None:
    build = deployment.build_step(machine)
    if build is not None:
        build()


@click.group(cls=DeploymentGroup)
@click.option("--network", default=DEFAULT_NETWORK, envvar="SSV_NETWORK", show_default=True)
@click.option("--rpc-url", default=None, help="Override the network's RPC URL.")
@click.option(
    "--artifacts-dir",
    type=click.Path(path_type=Path),
    default=DEFAULT_ARTIFACTS_DIR,
    show_default=True,
)
@click.option(
    "--project-dir",
    type=click.Path(path_type=Path, file_okay=False),
    default=".",
    show_default=True,
    help="Hardhat project compiled before interactive runs.",
)
@click.option(
    "--deployer",
    default=None,
    envvar=DEPLOYER_ENV,
    help="Deployer address (defaults to the node's first account).",
)
@click.option(
    "--confirmation-timeout",
    type=float,
    default=DEFAULT_CONFIRMATION_TIMEOUT,
    show_default=True,
    help="Seconds to wait for each transaction receipt.",
)
@click.option("-v", "--verbose", count=True, help="Log to stderr (-v info, -vv debug).")
@click.option("--log-json", is_flag=True, help="Render log records as JSON lines.")
@click.pass_context
def cli(
    ctx: click.Context,
    network: str,
    rpc_url: Optional[str],
    artifacts_dir: Path,
    project_dir: Path,
    deployer: Optional[str],
    confirmation_timeout: float,
    verbose: int,
    log_json: bool,
) -> None:
    """Deploy the SSV Network contracts."""
    load_dotenv(find_dotenv(usecwd=True))
    configure_logging(verbose, json_output=log_json)
    ctx.obj = DeploymentContext(
        network=network,
        rpc_url=rpc_url,
        artifacts_dir=artifacts_dir,
        project_dir=project_dir,
        deployer=deployer,
        confirmation_timeout=confirmation_timeout,
    )


@cli.command("deploy:all")
@machine_option
@pass_deployment
def deploy_all(deployment: DeploymentContext, machine: bool) -> None:
    """Deploy SSVNetwork, SSVNetworkViews and module contracts."""
    reporter = reporter_for(machine)
    build = deployment.build_step(machine)
    implementations = deployment.implementations(reporter)
    orchestrator = DeploymentOrchestrator(
        deployer=deployment.chain().deployer,
        token=TokenProvisioner(implementations, deployment.network.ssv_token),
        modules=ModuleDeployer(implementations),
        proxies=ProxyDeployer(implementations),
        reporter=reporter,
        build=build,
    )
    orchestrator.run()


@cli.command("deploy:main-impl")
@click.option("--contract", required=True, help="New contract implementation.")
@pass_deployment
def deploy_main_impl(deployment: DeploymentContext, contract: str) -> None:
    """Deploy an SSVNetwork / SSVNetworkViews implementation contract."""
    _run_build(deployment, machine=False)
    deployment.implementations(ConsoleReporter()).deploy(contract)


@cli.command("deploy:whitelisting-contract")
@pass_deployment
def deploy_whitelisting_contract(deployment: DeploymentContext) -> None:
    """Deploy a basic whitelisting contract."""
    _run_build(deployment, machine=False)
    deployment.implementations(ConsoleReporter()).deploy(WHITELISTING_CONTRACT)


@cli.command("deploy:token")
@machine_option
@pass_deployment
def deploy_token(deployment: DeploymentContext, machine: bool) -> None:
    """Deploy a fresh SSV token."""
    reporter = reporter_for(machine)
    _run_build(deployment, machine)
    address = TokenProvisioner(deployment.implementations(reporter)).deploy()
    reporter.result({"address": address})


@cli.command("deploy:ssv-registry")
@pass_deployment
def deploy_ssv_registry(deployment: DeploymentContext) -> None:
    """Deploy the SSVRegistry proxy without calling its initializer."""
    reporter = ConsoleReporter()
    _run_build(deployment, machine=False)
    reporter.progress(f"Deploying {REGISTRY_CONTRACT}...")
    ProxyDeployer(deployment.implementations(reporter)).deploy(REGISTRY_CONTRACT)


@cli.command("deploy:mock-token", hidden=True)
@pass_deployment
def deploy_mock_token(deployment: DeploymentContext) -> None:
    """Return the configured SSV token, deploying one when none is configured."""
    reporter = ConsoleReporter()
    TokenProvisioner(
        deployment.implementations(reporter), deployment.network.ssv_token
    ).provision()


@cli.command("deploy:module", hidden=True)
@click.option("--module", "module", required=True, help="SSV module.")
@machine_option
@pass_deployment
def deploy_module(deployment: DeploymentContext, module: str, machine: bool) -> None:
    """Deploy a new module contract."""
    # Reject unknown modules before touching the chain
    validate_module(module)
    reporter = reporter_for(machine)
    _run_build(deployment, machine)
    result = ModuleDeployer(deployment.implementations(reporter)).deploy(module)
    reporter.result(result.to_dict())


@cli.command("deploy:impl", hidden=True)
@click.option("--contract", required=True, help="New contract implementation.")
@machine_option
@pass_deployment
def deploy_impl(deployment: DeploymentContext, contract: str, machine: bool) -> None:
    """Deploy an implementation contract."""
    reporter = reporter_for(machine)
    _run_build(deployment, machine)
    result = deployment.implementations(reporter).deploy(contract)
    reporter.result(result.to_dict())


@cli.command("deploy:ssv-network", hidden=True)
@click.argument("operators_mod_address", metavar="OPERATORS_MOD_ADDRESS")
@click.argument("clusters_mod_address", metavar="CLUSTERS_MOD_ADDRESS")
@click.argument("dao_mod_address", metavar="DAO_MOD_ADDRESS")
@click.argument("views_mod_address", metavar="VIEWS_MOD_ADDRESS")
@click.argument("ssv_token_address", metavar="SSV_TOKEN_ADDRESS")
@machine_option
@pass_deployment
def deploy_ssv_network(
    deployment: DeploymentContext,
    operators_mod_address: str,
    clusters_mod_address: str,
    dao_mod_address: str,
    views_mod_address: str,
    ssv_token_address: str,
    machine: bool,
) -> None:
    """Deploy the SSVNetwork proxy."""
    params = load_initializer_params()
    reporter = reporter_for(machine)
    result = ProxyDeployer(deployment.implementations(reporter)).deploy_network(
        ssv_token_address,
        operators_mod_address,
        clusters_mod_address,
        dao_mod_address,
        views_mod_address,
        params,
    )
    reporter.result(result.to_dict())


@cli.command("deploy:ssv-network-views", hidden=True)
@click.option("--ssvNetworkAddress", "ssv_network_address", required=True, help="SSVNetwork address.")
@machine_option
@pass_deployment
def deploy_ssv_network_views(
    deployment: DeploymentContext, ssv_network_address: str, machine: bool
) -> None:
    """Deploy the SSVNetworkViews proxy."""
    reporter = reporter_for(machine)
    result = ProxyDeployer(deployment.implementations(reporter)).deploy_network_views(
        ssv_network_address
    )
    reporter.result(result.to_dict())


def main() -> None:
    cli()
