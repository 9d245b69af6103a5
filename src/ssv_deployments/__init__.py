"""
ssv-deployments: deployment orchestration for the SSV Network contracts
"""

from importlib.metadata import PackageNotFoundError, version

from .deployers import ImplementationDeployer, ModuleDeployer, ProxyDeployer, TokenProvisioner
from .exceptions import (
    BuildArtifactNotFoundError,
    BuildError,
    ConfigurationError,
    DeploymentError,
    InvalidModuleError,
    TransactionError,
)
from .modules import ModuleKind, validate_module
from .orchestrator import DeploymentOrchestrator
from .reporting import ConsoleReporter, MachineReporter, reporter_for
from .types import DeploymentRequest, DeploymentResult, DeploymentSummary

try:
    __version__ = version("ssv-deployments")
except PackageNotFoundError:
    __version__ = None

__all__ = [
    "DeploymentOrchestrator",
    "ImplementationDeployer",
    "TokenProvisioner",
    "ModuleDeployer",
    "ProxyDeployer",
    "ModuleKind",
    "validate_module",
    "ConsoleReporter",
    "MachineReporter",
    "reporter_for",
    "DeploymentRequest",
    "DeploymentResult",
    "DeploymentSummary",
    "DeploymentError",
    "InvalidModuleError",
    "BuildError",
    "BuildArtifactNotFoundError",
    "TransactionError",
    "ConfigurationError",
]
