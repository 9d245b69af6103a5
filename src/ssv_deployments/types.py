"""Data types and dataclasses for ssv-deployments."""

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class ContractArtifact:
    """Compiled contract as produced by the build system."""

    name: str
    abi: List[Dict[str, Any]]
    bytecode: str  # 0x-prefixed creation bytecode


@dataclass(frozen=True)
class DeploymentRequest:
    """Inputs to a single deployment step."""

    contract: str  # e.g., "SSVNetwork"
    args: Tuple[Any, ...] = ()  # constructor or initializer arguments, in order


@dataclass(frozen=True)
class DeploymentResult:
    """Output of a single deployment step."""

    contract: str
    address: str  # Proxy address, or implementation address when not proxied
    implementation_address: Optional[str] = None
    transaction_hash: Optional[str] = None

    @property
    def is_proxy(self) -> bool:
        return self.implementation_address is not None

    def to_dict(self) -> Dict[str, str]:
        if self.is_proxy:
            return {"proxyAddress": self.address, "implAddress": self.implementation_address}
        return {"address": self.address}


@dataclass
class DeploymentSummary:
    """Every address produced by a full deployment run, keyed by role."""

    ssv_token: str
    operators_module: str
    clusters_module: str
    dao_module: str
    views_module: str
    ssv_network: str
    ssv_network_views: Optional[str] = None

    def to_dict(self) -> Dict[str, str]:
        """Machine-readable record, keys in output order."""
        return {
            "ssvTokenAddress": self.ssv_token,
            "operatorsModAddress": self.operators_module,
            "clustersModAddress": self.clusters_module,
            "daoModAddress": self.dao_module,
            "viewsModAddress": self.views_module,
            "ssvNetworkAddress": self.ssv_network,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())
