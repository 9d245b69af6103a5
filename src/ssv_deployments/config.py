"""Network and environment configuration for ssv-deployments."""

import os
from dataclasses import astuple, dataclass
from typing import Mapping, Optional, Tuple

from eth_utils import is_address, to_checksum_address

from .constants import INITIALIZER_PARAM_ENV, NETWORK_CONFIG, TOKEN_ADDRESS_ENV
from .exceptions import ConfigurationError


@dataclass(frozen=True)
class NetworkConfig:
    """Settings for the network being deployed to."""

    name: str
    chain_id: int
    rpc_url: Optional[str]
    ssv_token: Optional[str] = None  # Pre-existing token; None deploys one


@dataclass(frozen=True)
class InitializerParams:
    """Numeric SSVNetwork.initialize parameters, field order is argument order."""

    minimum_blocks_before_liquidation: int
    minimum_liquidation_collateral: int
    validators_per_operator_limit: int
    declare_operator_fee_period: int
    execute_operator_fee_period: int
    operator_max_fee_increase: int

    def as_args(self) -> Tuple[int, ...]:
        return astuple(self)


def resolve_network(
    name: str,
    environ: Optional[Mapping[str, str]] = None,
    rpc_url: Optional[str] = None,
) -> NetworkConfig:
    """
    Build the configuration of a known network.

    The RPC URL comes from the explicit argument, then the network's RPC
    environment variable, then the network default. The token address
    may be overridden with $SSV_TOKEN_ADDRESS.

    Args:
        name: Network name (e.g., "holesky")
        environ: Environment mapping (defaults to os.environ)
        rpc_url: Explicit RPC URL

    Returns:
        NetworkConfig

    Raises:
        ConfigurationError: If the network is unknown or the token address is invalid
    """
    if environ is None:
        environ = os.environ

    if name not in NETWORK_CONFIG:
        raise ConfigurationError(
            f"Unknown network '{name}'. Expected one of: {', '.join(NETWORK_CONFIG)}"
        )
    network = NETWORK_CONFIG[name]

    if rpc_url is None:
        rpc_url = environ.get(network["default_rpc_env"]) or network.get("default_rpc_url")

    ssv_token = environ.get(TOKEN_ADDRESS_ENV) or network.get("ssv_token")
    if ssv_token is not None and not is_address(ssv_token):
        raise ConfigurationError(f"Invalid SSV token address for network '{name}': {ssv_token}")

    return NetworkConfig(
        name=name,
        chain_id=network["chain_id"],
        rpc_url=rpc_url,
        ssv_token=to_checksum_address(ssv_token) if ssv_token else None,
    )


def load_initializer_params(environ: Optional[Mapping[str, str]] = None) -> InitializerParams:
    """
    Read the SSVNetwork initializer parameters from the environment.

    Values are parsed as integers only; range checks are left to the
    contract's initializer.

    Raises:
        ConfigurationError: If a variable is missing or not an integer
    """
    if environ is None:
        environ = os.environ

    values = []
    for var in INITIALIZER_PARAM_ENV:
        raw = environ.get(var)
        if raw is None or raw.strip() == "":
            raise ConfigurationError(f"Missing required environment variable {var}")
        try:
            values.append(int(raw.strip()))
        except ValueError as e:
            raise ConfigurationError(
                f"Environment variable {var} must be an integer, got '{raw}'"
            ) from e

    return InitializerParams(*values)
