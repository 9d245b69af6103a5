"""ABI encoding of initializer calls."""

from typing import Any, Sequence

from eth_abi.exceptions import EncodingError
from eth_utils import is_address, to_bytes, to_checksum_address
from web3 import Web3
from web3.exceptions import Web3Exception

from .exceptions import ConfigurationError
from .types import ContractArtifact

# Only the ABI codec is used, no node is ever contacted
_codec = Web3()


def _normalize(arg: Any) -> Any:
    # web3 accepts checksummed addresses only
    if isinstance(arg, str) and is_address(arg):
        return to_checksum_address(arg)
    return arg


def encode_function_call(artifact: ContractArtifact, name: str, args: Sequence[Any]) -> bytes:
    """
    Encode calldata for a function call.

    Args:
        artifact: Contract whose ABI declares the function
        name: Function name (e.g., "initialize")
        args: Positional arguments

    Returns:
        Calldata (selector + encoded arguments)

    Raises:
        ConfigurationError: If no function matches or an argument cannot be encoded
    """
    contract = _codec.eth.contract(abi=artifact.abi)
    try:
        calldata = contract.encode_abi(name, args=[_normalize(a) for a in args])
    except (Web3Exception, EncodingError, TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid arguments for {artifact.name}.{name}: {e}") from e
    return to_bytes(hexstr=calldata)
