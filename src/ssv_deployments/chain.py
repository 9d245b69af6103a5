"""Chain connection: deployer identity plus transaction submission over web3."""

import logging
from typing import Any, Optional, Sequence, Tuple

import requests
from eth_utils import is_address, to_checksum_address
from web3 import Web3
from web3.exceptions import TimeExhausted, Web3Exception

from .constants import (
    DEFAULT_CONFIRMATION_TIMEOUT,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_REQUEST_TIMEOUT,
    IMPLEMENTATION_SLOT,
)
from .exceptions import ConfigurationError, TransactionError
from .types import ContractArtifact

logger = logging.getLogger(__name__)

# Everything the node or the transport can raise while serving a request
NODE_ERRORS = (Web3Exception, requests.RequestException)


def connect(
    rpc_url: str,
    request_timeout: int = DEFAULT_REQUEST_TIMEOUT,
    session: Optional[requests.Session] = None,
) -> Web3:
    """
    Open a web3 connection to an HTTP JSON-RPC node.

    Args:
        rpc_url: Node URL
        request_timeout: Per-request timeout in seconds
        session: requests session to send through (a fresh one if None)

    Returns:
        Web3 instance bound to the node
    """
    provider = Web3.HTTPProvider(
        rpc_url,
        request_kwargs={"timeout": request_timeout},
        session=session or requests.Session(),
    )
    return Web3(provider)


def first_account(w3: Web3) -> str:
    """
    Return the node's first unlocked account, the default deployer.

    Raises:
        ConfigurationError: If the node exposes no accounts
        TransactionError: If the node cannot be queried
    """
    try:
        accounts = w3.eth.accounts
    except NODE_ERRORS as e:
        raise TransactionError(f"Failed to list node accounts: {e}") from e
    if not accounts:
        raise ConfigurationError("No unlocked accounts available on the node; pass a deployer address")
    return to_checksum_address(accounts[0])


class ChainConnection:
    """Submits deployment transactions from a single deployer account."""

    def __init__(
        self,
        w3: Web3,
        deployer: str,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        confirmation_timeout: float = DEFAULT_CONFIRMATION_TIMEOUT,
    ):
        if not is_address(deployer):
            raise ConfigurationError(f"Invalid deployer address: {deployer}")
        self.w3 = w3
        self.deployer = to_checksum_address(deployer)
        self.poll_interval = poll_interval
        self.confirmation_timeout = confirmation_timeout

    def chain_id(self) -> int:
        """Chain id reported by the node."""
        try:
            return self.w3.eth.chain_id
        except NODE_ERRORS as e:
            raise TransactionError(f"Failed to read chain id: {e}") from e

    def deploy(self, artifact: ContractArtifact, args: Sequence[Any] = ()) -> Tuple[str, str]:
        """
        Submit a contract creation transaction and wait for it.

        Args:
            artifact: Compiled contract to deploy
            args: Constructor arguments

        Returns:
            Tuple of (contract_address, transaction_hash)

        Raises:
            ConfigurationError: If the arguments do not match the constructor
            TransactionError: If submission fails, the transaction reverts,
                is not confirmed in time or creates no contract
        """
        contract = self.w3.eth.contract(abi=artifact.abi, bytecode=artifact.bytecode)
        try:
            constructor = contract.constructor(*args)
        except (Web3Exception, TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid {artifact.name} constructor arguments: {e}") from e

        try:
            tx_hash = Web3.to_hex(constructor.transact({"from": self.deployer}))
        except NODE_ERRORS as e:
            raise TransactionError(f"Failed to deploy {artifact.name}: {e}") from e
        logger.debug("Sent %s deployment %s", artifact.name, tx_hash)

        try:
            receipt = self.w3.eth.wait_for_transaction_receipt(
                tx_hash,
                timeout=self.confirmation_timeout,
                poll_latency=self.poll_interval,
            )
        except TimeExhausted as e:
            raise TransactionError(
                f"Transaction {tx_hash} not confirmed within {self.confirmation_timeout}s"
            ) from e
        except NODE_ERRORS as e:
            raise TransactionError(f"Failed to fetch receipt for {tx_hash}: {e}") from e

        if receipt["status"] == 0:
            raise TransactionError(f"Transaction {tx_hash} reverted")
        address = receipt.get("contractAddress")
        if not address:
            raise TransactionError(f"Transaction {tx_hash} created no contract")
        return to_checksum_address(address), tx_hash

    def implementation_address(self, proxy_address: str) -> str:
        """
        Read the ERC-1967 implementation address of a proxy.

        Raises:
            TransactionError: If the slot is empty or cannot be read
        """
        try:
            raw = self.w3.eth.get_storage_at(
                to_checksum_address(proxy_address), int(IMPLEMENTATION_SLOT, 16)
            )
        except NODE_ERRORS as e:
            raise TransactionError(f"Failed to read implementation of {proxy_address}: {e}") from e

        value = bytes(raw or b"")
        # Nodes answer "0x" or all zeroes for an unset slot
        if not any(value):
            raise TransactionError(f"No implementation set for proxy {proxy_address}")
        return to_checksum_address(value[-20:].rjust(20, b"\x00"))
