"""Configuration constants for ssv-deployments."""

# Contract identifiers as they appear in the hardhat artifacts directory
TOKEN_CONTRACT = "SSVToken"
NETWORK_CONTRACT = "SSVNetwork"
NETWORK_VIEWS_CONTRACT = "SSVNetworkViews"
WHITELISTING_CONTRACT = "BasicWhitelisting"
REGISTRY_CONTRACT = "SSVRegistry"
PROXY_CONTRACT = "ERC1967Proxy"

INITIALIZER_NAME = "initialize"

# bytes32(uint256(keccak256("eip1967.proxy.implementation")) - 1)
IMPLEMENTATION_SLOT = "0x360894a13ba1a3210667c828492db98dca3e2076cc3735a920a3ca505d382bbc"

# SSVNetwork.initialize numeric parameters, in initializer order
INITIALIZER_PARAM_ENV = (
    "MINIMUM_BLOCKS_BEFORE_LIQUIDATION",
    "MINIMUM_LIQUIDATION_COLLATERAL",
    "VALIDATORS_PER_OPERATOR_LIMIT",
    "DECLARE_OPERATOR_FEE_PERIOD",
    "EXECUTE_OPERATOR_FEE_PERIOD",
    "OPERATOR_MAX_FEE_INCREASE",
)

TOKEN_ADDRESS_ENV = "SSV_TOKEN_ADDRESS"
DEPLOYER_ENV = "DEPLOYER_ADDRESS"

DEFAULT_NETWORK = "localhost"
DEFAULT_ARTIFACTS_DIR = "artifacts"

# Receipt polling and request limits used by the chain connection
DEFAULT_POLL_INTERVAL = 1.0
DEFAULT_CONFIRMATION_TIMEOUT = 300.0
DEFAULT_REQUEST_TIMEOUT = 30

# Per-network settings. ssv_token is the pre-existing token on that network;
# None means a fresh token is deployed on demand.
NETWORK_CONFIG = {
    "mainnet": {
        "chain_id": 1,
        "default_rpc_env": "MAINNET_ETH_NODE_URL",
        "ssv_token": "0x9d65ff81a3c488d585bbfb0bfe3c7707c7917f54",
    },
    "holesky": {
        "chain_id": 17000,
        "default_rpc_env": "HOLESKY_ETH_NODE_URL",
        "ssv_token": None,
    },
    "hoodi": {
        "chain_id": 560048,
        "default_rpc_env": "HOODI_ETH_NODE_URL",
        "ssv_token": None,
    },
    "localhost": {
        "chain_id": 31337,
        "default_rpc_env": "LOCALHOST_ETH_NODE_URL",
        "default_rpc_url": "http://127.0.0.1:8545",
        "ssv_token": None,
    },
}
