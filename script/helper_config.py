"""Network lookup table and the fixed parameters of the mock coordinator."""

LOCAL_CHAIN_ID = 31337

DEVELOPMENT_CHAINS = ("pyevm", "anvil", "localhost")

# Real coordinator addresses are configured per chain; the local chain has none
# and gets the mock deployed instead.
NETWORK_CONFIG = {
    LOCAL_CHAIN_ID: {
        "name": "localhost",
        "vrf_coordinator": None,
    },
    11155111: {
        "name": "sepolia",
        "vrf_coordinator": "0x8103B0A8A00be2DDC778e6e7eaa21791Cd364625",
    },
    1: {
        "name": "mainnet",
        "vrf_coordinator": "0x271682DEB8C4E0901D1a1550aD2e64D568E69909",
    },
}

MOCK_COORDINATOR_NAME = "MockOracleCoordinator"
MOCKS_TAGS = frozenset({"all", "mocks"})

BASE_FEE = 25 * 10**16  # 0.25 LINK premium per request
GAS_PRICE_LINK = 10**9  # LINK per gas


def is_local_chain(chain_id: int, local_chain_id: int = LOCAL_CHAIN_ID) -> bool:
    return chain_id == local_chain_id


def network_name(chain_id: int) -> str:
    return NETWORK_CONFIG.get(chain_id, {}).get("name", "unknown")
