from typing import Optional

import boa
from moccasin.config import get_active_network

from script.deployments import DeploymentBook
from script.helper_config import (
    BASE_FEE,
    DEVELOPMENT_CHAINS,
    GAS_PRICE_LINK,
    LOCAL_CHAIN_ID,
    MOCK_COORDINATOR_NAME,
    MOCKS_TAGS,
    is_local_chain,
)
from script.pipeline import run_pipeline
from script.steps import DeployContext, DeployStep, StepRegistry

STEP_NAME = "deploy_mocks"


def provision_mocks(context: DeployContext, local_chain_id: int = LOCAL_CHAIN_ID) -> None:
    """Deploy the mock coordinator when running on the local chain; do nothing elsewhere.

    Deploy failures propagate to the caller unchanged.
    """
    if not is_local_chain(context.chain_id, local_chain_id):
        return
    context.log("Local network detected! Deploying mocks...")
    context.deploy(
        MOCK_COORDINATOR_NAME,
        {
            "from": context.deployer,
            "log": True,
            "args": [BASE_FEE, GAS_PRICE_LINK],
        },
    )
    context.log("Mocks deployed!")
    context.log("-" * 54)


def register(registry: StepRegistry) -> DeployStep:
    return registry.add(DeployStep(STEP_NAME, provision_mocks, MOCKS_TAGS))


def context_chain_id(active_network) -> int:
    """Chain id of the active network.

    Development networks without a configured chain id (moccasin's in-memory
    ``pyevm``) count as the local chain.
    """
    if active_network.chain_id is not None:
        return active_network.chain_id
    if active_network.name in DEVELOPMENT_CHAINS:
        return LOCAL_CHAIN_ID
    return boa.env.evm.patch.chain_id


def context_from_network(active_network, book: Optional[DeploymentBook] = None) -> DeployContext:
    chain_id = context_chain_id(active_network)
    account = active_network.get_default_account()
    deployer = account.address if account is not None else boa.env.eoa
    if book is None:
        book = DeploymentBook(chain_id, log=print)
    return DeployContext(chain_id, str(deployer), book.deploy, print)


def deploy_mocks() -> DeploymentBook:
    active_network = get_active_network()
    registry = StepRegistry()
    register(registry)
    book = DeploymentBook(context_chain_id(active_network), log=print)
    context = context_from_network(active_network, book)
    run_pipeline(registry, context, tags=["mocks"])
    if MOCK_COORDINATOR_NAME in book:
        print(f"Mock Oracle Coordinator at: {book.get(MOCK_COORDINATOR_NAME).address}")
    else:
        print(f"Skipped mocks on {active_network.name} (chain {context.chain_id})")
    return book


def moccasin_main() -> DeploymentBook:
    return deploy_mocks()
