import logging
from pathlib import Path
from typing import Callable, Optional

import boa

from script.helper_config import MOCK_COORDINATOR_NAME, NETWORK_CONFIG, is_local_chain, network_name
from script.steps import DeploymentRecord

logger = logging.getLogger(__name__)

CONTRACTS_DIR = Path(__file__).resolve().parent.parent / "src"
MOCK_COORDINATOR_PATH = CONTRACTS_DIR / "mocks" / "mock_oracle_coordinator.vy"


def contract_factory(path) -> Callable:
    """Return a callable deploying the Vyper contract at ``path``; compiled on first use."""
    deployer = None

    def deploy(*args):
        nonlocal deployer
        if deployer is None:
            deployer = boa.load_partial(str(path))
        return deployer.deploy(*args)

    return deploy


def default_factories() -> dict:
    return {MOCK_COORDINATOR_NAME: contract_factory(MOCK_COORDINATOR_PATH)}


class DeploymentBook:
    """Deployment records of one network, deploying each logical name at most once."""

    def __init__(self, chain_id: int, factories: Optional[dict] = None, log: Optional[Callable[[str], None]] = None):
        self.chain_id = chain_id
        self._factories = default_factories() if factories is None else dict(factories)
        self._records = {}
        self._log = log or logger.info

    def deploy(self, name: str, options: dict) -> DeploymentRecord:
        existing = self._records.get(name)
        if existing is not None:
            requested = tuple(options.get("args", existing.args))
            if requested != existing.args:
                # Records are keyed by name only; a deployed contract keeps its constructor args.
                self._log(f"\"{name}\" already deployed with args {list(existing.args)}, ignoring {list(requested)}")
            if options.get("log"):
                self._log(f"reusing \"{name}\" at {existing.address}")
            return DeploymentRecord(
                existing.name, existing.address, existing.chain_id, existing.args, False, existing.contract
            )

        if name not in self._factories:
            raise KeyError(f"No contract factory for {name}")
        args = tuple(options.get("args", ()))
        sender = options.get("from")
        if sender is None or str(sender) == str(boa.env.eoa):
            contract = self._factories[name](*args)
        else:
            with boa.env.prank(sender):
                contract = self._factories[name](*args)

        record = DeploymentRecord(name, str(contract.address), self.chain_id, args, True, contract)
        self._records[name] = record
        if options.get("log"):
            self._log(f"deployed \"{name}\" at {record.address} on {network_name(self.chain_id)}")
        return record

    def get(self, name: str) -> DeploymentRecord:
        if name not in self._records:
            raise KeyError(f"Contract {name} not found in deployments")
        return self._records[name]

    def records(self) -> dict:
        return dict(self._records)

    def __contains__(self, name: str) -> bool:
        return name in self._records


def coordinator_address(chain_id: int, book: Optional[DeploymentBook] = None) -> str:
    """Address dependent steps should use as the randomness coordinator on ``chain_id``."""
    if is_local_chain(chain_id):
        if book is None or MOCK_COORDINATOR_NAME not in book:
            raise LookupError(f"{MOCK_COORDINATOR_NAME} has not been deployed on chain {chain_id}")
        return book.get(MOCK_COORDINATOR_NAME).address
    address = NETWORK_CONFIG.get(chain_id, {}).get("vrf_coordinator")
    if address is None:
        raise LookupError(f"No coordinator configured for chain {chain_id}")
    return address
