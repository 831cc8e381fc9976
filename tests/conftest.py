import pytest
import boa

from script.helper_config import LOCAL_CHAIN_ID
from script.steps import DeployContext, DeploymentRecord


class RecordingDeployer:
    """Stand-in for the runner's deploy facility: records calls, caches artifacts per name."""

    def __init__(self, chain_id, fail_with=None):
        self.chain_id = chain_id
        self.calls = []
        self.cache = {}
        self.transactions = 0
        self.fail_with = fail_with

    def __call__(self, name, options):
        self.calls.append((name, options))
        if self.fail_with is not None:
            raise self.fail_with
        if name in self.cache:
            cached = self.cache[name]
            return DeploymentRecord(cached.name, cached.address, cached.chain_id, cached.args, False)
        self.transactions += 1
        address = "0x" + f"{self.transactions:040x}"
        record = DeploymentRecord(name, address, self.chain_id, tuple(options["args"]))
        self.cache[name] = record
        return record


def make_context(chain_id, deployer="0xABC", fail_with=None):
    recorder = RecordingDeployer(chain_id, fail_with=fail_with)
    lines = []
    return DeployContext(chain_id, deployer, recorder, lines.append), recorder, lines


@pytest.fixture
def local_context():
    """Context on the local chain, with its recording deployer and captured log lines"""
    return make_context(LOCAL_CHAIN_ID)


@pytest.fixture
def mainnet_context():
    return make_context(1)


@pytest.fixture
def boa_env():
    """Isolate on-chain state between tests"""
    with boa.env.anchor():
        yield boa.env


@pytest.fixture
def account(boa_env):
    addr = boa_env.generate_address()
    boa_env.set_balance(addr, 10**18)  # 1 ETH initial funding
    return addr
