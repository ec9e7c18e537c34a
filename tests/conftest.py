import pytest
from fastapi.testclient import TestClient

from main import app, get_rpc_client
from schema import AccountInfo

SYSTEM_PROGRAM = "11111111111111111111111111111111"


class FakeRpcClient:
    """Stands in for RpcClient; behavior is set per test through attributes."""

    def __init__(self):
        self.balance = 0
        self.account = None
        self.error = None
        self.healthy = True
        self.calls = []

    def get_balance(self, pubkey):
        self.calls.append(("getBalance", pubkey))
        if self.error:
            raise self.error
        return self.balance

    def get_account(self, pubkey):
        self.calls.append(("getAccountInfo", pubkey))
        if self.error:
            raise self.error
        return self.account

    def get_health(self):
        return self.healthy


@pytest.fixture
def rpc():
    fake = FakeRpcClient()
    app.dependency_overrides[get_rpc_client] = lambda: fake
    yield fake
    app.dependency_overrides.pop(get_rpc_client, None)


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def sample_account():
    return AccountInfo(
        lamports=1_000_000_000,
        owner=SYSTEM_PROGRAM,
        data="",
        executable=False,
        rent_epoch=18446744073709551615,
        space=0,
    )
