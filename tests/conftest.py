"""
Shared fixtures: a throw-away deployer keystore, an isolated Config
and a local JSON-RPC node.
"""

import json

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp import test_utils
from eth_account import Account

from deployforge.config import Config

TEST_PRIVATE_KEY = "0x" + "11" * 32
TEST_PASSWORD = "correct horse battery staple"
RECIPIENT = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"


@pytest.fixture
def deployer_account():
    return Account.from_key(TEST_PRIVATE_KEY)


@pytest.fixture(scope="session")
def encrypted_keystore():
    """JSON V3 keystore with a cheap KDF so the suite stays fast."""
    keystore = Account.encrypt(TEST_PRIVATE_KEY, TEST_PASSWORD, kdf="pbkdf2", iterations=1000)
    return json.dumps(keystore)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Restores Config class attributes and hides deployer variables of the host shell."""
    for name in ("DEPLOYER_PRIVATE_KEY_ENCRYPTED", "NETWORK", "RPC_URL", "DEPLOYER_ENV_FILE"):
        monkeypatch.delenv(name, raising=False)

    monkeypatch.setattr(Config, "ENV_PATH", tmp_path / ".env")
    monkeypatch.setattr(Config, "OUTPUT_DIR", tmp_path / "output")
    monkeypatch.setattr(Config, "ACTIVE_NETWORK_NAME", "sepolia")
    monkeypatch.setattr(Config, "DEFAULT_RPC_URL", Config.NETWORK_RPC_ENDPOINTS["sepolia"])
    monkeypatch.setattr(Config, "DEPLOYER_PRIVATE_KEY_ENCRYPTED", None)
    monkeypatch.setattr(Config, "LOG_FILE", str(tmp_path / "output" / "transfer_sepolia.log"))
    monkeypatch.setattr(Config, "RECEIPT_POLL_INTERVAL", 0.01)
    return Config


@pytest.fixture
def env_file(tmp_path, encrypted_keystore):
    path = tmp_path / ".env"
    path.write_text(f"DEPLOYER_PRIVATE_KEY_ENCRYPTED='{encrypted_keystore}'\n", encoding="utf-8")
    return path


@pytest.fixture
def password():
    return TEST_PASSWORD


@pytest.fixture
def recipient():
    return RECIPIENT


class FakeNode:
    """Answers JSON-RPC requests from a method -> result/error table."""

    def __init__(self):
        self.results = {}
        self.errors = {}
        self.status = 200
        self.requests = []
        self.url = None

    def calls(self, method):
        return [r for r in self.requests if r["method"] == method]

    async def handle(self, request):
        body = await request.json()
        self.requests.append(body)
        if self.status != 200:
            return web.json_response({"message": "rate limited"}, status=self.status)

        method = body["method"]
        reply = {"jsonrpc": "2.0", "id": body["id"]}
        if method in self.errors:
            reply["error"] = self.errors[method]
        else:
            result = self.results.get(method)
            reply["result"] = result(body["params"]) if callable(result) else result
        return web.json_response(reply)


@pytest_asyncio.fixture
async def rpc_node():
    node = FakeNode()
    app = web.Application()
    app.router.add_post("/", node.handle)
    server = test_utils.TestServer(app)
    await server.start_server()
    node.url = str(server.make_url("/"))
    try:
        yield node
    finally:
        await server.close()
