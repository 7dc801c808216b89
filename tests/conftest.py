"""Shared fixtures: a fake zkSync Era upstream behind httpx.MockTransport."""
import json
from typing import Any, Dict, List

import httpx
import pytest

from zksync_gateway.config import Credentials
from zksync_gateway.gateway import ZkSyncGateway

RPC_URL = "https://rpc.example.test"
ADDRESS = "0x1234567890123456789012345678901234567890"


class FakeUpstream:
    """Answers JSON-RPC calls from canned results/errors and records requests."""

    def __init__(self):
        self.results: Dict[str, Any] = {}
        self.errors: Dict[str, Dict[str, Any]] = {}
        self.requests: List[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        payload = json.loads(request.content)
        method = payload["method"]

        if method in self.errors:
            body = {"jsonrpc": "2.0", "id": payload["id"], "error": self.errors[method]}
            return httpx.Response(200, json=body)

        result = self.results.get(method)
        if callable(result):
            result = result(payload["params"])
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": payload["id"], "result": result})

    @property
    def payloads(self) -> List[Dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests]

    @property
    def last_payload(self) -> Dict[str, Any]:
        return self.payloads[-1]


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def credentials():
    return Credentials(environment="custom", rpc_url=RPC_URL)


@pytest.fixture
def gateway(upstream, credentials):
    client = httpx.AsyncClient(transport=httpx.MockTransport(upstream.handler))
    return ZkSyncGateway(credentials, client=client)
