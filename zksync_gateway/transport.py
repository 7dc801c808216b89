"""HTTP transport for zkSync Era JSON-RPC calls."""
import json
import logging
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from .config import DEFAULT_TIMEOUT_MS
from .jsonrpc.models import RpcRequest, RpcResponse
from .utils.errors import TransportError, TransportErrorKind

logger = logging.getLogger(__name__)


class RpcTransport:
    """POSTs JSON-RPC envelopes over a pooled HTTP client.

    Every call is a single independent POST, so connections are shared
    across items. No retries and no caching: the caller decides.
    """

    def __init__(
        self,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.timeout_ms = timeout_ms
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=timeout_ms / 1000)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        """Close the HTTP client if this transport created it."""
        if self._owns_client:
            await self.client.aclose()

    async def send(
        self,
        endpoint: str,
        request: RpcRequest,
        auth_token: Optional[str] = None,
    ) -> RpcResponse:
        """Send a request envelope and return the decoded response envelope.

        Args:
            endpoint: JSON-RPC endpoint URL
            request: Envelope to send
            auth_token: Optional bearer token

        Returns:
            RpcResponse, which may carry an ``error`` object

        Raises:
            TransportError: On network failure, timeout, or an undecodable body
        """
        headers = {"Content-Type": "application/json"}
        if auth_token:
            headers["Authorization"] = f"Bearer {auth_token}"

        # Always send our own JSON text so field order and types are exact
        body = request.model_dump_json()
        logger.debug(f"POST {endpoint} {request.method} id={request.id}")

        try:
            response = await self.client.post(
                endpoint,
                content=body,
                headers=headers,
                timeout=self.timeout_ms / 1000,
            )
        except httpx.TimeoutException as e:
            logger.warning(f"Timeout after {self.timeout_ms} ms calling {request.method}")
            raise TransportError(
                TransportErrorKind.TIMEOUT,
                f"Request to {endpoint} timed out after {self.timeout_ms} ms",
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"HTTP error during JSON-RPC request {request.method}: {e}")
            raise TransportError(
                TransportErrorKind.CONNECTION,
                f"Request to {endpoint} failed: {e}",
            ) from e

        return self._decode(response)

    def _decode(self, response: httpx.Response) -> RpcResponse:
        """Decode an HTTP response into an RpcResponse envelope."""
        ok = response.is_success
        kind = TransportErrorKind.INVALID_JSON if ok else TransportErrorKind.HTTP_STATUS

        try:
            payload: Any = json.loads(response.text)
        except ValueError as e:
            raise TransportError(
                kind,
                self._describe(response, "response body is not valid JSON"),
                status_code=response.status_code,
            ) from e

        if not isinstance(payload, dict) or not self._looks_like_envelope(payload, ok):
            raise TransportError(
                kind,
                self._describe(response, "response body is not a JSON-RPC envelope"),
                status_code=response.status_code,
            )

        try:
            return RpcResponse.model_validate(payload)
        except ValidationError as e:
            raise TransportError(
                kind,
                self._describe(response, f"invalid JSON-RPC envelope: {e}"),
                status_code=response.status_code,
            ) from e

    @staticmethod
    def _looks_like_envelope(payload: Dict[str, Any], ok: bool) -> bool:
        # Error statuses only count when the server still answered in JSON-RPC
        if ok:
            return True
        return "error" in payload or "result" in payload

    @staticmethod
    def _describe(response: httpx.Response, reason: str) -> str:
        if response.is_success:
            return reason
        return f"HTTP {response.status_code}: {reason}"
