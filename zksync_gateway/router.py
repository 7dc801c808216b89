"""Operation router: record -> params -> RPC call -> shaped result."""
import logging
from typing import Any, Mapping

from .config import Credentials
from .jsonrpc.envelope import build_request
from .jsonrpc.resolver import resolve
from .operations.params import extract_params
from .operations.table import OperationSpec
from .transport import RpcTransport

logger = logging.getLogger(__name__)


class OperationRouter:
    """Executes dispatch table entries against the configured endpoint."""

    def __init__(self, transport: RpcTransport, credentials: Credentials):
        self.transport = transport
        self.credentials = credentials

    async def call(self, method: str, *params: Any) -> Any:
        """Make a raw JSON-RPC call and return its ``result``."""
        request = build_request(method, params)
        response = await self.transport.send(
            self.credentials.base_url,
            request,
            auth_token=self.credentials.auth_token,
        )
        return resolve(response)

    async def execute(self, spec: OperationSpec, record: Mapping[str, Any]) -> Any:
        """Execute one operation for one input record.

        Args:
            spec: Dispatch table entry
            record: Field name -> value mapping for this item

        Returns:
            The shaped result

        Raises:
            InvalidInput: If a parameter is missing or malformed
            TransportError: If the HTTP round trip fails
            RpcProtocolError: If the upstream returns an error envelope
        """
        values = extract_params(spec.params, record)
        params = spec.assemble(values)
        logger.debug(f"Executing {spec.resource}.{spec.operation} via {spec.method}")

        result = await self.call(spec.method, *params)
        return spec.shape(values, result)
