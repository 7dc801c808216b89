"""zkSync Era gateway client."""
import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

import httpx

from .config import Credentials
from .executor import ExecutionRecord, execute_batch
from .operations.table import get_operation
from .router import OperationRouter
from .transport import RpcTransport

logger = logging.getLogger(__name__)


class ZkSyncGateway:
    """Client for running catalog operations against zkSync Era.

    Example:
        >>> async with ZkSyncGateway(Credentials()) as gateway:
        ...     result = await gateway.execute(
        ...         "accounts", "getBalance", {"address": "0x..."}
        ...     )
    """

    def __init__(self, credentials: Credentials, client: Optional[httpx.AsyncClient] = None):
        self.credentials = credentials
        self.transport = RpcTransport(timeout_ms=credentials.timeout, client=client)
        self.router = OperationRouter(self.transport, credentials)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        await self.transport.close()

    async def call(self, method: str, *params: Any) -> Any:
        """Raw JSON-RPC passthrough."""
        return await self.router.call(method, *params)

    async def execute(self, resource: str, operation: str, record: Mapping[str, Any]) -> Any:
        """Run one catalog operation for a single record."""
        spec = get_operation(resource, operation)
        return await self.router.execute(spec, record)

    async def execute_batch(
        self,
        resource: str,
        operation: str,
        items: Sequence[Mapping[str, Any]],
        continue_on_failure: bool = False,
    ) -> List[ExecutionRecord]:
        """Run one catalog operation over a batch of records.

        Unsupported pairs fail before any item is processed.
        """
        spec = get_operation(resource, operation)
        return await execute_batch(self.router, spec, items, continue_on_failure)

    async def execute_batch_output(
        self,
        resource: str,
        operation: str,
        items: Sequence[Mapping[str, Any]],
        continue_on_failure: bool = False,
    ) -> List[Dict[str, Any]]:
        """Like :meth:`execute_batch`, in the host's output item shape."""
        records = await self.execute_batch(resource, operation, items, continue_on_failure)
        return [record.to_output() for record in records]
