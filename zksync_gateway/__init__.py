"""Typed JSON-RPC gateway for the zkSync Era API."""
__version__ = "1.0.0"

from .config import Credentials, load_credentials
from .executor import ExecutionRecord, execute_batch
from .gateway import ZkSyncGateway
from .router import OperationRouter
from .transport import RpcTransport

__all__ = [
    "Credentials",
    "ExecutionRecord",
    "OperationRouter",
    "RpcTransport",
    "ZkSyncGateway",
    "execute_batch",
    "load_credentials",
]
