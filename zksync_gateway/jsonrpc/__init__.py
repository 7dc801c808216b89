"""JSON-RPC 2.0 envelope handling for the zkSync Era API."""
from .models import RpcRequest, RpcResponse, RpcError, ErrorCode
from .envelope import build_request
from .resolver import resolve

__all__ = [
    "RpcRequest",
    "RpcResponse",
    "RpcError",
    "ErrorCode",
    "build_request",
    "resolve",
]
