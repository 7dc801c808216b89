"""JSON-RPC 2.0 request envelope builder."""
import itertools
from typing import Any, Optional, Sequence

from .models import RpcRequest
from ..utils.errors import InvalidMethod

# Ids only need to be integers; upstream treats every request independently
_id_counter = itertools.count(1)


def build_request(
    method: str,
    params: Optional[Sequence[Any]] = None,
    req_id: Optional[int] = None,
) -> RpcRequest:
    """Build a JSON-RPC 2.0 request envelope.

    Args:
        method: JSON-RPC method name (e.g., "eth_getBalance")
        params: Positional parameters, in wire order
        req_id: Explicit request id; auto-generated if omitted

    Returns:
        RpcRequest ready to be serialized

    Raises:
        InvalidMethod: If method is empty or not a string
    """
    if not isinstance(method, str) or not method.strip():
        raise InvalidMethod(method)

    return RpcRequest(
        method=method,
        params=list(params or []),
        id=req_id if req_id is not None else next(_id_counter),
    )
