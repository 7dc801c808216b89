"""Response resolution: success payload or typed protocol error."""
from typing import Any

from .models import ErrorCode, RpcResponse
from ..utils.errors import RpcProtocolError


def resolve(response: RpcResponse) -> Any:
    """Return the ``result`` of a response, raising on an ``error`` envelope."""
    if response.error is not None:
        raise RpcProtocolError(
            code=response.error.code,
            message=response.error.message,
            data=response.error.data,
        )
    if not response.has_result:
        raise RpcProtocolError(code=ErrorCode.MALFORMED_RESPONSE, message="malformed response")
    return response.result
