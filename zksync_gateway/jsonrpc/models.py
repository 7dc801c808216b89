"""JSON-RPC 2.0 request/response models."""
from pydantic import BaseModel, Field
from typing import Any, List, Optional, Union, Literal


class RpcRequest(BaseModel):
    """JSON-RPC 2.0 request model."""

    jsonrpc: Literal["2.0"] = "2.0"
    method: str
    params: List[Any] = Field(default_factory=list)
    id: int


class RpcError(BaseModel):
    """JSON-RPC 2.0 error model."""

    code: int
    message: str = ""
    data: Optional[Any] = None


class RpcResponse(BaseModel):
    """JSON-RPC 2.0 response model.

    ``result`` may legitimately be ``null`` (e.g. the receipt of a pending
    transaction), so use :attr:`has_result` rather than a ``None`` check.
    """

    jsonrpc: Literal["2.0"] = "2.0"
    id: Optional[Union[int, str]] = None
    result: Optional[Any] = None
    error: Optional[RpcError] = None

    @property
    def has_result(self) -> bool:
        return "result" in self.model_fields_set


class ErrorCode:
    """JSON-RPC 2.0 standard error codes and local codes."""

    # Standard JSON-RPC 2.0 error codes
    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603

    # Envelope carried neither result nor error
    MALFORMED_RESPONSE = 0
