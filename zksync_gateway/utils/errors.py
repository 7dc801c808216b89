"""Custom exception classes for the zkSync Era gateway."""
from enum import Enum
from typing import Any, Optional


class GatewayError(Exception):
    """Base exception for gateway errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
        # Set by the batch executor when a failure aborts a batch
        self.item_index: Optional[int] = None


class ConfigurationError(GatewayError):
    """Invalid or incomplete credentials/configuration."""

    pass


class InvalidInput(GatewayError):
    """Input rejected before any network call."""

    pass


class InvalidMethod(InvalidInput):
    def __init__(self, method: Any):
        super().__init__(f"Invalid JSON-RPC method name: {method!r}")
        self.method = method


class MissingParameter(InvalidInput):
    def __init__(self, field: str):
        super().__init__(f"Missing required parameter: {field}")
        self.field = field


class InvalidAddress(InvalidInput):
    def __init__(self, value: Any):
        super().__init__(
            f"Invalid address format: {value}. "
            "Address must be a 40-character hex string starting with 0x"
        )
        self.value = value


class InvalidBlockNumber(InvalidInput):
    def __init__(self, value: Any):
        super().__init__(
            f"Invalid block number: {value}. "
            'Use a decimal or 0x-prefixed hex number, or "latest", "earliest", "pending"'
        )
        self.value = value


class InvalidJsonParameter(InvalidInput):
    def __init__(self, field: str, reason: str):
        super().__init__(f"Invalid JSON in parameter '{field}': {reason}")
        self.field = field


class InvalidParameter(InvalidInput):
    def __init__(self, field: str, value: Any, expected: str):
        super().__init__(f"Invalid value for parameter '{field}': {value!r} (expected {expected})")
        self.field = field
        self.value = value


class RpcProtocolError(GatewayError):
    """Upstream returned a JSON-RPC error object."""

    def __init__(self, code: int, message: str, data: Any = None):
        super().__init__(f"zkSync Era API error: {message}")
        self.code = code
        self.rpc_message = message
        self.data = data


class TransportErrorKind(str, Enum):
    TIMEOUT = "timeout"
    CONNECTION = "connection"
    HTTP_STATUS = "http_status"
    INVALID_JSON = "invalid_json"


class TransportError(GatewayError):
    """Network, timeout or undecodable response body."""

    def __init__(
        self,
        kind: TransportErrorKind,
        message: str,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.status_code = status_code


class UnsupportedOperation(GatewayError):
    """(resource, operation) pair missing from the dispatch table."""

    def __init__(self, resource: str, operation: str):
        super().__init__(f'The operation "{operation}" is not supported for resource "{resource}"')
        self.resource = resource
        self.operation = operation
