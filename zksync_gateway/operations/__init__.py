"""zkSync Era operation catalog."""
from .params import ParamKind, ParamSpec, extract_params
from .table import (
    OPERATIONS,
    OperationSpec,
    get_operation,
    list_operations,
    list_resources,
)

__all__ = [
    "OPERATIONS",
    "OperationSpec",
    "ParamKind",
    "ParamSpec",
    "extract_params",
    "get_operation",
    "list_operations",
    "list_resources",
]
