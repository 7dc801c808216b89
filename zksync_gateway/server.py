"""FastAPI host adapter exposing the zkSync Era gateway over HTTP."""
import logging
import os
from contextlib import asynccontextmanager
from typing import Any, Dict, List

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from . import __version__
from .config import load_credentials
from .gateway import ZkSyncGateway
from .operations.table import get_operation, list_operations, list_resources
from .utils.errors import (
    GatewayError,
    InvalidInput,
    RpcProtocolError,
    TransportError,
    TransportErrorKind,
    UnsupportedOperation,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class ExecuteRequest(BaseModel):
    """Batch execution request from the workflow host."""

    resource: str
    operation: str
    items: List[Dict[str, Any]] = Field(default_factory=lambda: [{}])
    continueOnFailure: bool = False


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifecycle manager for FastAPI app."""
    owns_gateway = getattr(app.state, "gateway", None) is None
    if owns_gateway:
        credentials = load_credentials(os.getenv("ZKSYNC_CONFIG"))
        app.state.gateway = ZkSyncGateway(credentials)
    logger.info(f"Serving {len(list_operations())} zkSync Era operations")
    yield
    logger.info("Shutting down zkSync Era gateway...")
    if owns_gateway:
        await app.state.gateway.close()
        app.state.gateway = None


app = FastAPI(
    title="zkSync Era Gateway",
    description="Workflow host adapter for the zkSync Era JSON-RPC API",
    version=__version__,
    lifespan=lifespan,
)


def _error_body(exc: GatewayError, **extra: Any) -> Dict[str, Any]:
    body: Dict[str, Any] = {"error": exc.message, "type": type(exc).__name__}
    if exc.item_index is not None:
        body["item"] = exc.item_index
    body.update(extra)
    return body


@app.exception_handler(GatewayError)
async def gateway_error_handler(request: Request, exc: GatewayError):
    """Map gateway failures to HTTP statuses."""
    if isinstance(exc, InvalidInput):
        return JSONResponse(status_code=400, content=_error_body(exc))
    if isinstance(exc, UnsupportedOperation):
        return JSONResponse(status_code=404, content=_error_body(exc))
    if isinstance(exc, RpcProtocolError):
        return JSONResponse(
            status_code=502,
            content=_error_body(exc, code=exc.code, data=exc.data),
        )
    if isinstance(exc, TransportError):
        status = 504 if exc.kind == TransportErrorKind.TIMEOUT else 502
        return JSONResponse(status_code=status, content=_error_body(exc, kind=exc.kind.value))
    logger.error(f"Unhandled gateway error: {exc}", exc_info=True)
    return JSONResponse(status_code=500, content=_error_body(exc))


@app.post("/execute")
async def execute_endpoint(request: ExecuteRequest):
    """Run one operation over a batch of input items.

    Returns one output item per input item, paired by index.
    """
    gateway: ZkSyncGateway = app.state.gateway
    items = await gateway.execute_batch_output(
        request.resource,
        request.operation,
        request.items,
        continue_on_failure=request.continueOnFailure,
    )
    return {"items": items}


@app.get("/operations")
async def operations_endpoint():
    """List every supported (resource, operation) pair."""
    return {"resources": list_resources(), "operations": list_operations()}


@app.get("/operations/{resource}/{operation}")
async def operation_detail_endpoint(resource: str, operation: str):
    """Describe a single operation and its parameters."""
    return get_operation(resource, operation).to_dict()


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    gateway: ZkSyncGateway = app.state.gateway
    return {
        "status": "healthy",
        "service": "zksync-era-gateway",
        "version": __version__,
        "environment": gateway.credentials.environment,
    }
