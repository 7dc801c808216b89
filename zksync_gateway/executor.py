"""Per-item batch executor."""
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .operations.table import OperationSpec
from .router import OperationRouter

logger = logging.getLogger(__name__)


@dataclass
class ExecutionRecord:
    """Outcome of one input item: a result or an error, never both."""

    item: int
    result: Any = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_output(self) -> Dict[str, Any]:
        """Host output shape, paired positionally with its input item."""
        payload = self.result if self.ok else {"error": self.error}
        return {"json": payload, "pairedItem": {"item": self.item}}


async def execute_batch(
    router: OperationRouter,
    spec: OperationSpec,
    items: Sequence[Mapping[str, Any]],
    continue_on_failure: bool = False,
) -> List[ExecutionRecord]:
    """Run one operation over every item, sequentially and in input order.

    Args:
        router: Router bound to a transport and credentials
        spec: Operation to run for each item
        items: Input records
        continue_on_failure: Record per-item errors instead of aborting

    Returns:
        One ExecutionRecord per input item

    Raises:
        Exception: The first item failure when continue_on_failure is False,
            with ``item_index`` set on gateway errors
    """
    records: List[ExecutionRecord] = []

    for index, item in enumerate(items):
        try:
            result = await router.execute(spec, item)
        except Exception as e:
            if not continue_on_failure:
                logger.error(f"{spec.resource}.{spec.operation} failed on item {index}: {e}")
                if hasattr(e, "item_index"):
                    e.item_index = index
                raise
            message = str(e) or "Unknown error occurred"
            logger.warning(f"{spec.resource}.{spec.operation} item {index} failed: {message}")
            records.append(ExecutionRecord(item=index, error=message))
            continue

        records.append(ExecutionRecord(item=index, result=result))

    logger.info(
        f"{spec.resource}.{spec.operation}: {len(records)} items, "
        f"{sum(1 for r in records if not r.ok)} failed"
    )
    return records
