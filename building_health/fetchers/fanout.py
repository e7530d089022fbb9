"""
Keyed concurrent gather.

Runs a mapping of awaitables at once and returns their results under the same
keys, so correlation never depends on argument position.
"""

import asyncio
import logging
from typing import Awaitable, Dict

from building_health.models.results import DatasetResult

logger = logging.getLogger(__name__)


async def gather_keyed(requests: Dict[str, Awaitable[DatasetResult]]) -> Dict[str, DatasetResult]:
    """
    Await every request concurrently.

    Args:
        requests: Mapping of key -> awaitable producing a DatasetResult

    Returns:
        Mapping of key -> DatasetResult. An awaitable that raises becomes a
        failed result for its key.
    """
    keys = list(requests)
    results = await asyncio.gather(*(requests[k] for k in keys), return_exceptions=True)

    gathered = {}
    for key, result in zip(keys, results):
        if isinstance(result, DatasetResult):
            gathered[key] = result
        elif isinstance(result, BaseException):
            if isinstance(result, asyncio.CancelledError):
                raise result
            logger.warning(f"Request {key} raised {type(result).__name__}: {result}")
            gathered[key] = DatasetResult.failed(key, str(result) or type(result).__name__)
        else:
            gathered[key] = DatasetResult(dataset=key, records=list(result or []))
    return gathered
