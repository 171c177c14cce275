"""
Asynchronous utility for appending answered questions to a JSONL log.

By submitting log writes to a background thread pool, disk I/O never
blocks the request handler. A failed write is logged and dropped.
"""
import json
import asyncio
import logging
import concurrent.futures
from typing import Dict, Any

logger = logging.getLogger(__name__)

_executor = concurrent.futures.ThreadPoolExecutor(max_workers=1, thread_name_prefix="ask-logger")


def _write_log_sync(log_file: str, log_data: Dict[str, Any]):
    """Synchronous write — runs in background thread."""
    try:
        with open(log_file, "a", encoding="utf-8") as f:
            f.write(json.dumps(log_data) + "\n")
    except OSError as e:
        logger.error("Failed to write ask log %s: %s", log_file, e)


async def log_query_async(log_file: str, log_data: Dict[str, Any]):
    """
    Async wrapper that submits the log write to a background thread.
    Call with: asyncio.create_task(log_query_async(path, data))
    """
    if not log_file:
        return
    loop = asyncio.get_running_loop()
    await loop.run_in_executor(_executor, _write_log_sync, log_file, log_data)
