"""
Synthetic telemetry feed pushed to clients over server-sent events.

Values are illustrative only. Each connection owns its own generator; the
loop checks for a disconnect before every sample and stops as soon as the
client is gone or the task is cancelled.
"""
import asyncio
import json
import logging
import math
import random
from datetime import datetime
from typing import Any, AsyncIterator, Awaitable, Callable, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_SECONDS = 2.0

TEMP_RANGE = (20.0, 30.0)
SIGNAL_RANGE = (70, 100)
NODES_RANGE = (3, 8)


def make_sample(rng: Optional[random.Random] = None) -> Dict[str, Any]:
    rng = rng or random
    low, high = TEMP_RANGE
    # floor to one decimal so the value never rounds up to the upper bound
    temp = math.floor((low + rng.random() * (high - low)) * 10) / 10
    return {
        "time": datetime.now().strftime("%H:%M:%S"),
        "temp": temp,
        "signal": rng.randrange(*SIGNAL_RANGE),
        "nodes": rng.randrange(*NODES_RANGE),
    }


def format_event(sample: Dict[str, Any]) -> str:
    return f"data: {json.dumps(sample)}\n\n"


async def telemetry_stream(
    is_disconnected: Callable[[], Awaitable[bool]],
    interval: float = DEFAULT_INTERVAL_SECONDS,
    rng: Optional[random.Random] = None,
) -> AsyncIterator[str]:
    """Yield one SSE event immediately, then one per interval, until disconnect."""
    sent = 0
    try:
        while not await is_disconnected():
            yield format_event(make_sample(rng))
            sent += 1
            await asyncio.sleep(interval)
    except asyncio.CancelledError:
        logger.info("Telemetry stream cancelled after %d events", sent)
        raise
    logger.info("Telemetry client disconnected after %d events", sent)
