"""Backend warmup module to eliminate cold start delays.

The favorites store is pinged once at startup so connection problems surface
in the logs before the first request arrives. Warmup never blocks startup: a
failed ping is logged and requests will report ``StoreError`` until the
database becomes reachable.
"""

from __future__ import annotations

import logging
import time
from typing import Any

logger = logging.getLogger(__name__)


async def warmup_store(client: Any) -> bool:
    """Ping MongoDB via ``client`` and report whether it answered."""

    try:
        start = time.time()
        await client.admin.command("ping")
        elapsed = (time.time() - start) * 1000
        logger.info(f"✓ MongoDB connection warmed up ({elapsed:.0f}ms)")
        return True
    except Exception as e:
        logger.warning(f"MongoDB warmup failed: {e}")
        return False


async def warmup_all(client: Any) -> None:
    """Warm up all backend connections.

    Executes all warmup functions in sequence and logs total warmup time.
    """
    logger.info("=" * 60)
    logger.info("Warming up backend connections...")
    logger.info("=" * 60)

    start = time.time()

    await warmup_store(client)

    total_elapsed = (time.time() - start) * 1000
    logger.info("=" * 60)
    logger.info(f"✓ Backend warmup complete ({total_elapsed:.0f}ms)")
    logger.info("=" * 60)
