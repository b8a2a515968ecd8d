"""Synthesized business keys for rows that carry none."""

from __future__ import annotations

import threading
import time
from typing import Callable

_BATCH_STAMP_LOCK = threading.Lock()
_last_batch_stamp_ms = 0


def job_reserve_batch_stamp_ms(clock: Callable[[], float] = time.time) -> int:
    """Reserve a process-wide, strictly increasing millisecond stamp.

    Two batches started within the same millisecond still receive distinct
    stamps, so keys synthesized by different batches never collide.

    Args:
        clock: Wall-clock source returning seconds since the epoch.

    Returns:
        int: Reserved millisecond stamp.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    global _last_batch_stamp_ms
    with _BATCH_STAMP_LOCK:
        stamp_ms = int(clock() * 1000)
        if stamp_ms <= _last_batch_stamp_ms:
            stamp_ms = _last_batch_stamp_ms + 1
        _last_batch_stamp_ms = stamp_ms
        return stamp_ms


class NaturalKeySequence:
    """Per-batch generator of `{prefix}-{stamp}-{sequence:04d}` keys."""

    def __init__(self, prefix: str, batch_stamp_ms: int):
        if not prefix.strip():
            raise ValueError("prefix must not be blank")
        self._prefix = prefix.strip()
        self._batch_stamp_ms = batch_stamp_ms
        self._sequence = 0

    def job_next_key(self) -> str:
        """Return the next synthesized key for this batch.

        Returns:
            str: Unique business key.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        self._sequence += 1
        return f"{self._prefix}-{self._batch_stamp_ms}-{self._sequence:04d}"
