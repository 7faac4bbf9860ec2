"""Offline meal queue.

Buffers meal saves that could not reach the remote store and replays
them later. The queue lives in durable key-value storage as one JSON
array under a private key; storage is the only source of truth, nothing
is mirrored in memory.

Failure policy:
- Unreadable or malformed storage reads as an empty queue (parse_queue).
- Storage write failures are logged and swallowed.
- A send raising PermanentSendError moves the entry to the dead-letter list.
- Any other send failure (including a timeout) keeps the entry verbatim;
  it is retried on every later flush, with no attempt cap and no backoff.
"""

import asyncio
import json
import logging
from typing import List, Optional

from pydantic import TypeAdapter, ValidationError

from domain.offline.core.entities.meal_submission import MealSubmission
from domain.offline.core.entities.queued_meal_write import QueuedMealWrite
from domain.offline.core.exceptions.domain_errors import PermanentSendError
from domain.shared.ports.key_value_storage import IKeyValueStorage
from domain.shared.ports.meal_writer import MealSender

logger = logging.getLogger(__name__)

_QUEUE_ADAPTER = TypeAdapter(List[QueuedMealWrite])


def parse_queue(raw: Optional[str]) -> List[QueuedMealWrite]:
    """Decode a persisted queue, falling back to an empty queue.

    A queue that fails to decode is dropped as a whole: a single entry of
    the wrong shape empties it. Pending meals are lost in that case, the
    caller is not told.

    Args:
        raw: Stored string, or None when the key is absent

    Returns:
        Queue entries in insertion order, [] on any decoding problem
    """
    if not raw:
        return []

    try:
        data = json.loads(raw)
    except ValueError as e:
        logger.warning(
            "Offline queue is not valid JSON, treating as empty",
            extra={"error": str(e)},
        )
        return []

    if not isinstance(data, list):
        logger.warning(
            "Offline queue is not a JSON array, treating as empty",
            extra={"type": type(data).__name__},
        )
        return []

    try:
        return _QUEUE_ADAPTER.validate_python(data)
    except ValidationError as e:
        logger.warning(
            "Offline queue has malformed entries, treating as empty",
            extra={"error_count": e.error_count()},
        )
        return []


def serialize_queue(entries: List[QueuedMealWrite]) -> str:
    """Encode queue entries as a JSON array."""
    return _QUEUE_ADAPTER.dump_json(entries).decode("utf-8")


def _without(
    entries: List[QueuedMealWrite], settled: List[QueuedMealWrite]
) -> List[QueuedMealWrite]:
    """Remove the first occurrence of each settled entry, keeping order."""
    remaining = list(entries)
    for entry in settled:
        if entry in remaining:
            remaining.remove(entry)
    return remaining


class OfflineMealQueue:
    """
    Durable queue of meal saves waiting for connectivity.

    Entries are identified only by their position; two identical
    submissions are two entries. The queue is unbounded: a warning is
    logged once it grows past warn_size, nothing is evicted.

    Concurrency: single_flight=True (default) makes a flush started while
    another is running await the running one and return its result, so
    each entry is sent once per flush cycle. The second caller's send
    function is not used. With single_flight=False two overlapping flushes
    both send every entry (at-least-once delivery, duplicates possible).

    Whatever the mode, a flush removes from storage only the entries it
    settled itself (sent, or dead-lettered); entries enqueued meanwhile
    stay, even if the stored queue was cleared or drained in between.

    Example:
        >>> queue = OfflineMealQueue(InMemoryKeyValueStorage())
        >>> queue.enqueue(submission)
        >>> queue.size()
        1
        >>> await queue.flush(writer.save)
        1
    """

    _QUEUE_KEY = "kcal-ai:offline-meal-queue:v1"
    _DEAD_LETTER_KEY = "kcal-ai:offline-meal-dead-letter:v1"

    def __init__(
        self,
        storage: IKeyValueStorage,
        send_timeout: Optional[float] = 30.0,
        single_flight: bool = True,
        warn_size: int = 50,
    ) -> None:
        """
        Initialize queue.

        Args:
            storage: Durable key-value storage
            send_timeout: Seconds allowed per send, None to wait forever
            single_flight: Coalesce overlapping flush calls
            warn_size: Queue size above which a warning is logged (0 disables)
        """
        self._storage = storage
        self._send_timeout = send_timeout
        self._single_flight = single_flight
        self._warn_size = warn_size
        self._inflight: Optional["asyncio.Future[int]"] = None

    def enqueue(self, submission: MealSubmission) -> None:
        """
        Append a submission, stamped with the current time.

        Never raises on storage trouble: a corrupt queue is replaced by a
        queue holding only this entry, and a failed write is logged.

        Args:
            submission: Meal to buffer (any queued_at it carries is replaced)
        """
        queue = self._read(self._QUEUE_KEY)
        entry = QueuedMealWrite.from_submission(submission)
        queue.append(entry)
        self._write(self._QUEUE_KEY, queue)

        logger.info(
            "Meal queued offline",
            extra={
                "date": entry.date,
                "meal_type": entry.meal_type.value,
                "pending_count": len(queue),
            },
        )

        if self._warn_size and len(queue) > self._warn_size:
            logger.warning(
                "Offline queue keeps growing",
                extra={"pending_count": len(queue), "warn_size": self._warn_size},
            )

    async def flush(self, send: MealSender) -> int:
        """
        Try to send every queued entry once, in insertion order.

        Sends are sequential: the next entry is sent only after the
        previous one succeeded or failed.

        Args:
            send: Async function persisting one entry; raising means failure

        Returns:
            Number of entries sent successfully by this flush
        """
        if not self._single_flight:
            return await self._flush_once(send)

        inflight = self._inflight
        if inflight is not None and not inflight.done():
            logger.debug("Flush already running, joining it")
            return await asyncio.shield(inflight)

        task = asyncio.ensure_future(self._flush_once(send))
        self._inflight = task
        try:
            return await task
        finally:
            if self._inflight is task:
                self._inflight = None

    @property
    def flush_in_progress(self) -> bool:
        """True while a guarded flush is running (a new flush would join it)."""
        return self._inflight is not None and not self._inflight.done()

    def size(self) -> int:
        """Number of persisted pending entries."""
        return len(self._read(self._QUEUE_KEY))

    def entries(self) -> List[QueuedMealWrite]:
        """Snapshot of pending entries in insertion order."""
        return self._read(self._QUEUE_KEY)

    def clear(self) -> int:
        """
        Drop every pending entry.

        Returns:
            Number of entries dropped
        """
        dropped = len(self._read(self._QUEUE_KEY))
        self._write(self._QUEUE_KEY, [])
        logger.info("Offline queue cleared", extra={"dropped": dropped})
        return dropped

    def dead_letters(self) -> List[QueuedMealWrite]:
        """Entries the remote store rejected permanently."""
        return self._read(self._DEAD_LETTER_KEY)

    def clear_dead_letters(self) -> int:
        """
        Drop every dead-lettered entry.

        Returns:
            Number of entries dropped
        """
        dropped = len(self._read(self._DEAD_LETTER_KEY))
        self._write(self._DEAD_LETTER_KEY, [])
        return dropped

    async def _flush_once(self, send: MealSender) -> int:
        snapshot = self._read(self._QUEUE_KEY)
        if not snapshot:
            return 0

        logger.info("Flushing offline queue", extra={"pending_count": len(snapshot)})

        synced = 0
        retained: List[QueuedMealWrite] = []
        settled: List[QueuedMealWrite] = []
        rejected: List[QueuedMealWrite] = []

        for position, entry in enumerate(snapshot):
            try:
                await self._send_one(send, entry)
            except PermanentSendError as e:
                rejected.append(entry)
                settled.append(entry)
                logger.warning(
                    "Queued meal rejected, moving to dead letters",
                    extra={"position": position, "date": entry.date, "error": str(e)},
                )
            except asyncio.TimeoutError:
                retained.append(entry)
                logger.warning(
                    "Queued meal send timed out, keeping it",
                    extra={"position": position, "timeout_s": self._send_timeout},
                )
            except Exception as e:
                retained.append(entry)
                logger.info(
                    "Queued meal send failed, keeping it",
                    extra={"position": position, "date": entry.date, "error": str(e)},
                )
            else:
                synced += 1
                settled.append(entry)
                logger.debug(
                    "Queued meal sent",
                    extra={"position": position, "date": entry.date},
                )

        # Storage may have changed while sends were awaited (enqueue, clear,
        # an unguarded overlapping flush): drop only what this flush settled.
        current = self._read(self._QUEUE_KEY, unreadable=snapshot)
        remaining = _without(current, settled)
        self._write(self._QUEUE_KEY, remaining)

        if rejected:
            self._write(self._DEAD_LETTER_KEY, self._read(self._DEAD_LETTER_KEY) + rejected)

        logger.info(
            "Offline queue flushed",
            extra={
                "synced": synced,
                "retained": len(retained),
                "dead_lettered": len(rejected),
                "pending": len(remaining),
            },
        )
        return synced

    async def _send_one(self, send: MealSender, entry: QueuedMealWrite) -> None:
        if self._send_timeout is None:
            await send(entry)
        else:
            await asyncio.wait_for(send(entry), timeout=self._send_timeout)

    def _read(
        self, key: str, unreadable: Optional[List[QueuedMealWrite]] = None
    ) -> List[QueuedMealWrite]:
        try:
            raw = self._storage.get(key)
        except Exception as e:
            logger.warning(
                "Offline storage unreadable",
                extra={"key": key, "error": str(e)},
            )
            return list(unreadable or [])
        return parse_queue(raw)

    def _write(self, key: str, entries: List[QueuedMealWrite]) -> None:
        try:
            self._storage.set(key, serialize_queue(entries))
        except Exception as e:
            logger.error(
                "Offline storage write failed, change not persisted",
                extra={"key": key, "entries": len(entries), "error": str(e)},
                exc_info=True,
            )
