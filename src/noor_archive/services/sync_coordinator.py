"""
Sync coordinator for Noor submissions.

Writes always land in the local store first and are then mirrored to the
remote store in a background task whose outcome is ignored. Reads prefer the
remote store and fall back to the local store in full on any failure; the
result is filtered and sorted the same way regardless of its source.
"""

import asyncio
import time
from typing import Callable, Iterable, List, Optional, Set, Union

from loguru import logger

from ..api.client import RemoteStoreClient
from ..exceptions import EmptyContentError, RemoteStoreUnavailable
from ..models.submission import SubmissionDraft, SubmissionRecord, SubmissionType, ViewScope
from ..storage.local_store import LocalSubmissionStore
from .pseudonym import generate_pseudonym


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


def filter_and_sort(
    records: Iterable[SubmissionRecord],
    scope: Union[ViewScope, str] = ViewScope.ALL,
) -> List[SubmissionRecord]:
    """
    Apply the display filter for ``scope`` and order newest first.

    The sort is stable, so records sharing a timestamp keep their relative
    order.
    """
    scope = ViewScope(scope)
    if scope is ViewScope.PUBLISHED:
        records = [record for record in records if record.display]
    return sorted(records, key=lambda record: record.timestamp, reverse=True)


class SyncCoordinator:
    """
    Orchestrates submission writes and listing reads.

    Collaborators are injected so the write and read paths can be exercised
    without a network or a real data directory.
    """

    def __init__(
        self,
        local_store: LocalSubmissionStore,
        remote_client: RemoteStoreClient,
        clock: Optional[Callable[[], int]] = None,
        pseudonym_factory: Optional[Callable[[], str]] = None,
    ):
        """
        Initialize the coordinator.

        Args:
            local_store: Durable local copy of the collection
            remote_client: Best-effort remote store accessor
            clock: Returns the current time in epoch milliseconds
            pseudonym_factory: Produces a pseudonym for anonymous drafts
        """
        self.local_store = local_store
        self.remote_client = remote_client
        self._clock = clock or _now_ms
        self._pseudonym_factory = pseudonym_factory or generate_pseudonym
        self._last_timestamp = 0
        self._remote_writes: Set[asyncio.Task] = set()

    @property
    def pending_remote_writes(self) -> int:
        """Number of remote deliveries still in flight."""
        return len(self._remote_writes)

    def _next_timestamp(self) -> int:
        timestamp = max(self._clock(), self._last_timestamp)
        self._last_timestamp = timestamp
        return timestamp

    async def record_submission(self, draft: SubmissionDraft) -> SubmissionRecord:
        """
        Persist a new submission locally and start mirroring it remotely.

        Returns as soon as the local write completes; the remote delivery
        runs in a background task.

        Raises:
            EmptyContentError: If the draft has no content (nothing is written)
        """
        content = draft.normalized_content
        if not content.strip():
            if draft.type is SubmissionType.DRAWING:
                raise EmptyContentError("Please draw something on the canvas before submitting.")
            raise EmptyContentError("Please write something in the text editor before submitting.")

        record = SubmissionRecord.create(
            email=draft.email,
            name=draft.name,
            pseudonym=self._pseudonym_factory() if draft.anonymous else "",
            anonymous=draft.anonymous,
            display=draft.display,
            type=draft.type,
            content=content,
            timestamp=self._next_timestamp(),
        )

        submissions = self.local_store.load()
        submissions.append(record)
        self.local_store.save(submissions)
        logger.info(
            f"Stored {record.type.value} submission {record.timestamp} locally "
            f"({len(submissions)} total, display={record.display})"
        )

        self._start_remote_write(record)
        return record

    def _start_remote_write(self, record: SubmissionRecord) -> None:
        if not self.remote_client.submit_configured:
            return
        task = asyncio.create_task(self.remote_client.submit(record))
        self._remote_writes.add(task)
        task.add_done_callback(self._remote_write_done)

    def _remote_write_done(self, task: asyncio.Task) -> None:
        self._remote_writes.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(f"Remote delivery failed unexpectedly: {error!r}")

    async def drain(self, timeout: Optional[float] = None) -> None:
        """
        Wait for in-flight remote deliveries, cancelling any still running
        after ``timeout`` seconds.
        """
        if not self._remote_writes:
            return
        pending = set(self._remote_writes)
        logger.debug(f"Waiting on {len(pending)} remote deliveries")
        _, not_done = await asyncio.wait(pending, timeout=timeout)
        for task in not_done:
            task.cancel()
        if not_done:
            logger.warning(f"Abandoned {len(not_done)} remote deliveries after {timeout}s")
            await asyncio.gather(*not_done, return_exceptions=True)

    def cancel_pending(self) -> None:
        """Abandon every in-flight remote delivery."""
        for task in list(self._remote_writes):
            task.cancel()

    async def list_submissions(
        self, scope: Union[ViewScope, str] = ViewScope.ALL
    ) -> List[SubmissionRecord]:
        """
        List submissions for a view, newest first.

        Uses the remote store when it answers with a well-formed list and the
        local store otherwise. Published listings are filtered again here even
        though the server is asked to filter.
        """
        scope = ViewScope(scope)
        records: Optional[List[SubmissionRecord]] = None

        if self.remote_client.fetch_configured:
            try:
                if scope is ViewScope.PUBLISHED:
                    records = await self.remote_client.fetch_published()
                else:
                    records = await self.remote_client.fetch_all()
                logger.info(f"Loaded {len(records)} submissions from remote store")
            except RemoteStoreUnavailable as e:
                logger.warning(f"Remote store unavailable, using local submissions: {e}")

        if records is None:
            records = self.local_store.load()
            logger.info(f"Loaded {len(records)} submissions from local store")

        return filter_and_sort(records, scope)
