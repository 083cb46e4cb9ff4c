"""
Forwarding of accept/reject/reset decisions to an external status store.

Saves are fire-and-forget: the in-memory state change has already happened
when a save is dispatched, and a failed save never rolls it back. Failures
are logged as they happen and raised together from ``flush()``.
"""
from __future__ import annotations
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol, Set
import logging
import threading

from correction_editor.config import EditorConfig
from correction_editor.errors import PersistError
from correction_editor.ir import DocumentResult, Transformation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StatusRecord:
    job_id: Any
    sentence_index: int
    transform_index: int  # index within the sentence
    sentence: str         # sentence text the offset refers to
    offset: int
    status: str
    response_type: str = "rulesApplied"
    identity: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "jobId": self.job_id,
            "responseType": self.response_type,
            "sentenceIndex": self.sentence_index,
            "transformIndex": self.transform_index,
            "sentence": self.sentence,
            "offset": self.offset,
            "status": self.status,
        }


class StatusSink(Protocol):
    def save_status(self, record: StatusRecord) -> None:
        ...


class StatusPersister:
    """Dispatches StatusRecords to a sink on a small worker pool."""

    def __init__(self, sink: StatusSink, config: Optional[EditorConfig] = None):
        self.sink = sink
        self.config = config or EditorConfig()
        self._executor: Optional[ThreadPoolExecutor] = None
        # finished saves leave _pending; only their outcome is kept
        self._lock = threading.Lock()
        self._pending: Set[Future] = set()
        self._failures: List[BaseException] = []
        self._saved = 0

    @property
    def enabled(self) -> bool:
        return self.config.persist

    @property
    def pending(self) -> int:
        with self._lock:
            return len(self._pending)

    @property
    def executor(self) -> ThreadPoolExecutor:
        """Lazily started worker pool."""
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=self.config.persist_workers,
                thread_name_prefix="status-save",
            )
        return self._executor

    def save(
        self,
        document: DocumentResult,
        transform: Transformation,
        sentence_text: str,
        offset: int,
        identity: Optional[str] = None,
    ) -> Optional[Future]:
        if not self.enabled:
            return None

        record = StatusRecord(
            job_id=document.id,
            sentence_index=transform.sentence_index,
            transform_index=transform.index_in_sentence,
            sentence=sentence_text,
            offset=offset,
            status=transform.status,
            identity=identity,
        )
        future = self.executor.submit(self.sink.save_status, record)
        with self._lock:
            self._pending.add(future)
        future.add_done_callback(self._settle)
        return future

    def _settle(self, future: Future) -> None:
        # runs from the done-callback and from flush(); counts each future once
        with self._lock:
            if future not in self._pending:
                return
            self._pending.discard(future)
            if future.cancelled():
                return
            err = future.exception()
            if err is None:
                self._saved += 1
                return
            self._failures.append(err)
        logger.warning(f"Status save failed: {type(err).__name__}: {err}")

    def flush(self, timeout: Optional[float] = None) -> int:
        """
        Wait for dispatched saves. Returns the number that succeeded since
        the previous flush.

        Raises PersistError listing the exceptions of the saves that failed;
        saves still running after ``timeout`` stay pending.
        """
        with self._lock:
            pending = list(self._pending)
        done, _ = wait(pending, timeout=timeout)
        for future in done:
            self._settle(future)

        with self._lock:
            failures, self._failures = self._failures, []
            saved, self._saved = self._saved, 0
        if failures:
            raise PersistError(f"{len(failures)} of {saved + len(failures)} status saves failed", failures)
        return saved

    def close(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def __enter__(self) -> "StatusPersister":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
