"""Serial job queue: transcription requests run one at a time in enqueue order."""
import logging
import queue
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)

_STOP = object()


class TranscriptionQueue:
    """
    Single-worker FIFO.

    Job i+1 starts only after job i has settled. A handler exception is
    logged and the job is dropped; later jobs still run.
    """

    def __init__(self, handler: Callable, name: str = "transcription-worker"):
        self.handler = handler
        self._queue: queue.Queue = queue.Queue()
        self._pending = 0
        self._settled = threading.Condition()
        self._closed = False
        self._worker = threading.Thread(target=self._run, name=name, daemon=True)
        self._worker.start()

    @property
    def pending(self) -> int:
        """Jobs enqueued but not yet settled."""
        with self._settled:
            return self._pending

    def submit(self, job) -> None:
        """Enqueue a job. Raises RuntimeError after close()."""
        with self._settled:
            if self._closed:
                raise RuntimeError("TranscriptionQueue is closed")
            self._pending += 1
        self._queue.put(job)

    def drain(self, timeout: Optional[float] = None) -> bool:
        """
        Block until every submitted job has settled.

        Returns:
            True when drained, False if the timeout expired first.
        """
        with self._settled:
            return self._settled.wait_for(lambda: self._pending == 0, timeout=timeout)

    def close(self, timeout: Optional[float] = None) -> None:
        """Drain outstanding jobs, then stop the worker."""
        with self._settled:
            if self._closed:
                return
            self._closed = True
        self._queue.put(_STOP)
        self._worker.join(timeout)

    def _run(self) -> None:
        while True:
            job = self._queue.get()
            if job is _STOP:
                return
            try:
                self.handler(job)
            except Exception:
                logger.exception("Transcription job failed; dropping it")
            finally:
                with self._settled:
                    self._pending -= 1
                    self._settled.notify_all()
