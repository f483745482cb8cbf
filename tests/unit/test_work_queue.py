"""Tests for the serial transcription queue."""
import threading
import time

import pytest

from talkalong.capture.work_queue import TranscriptionQueue


@pytest.fixture
def make_queue():
    queues = []

    def factory(handler):
        q = TranscriptionQueue(handler)
        queues.append(q)
        return q

    yield factory
    for q in queues:
        q.close(timeout=1)


@pytest.mark.unit
class TestTranscriptionQueue:
    def test_jobs_run_in_submit_order(self, make_queue):
        seen = []
        q = make_queue(seen.append)

        for i in range(20):
            q.submit(i)

        assert q.drain(timeout=5)
        assert seen == list(range(20))

    def test_jobs_never_overlap(self, make_queue):
        active = []
        overlaps = []
        lock = threading.Lock()

        def handler(job):
            with lock:
                active.append(job)
                if len(active) > 1:
                    overlaps.append(job)
            time.sleep(0.01)
            with lock:
                active.remove(job)

        q = make_queue(handler)
        for i in range(5):
            q.submit(i)

        assert q.drain(timeout=5)
        assert overlaps == []

    def test_failed_job_does_not_block_later_jobs(self, make_queue):
        seen = []

        def handler(job):
            if job == "bad":
                raise RuntimeError("provider down")
            seen.append(job)

        q = make_queue(handler)
        for job in ["a", "bad", "b"]:
            q.submit(job)

        assert q.drain(timeout=5)
        assert seen == ["a", "b"]
        assert q.pending == 0

    def test_drain_times_out_while_job_blocked(self, make_queue):
        release = threading.Event()
        q = make_queue(lambda job: release.wait(5))
        q.submit("slow")

        assert q.drain(timeout=0.05) is False
        assert q.pending == 1

        release.set()
        assert q.drain(timeout=5) is True

    def test_drain_with_nothing_pending(self, make_queue):
        q = make_queue(lambda job: None)
        assert q.drain(timeout=0) is True

    def test_submit_after_close_raises(self):
        q = TranscriptionQueue(lambda job: None)
        q.close(timeout=1)

        with pytest.raises(RuntimeError):
            q.submit("late")

    def test_close_runs_outstanding_jobs(self):
        seen = []
        q = TranscriptionQueue(seen.append)
        q.submit(1)
        q.submit(2)
        q.close(timeout=5)

        assert seen == [1, 2]
