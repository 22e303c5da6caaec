"""
Unit tests for job types and uniqueness tagging.
"""

import pytest

from tests.helpers import RecordingStore
from unique_jobs.client import UniqueJobQueue
from unique_jobs.queue.memory import InMemoryJobQueue
from unique_jobs.types.job import Job


class TestJob:
    """Tests for Job."""

    def test_unique_sets_data_field(self):
        job = Job(type="email", data={"to": "a@b.c"})

        result = job.unique("order-42")

        assert result is job
        assert job.data == {"to": "a@b.c", "unique": "order-42"}
        assert job.unique_key == "order-42"
        assert job.is_unique is True

    def test_unique_on_missing_data(self):
        job = Job(type="email", data=None)

        job.unique("order-42")

        assert job.data == {"unique": "order-42"}

    def test_unique_replaces_previous_key(self):
        job = Job(type="email").unique("a").unique("b")

        assert job.unique_key == "b"

    @pytest.mark.parametrize("data", [{}, {"unique": None}, {"unique": ""}])
    def test_not_unique(self, data):
        job = Job(type="email", data=data)

        assert job.unique_key is None
        assert job.is_unique is False

    @pytest.mark.parametrize("key", ["", None, 42])
    def test_unique_rejects_invalid_keys(self, key):
        job = Job(type="email", data={"to": "a@b.c"})

        with pytest.raises(ValueError):
            job.unique(key)

        assert job.data == {"to": "a@b.c"}

    def test_already_exist_not_compared(self):
        first = Job(type="email", id=1)
        second = Job(type="email", id=1, already_exist=True)

        assert first == second


class TestMarkUnique:
    """Tests for UniqueJobQueue.mark_unique."""

    def test_mark_unique(self, unique_queue: UniqueJobQueue):
        job = unique_queue.create_job("email", {"to": "a@b.c"})

        assert unique_queue.mark_unique(job, "order-42") is job
        assert job.unique_key == "order-42"

    @pytest.mark.parametrize("key", ["", None, 42])
    def test_mark_unique_rejects_invalid_keys(self, unique_queue: UniqueJobQueue, key):
        job = unique_queue.create_job("email")

        with pytest.raises(ValueError):
            unique_queue.mark_unique(job, key)

    def test_create_job_copies_data(self, unique_queue: UniqueJobQueue):
        data = {"to": "a@b.c"}

        job = unique_queue.create_job("email", data)
        job.unique("order-42")

        assert data == {"to": "a@b.c"}


class TestSubmitKeyValidation:
    """Tests for uniqueness keys set directly in job data."""

    async def test_non_string_key_rejected_before_create(
        self,
        unique_queue: UniqueJobQueue,
        job_queue: InMemoryJobQueue,
        kv_store: RecordingStore,
    ):
        job = Job(type="email", data={"unique": 42})

        with pytest.raises(ValueError):
            await unique_queue.submit(job)

        assert len(job_queue) == 0
        assert kv_store.calls == []
