"""
Integration tests for the SQL queue engine, run on SQLite.
"""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
import pytest_asyncio

pytest.importorskip("aiosqlite")

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from tests.helpers import RecordingStore
from unique_jobs.client import UniqueJobQueue
from unique_jobs.constants import CleanupPolicy, JobPriority, JobStatus
from unique_jobs.db.connection import create_session_factory
from unique_jobs.db.models import Base
from unique_jobs.exceptions import JobNotFoundError, PartialRemovalError
from unique_jobs.observability.metrics import MetricsCollector
from unique_jobs.queue.sql import SqlJobQueue
from unique_jobs.types.job import Job


@pytest_asyncio.fixture
async def session_factory(tmp_path: Path) -> AsyncGenerator[async_sessionmaker[AsyncSession]]:
    """Session factory over a fresh SQLite database with the jobs table."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'jobs.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield create_session_factory(engine)

    await engine.dispose()


@pytest.fixture
def sql_queue(session_factory: async_sessionmaker[AsyncSession]) -> SqlJobQueue:
    return SqlJobQueue(session_factory)


class TestSqlJobQueue:
    """Tests for SqlJobQueue."""

    async def test_create_assigns_id(self, sql_queue: SqlJobQueue):
        job = Job(type="email", data={"to": "a@b.c"}, priority=JobPriority.HIGH)

        created = await sql_queue.create(job)

        assert created is job
        assert isinstance(job.id, int)
        assert job.created_at is not None

    async def test_get_roundtrip(self, sql_queue: SqlJobQueue):
        job = await sql_queue.create(Job(type="email", data={"unique": "order-42"}))

        fetched = await sql_queue.get(job.id)

        assert fetched.id == job.id
        assert fetched.type == "email"
        assert fetched.data == {"unique": "order-42"}
        assert fetched.status == JobStatus.INACTIVE
        assert fetched.unique_key == "order-42"

    async def test_get_missing(self, sql_queue: SqlJobQueue):
        with pytest.raises(JobNotFoundError):
            await sql_queue.get(12345)

    async def test_get_non_numeric_id(self, sql_queue: SqlJobQueue):
        with pytest.raises(JobNotFoundError):
            await sql_queue.get("abc")

    async def test_remove(self, sql_queue: SqlJobQueue):
        job = await sql_queue.create(Job(type="email"))

        await sql_queue.remove(job.id)

        with pytest.raises(JobNotFoundError):
            await sql_queue.get(job.id)

    @pytest.mark.parametrize("job_id", ["1", True, 1.0])
    async def test_non_integer_id_matches_no_row(self, sql_queue: SqlJobQueue, job_id):
        job = await sql_queue.create(Job(type="email"))
        assert job.id == 1

        with pytest.raises(JobNotFoundError):
            await sql_queue.remove(job_id)

        assert (await sql_queue.get(1)).id == 1

    async def test_remove_missing(self, sql_queue: SqlJobQueue):
        with pytest.raises(JobNotFoundError):
            await sql_queue.remove(12345)


class TestUniqueJobsOverSql:
    """End-to-end unique submission against the SQL engine."""

    @pytest.fixture
    def queue(self, sql_queue: SqlJobQueue, metrics: MetricsCollector) -> UniqueJobQueue:
        return UniqueJobQueue.from_store(
            sql_queue,
            RecordingStore(),
            prefix="q",
            cleanup_policy=CleanupPolicy.ALWAYS,
            metrics=metrics,
        )

    async def test_submit_twice_then_delete(self, queue: UniqueJobQueue):
        job1, existed1 = await queue.submit(queue.create_job("email").unique("order-42"))
        job2, existed2 = await queue.submit(queue.create_job("email").unique("order-42"))

        assert (existed1, existed2) == (False, True)
        assert job2.id == job1.id
        assert job2.already_exist is True

        await queue.delete(job1.id)

        assert await queue.lookup("order-42") is None

    async def test_delete_missing_job_reports_partial(self, queue: UniqueJobQueue):
        await queue.registry.merge("order-42", 999)

        with pytest.raises(PartialRemovalError):
            await queue.delete(999)

        assert await queue.lookup("order-42") is None

    async def test_delete_with_string_id_keeps_job_and_entry(self, queue: UniqueJobQueue):
        """A string form of the id removes neither the row nor the registry entry."""
        job, _ = await queue.submit(queue.create_job("email").unique("order-42"))

        with pytest.raises(PartialRemovalError) as exc_info:
            await queue.delete(str(job.id))

        assert exc_info.value.job_removed is False
        assert await queue.lookup("order-42") == job.id

        again, existed = await queue.submit(queue.create_job("email").unique("order-42"))
        assert existed is True
        assert again.id == job.id

        await queue.delete(job.id)
        assert await queue.lookup("order-42") is None
