from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from sqlalchemy.exc import OperationalError

from core.entities import ExerciseCategory, ExerciseEntity
from core.exceptions import ExerciseNotFoundError, StorageFailureError
from infrastructure.database import SQLDatabase
from infrastructure.repositories import ExerciseRepository


@pytest_asyncio.fixture
async def database(tmp_path):
    db = SQLDatabase(url=f"sqlite+aiosqlite:///{tmp_path / 'exercises.db'}")
    await db.create_schema()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def repository(database):
    session = database.session()
    yield ExerciseRepository(session=session)
    await session.close()


def make_exercise(start, duration=3600, category=ExerciseCategory.RUNNING, user_id=1):
    return ExerciseEntity(
        user_id=user_id,
        description="Track session",
        category=category,
        start_time=start,
        duration=duration,
        calories=300,
    )


async def store(repository, *exercises):
    created = []
    async with repository.atomic():
        for exercise in exercises:
            created.append(await repository.create_exercise(exercise))
    return created


@pytest.mark.asyncio
async def test_create_assigns_ids(repository):
    first, second = await store(
        repository,
        make_exercise(datetime(2024, 5, 1, 10, 0)),
        make_exercise(datetime(2024, 5, 2, 10, 0)),
    )

    assert first.id is not None
    assert second.id > first.id
    assert first.finish_time == datetime(2024, 5, 1, 11, 0)

    fetched = await repository.get_exercise(first.id)
    assert fetched == first


@pytest.mark.asyncio
async def test_get_missing_exercise(repository):
    assert await repository.get_exercise(404) is None


@pytest.mark.asyncio
async def test_fetch_window_bounds_and_order(repository):
    await store(
        repository,
        make_exercise(datetime(2024, 4, 30, 23, 59)),
        make_exercise(datetime(2024, 5, 1, 0, 0)),
        make_exercise(datetime(2024, 5, 15, 8, 0)),
        make_exercise(datetime(2024, 5, 29, 23, 0)),
        make_exercise(datetime(2024, 5, 30, 0, 0)),
        make_exercise(datetime(2024, 5, 10, 8, 0), category=ExerciseCategory.SWIMMING),
        make_exercise(datetime(2024, 5, 11, 8, 0), user_id=2),
    )

    result = await repository.fetch_window(
        user_id=1,
        category=ExerciseCategory.RUNNING,
        window_start=datetime(2024, 5, 1),
        window_end=datetime(2024, 5, 30),
    )

    assert [exercise.start_time for exercise in result] == [
        datetime(2024, 5, 29, 23, 0),
        datetime(2024, 5, 15, 8, 0),
        datetime(2024, 5, 1, 0, 0),
    ]
    assert all(exercise.category == ExerciseCategory.RUNNING for exercise in result)


@pytest.mark.asyncio
async def test_find_overlap_candidates(repository):
    (existing,) = await store(repository, make_exercise(datetime(2024, 5, 1, 10, 0)))
    await store(repository, make_exercise(datetime(2024, 5, 1, 10, 0), user_id=2))

    inside = await repository.find_overlap_candidates(
        1, datetime(2024, 5, 1, 10, 30), datetime(2024, 5, 1, 10, 45)
    )
    before = await repository.find_overlap_candidates(
        1, datetime(2024, 5, 1, 9, 0), datetime(2024, 5, 1, 9, 30)
    )
    touching = await repository.find_overlap_candidates(
        1, datetime(2024, 5, 1, 9, 0), datetime(2024, 5, 1, 10, 0)
    )
    excluded = await repository.find_overlap_candidates(
        1, datetime(2024, 5, 1, 10, 30), datetime(2024, 5, 1, 10, 45), exclude_id=existing.id
    )

    assert [exercise.id for exercise in inside] == [existing.id]
    assert before == []
    assert [exercise.id for exercise in touching] == [existing.id]
    assert excluded == []


@pytest.mark.asyncio
async def test_update_exercise(repository):
    (existing,) = await store(repository, make_exercise(datetime(2024, 5, 1, 10, 0)))
    candidate = ExerciseEntity(
        id=existing.id,
        user_id=existing.user_id,
        category=existing.category,
        description="Longer session",
        start_time=datetime(2024, 5, 1, 12, 0),
        duration=5400,
        calories=800,
    )

    async with repository.atomic():
        updated = await repository.update_exercise(candidate)

    assert updated.description == "Longer session"
    assert updated.finish_time == datetime(2024, 5, 1, 13, 30)
    assert (await repository.get_exercise(existing.id)).calories == 800


@pytest.mark.asyncio
async def test_update_missing_exercise(repository):
    with pytest.raises(ExerciseNotFoundError):
        async with repository.atomic():
            await repository.update_exercise(
                make_exercise(datetime(2024, 5, 1, 10, 0)).model_copy(update={"id": 42})
            )


@pytest.mark.asyncio
async def test_atomic_rolls_back_on_error(repository):
    with pytest.raises(RuntimeError):
        async with repository.atomic():
            await repository.create_exercise(make_exercise(datetime(2024, 5, 1, 10, 0)))
            raise RuntimeError("abort")

    result = await repository.fetch_window(
        1, ExerciseCategory.RUNNING, datetime(2024, 5, 1), datetime(2024, 5, 2)
    )
    assert result == []


@pytest.mark.asyncio
async def test_query_errors_become_storage_failures():
    session = MagicMock()
    session.execute = AsyncMock(
        side_effect=OperationalError("SELECT", {}, Exception("database is locked"))
    )
    repository = ExerciseRepository(session=session)

    with pytest.raises(StorageFailureError) as exc_info:
        await repository.find_overlap_candidates(
            1, datetime(2024, 5, 1, 9, 0), datetime(2024, 5, 1, 9, 30)
        )

    assert exc_info.value.kind == "StorageFailure"
