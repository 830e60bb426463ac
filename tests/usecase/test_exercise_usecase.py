import asyncio
from contextlib import asynccontextmanager
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from core.entities import ExerciseCategory, ExerciseEntity
from core.exceptions import (
    ExerciseNotFoundError,
    InvalidFieldError,
    MissingFieldError,
    OverlapConflictError,
    StorageFailureError,
)
from core.interface import ExerciseRepositoryInterface
from core.service import UserLockRegistry
from core.usecase import ExerciseUseCase


@pytest.fixture
def mock_repository():
    repository = MagicMock(spec=ExerciseRepositoryInterface)
    repository.find_overlap_candidates = AsyncMock(return_value=[])
    repository.get_exercise = AsyncMock(return_value=None)
    repository.create_exercise = AsyncMock(
        side_effect=lambda exercise: exercise.model_copy(update={"id": 1})
    )
    repository.update_exercise = AsyncMock(side_effect=lambda exercise: exercise)
    repository.committed = 0

    @asynccontextmanager
    async def atomic():
        yield
        repository.committed += 1

    repository.atomic = atomic
    return repository


@pytest.fixture
def exercise_usecase(mock_repository):
    return ExerciseUseCase(repository=mock_repository, locks=UserLockRegistry())


@pytest.fixture
def valid_exercise_data():
    return {
        "user_id": 1,
        "description": "Morning run",
        "category": "RUNNING",
        "start_time": "2024-05-01T10:00:00",
        "duration": 3600,
        "calories": 450,
    }


@pytest.fixture
def stored_exercise():
    return ExerciseEntity(
        id=5,
        user_id=1,
        description="Morning run",
        category=ExerciseCategory.RUNNING,
        start_time=datetime(2024, 5, 1, 10, 0),
        duration=3600,
        calories=450,
    )


@pytest.mark.asyncio
async def test_create_exercise_success(exercise_usecase, valid_exercise_data, mock_repository):
    result = await exercise_usecase.create_exercise(**valid_exercise_data)

    assert result.id == 1
    assert result.category == ExerciseCategory.RUNNING
    assert result.start_time == datetime(2024, 5, 1, 10, 0)
    assert result.finish_time == datetime(2024, 5, 1, 11, 0)
    mock_repository.create_exercise.assert_awaited_once()
    assert mock_repository.committed == 1


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "field, value, expected_field",
    [
        ("user_id", None, "userId"),
        ("description", None, "description"),
        ("description", "", "description"),
        ("category", None, "type"),
        ("start_time", None, "startTime"),
        ("duration", None, "duration"),
        ("duration", 0, "duration"),
        ("calories", None, "calories"),
        ("calories", 0, "calories"),
    ],
)
async def test_create_exercise_missing_field(
    exercise_usecase, valid_exercise_data, mock_repository, field, value, expected_field
):
    valid_exercise_data[field] = value

    with pytest.raises(MissingFieldError) as exc_info:
        await exercise_usecase.create_exercise(**valid_exercise_data)

    assert exc_info.value.field == expected_field
    mock_repository.create_exercise.assert_not_called()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "field, value, expected_field",
    [
        ("user_id", -3, "userId"),
        ("description", "Run!!", "description"),
        ("category", "YOGA", "type"),
        ("start_time", "not a date", "startTime"),
        ("duration", -60, "duration"),
        ("calories", -1, "calories"),
    ],
)
async def test_create_exercise_invalid_field(
    exercise_usecase, valid_exercise_data, mock_repository, field, value, expected_field
):
    valid_exercise_data[field] = value

    with pytest.raises(InvalidFieldError) as exc_info:
        await exercise_usecase.create_exercise(**valid_exercise_data)

    assert exc_info.value.field == expected_field
    mock_repository.create_exercise.assert_not_called()


@pytest.mark.asyncio
async def test_create_exercise_reports_first_missing_field(exercise_usecase):
    with pytest.raises(MissingFieldError) as exc_info:
        await exercise_usecase.create_exercise(
            user_id=None,
            description=None,
            category=None,
            start_time=None,
            duration=None,
            calories=None,
        )

    assert exc_info.value.field == "userId"


@pytest.mark.asyncio
async def test_create_exercise_overlap(
    exercise_usecase, valid_exercise_data, mock_repository, stored_exercise
):
    mock_repository.find_overlap_candidates.return_value = [stored_exercise]
    valid_exercise_data["start_time"] = "2024-05-01T10:30:00"
    valid_exercise_data["duration"] = 900

    with pytest.raises(OverlapConflictError):
        await exercise_usecase.create_exercise(**valid_exercise_data)

    mock_repository.create_exercise.assert_not_called()
    assert mock_repository.committed == 0


@pytest.mark.asyncio
async def test_create_exercise_storage_failure_aborts(
    exercise_usecase, valid_exercise_data, mock_repository
):
    mock_repository.find_overlap_candidates.side_effect = StorageFailureError()

    with pytest.raises(StorageFailureError):
        await exercise_usecase.create_exercise(**valid_exercise_data)

    mock_repository.create_exercise.assert_not_called()
    assert mock_repository.committed == 0


@pytest.mark.asyncio
async def test_concurrent_creations_are_serialized(valid_exercise_data):
    stored = []

    async def find_overlap_candidates(user_id, start_time, finish_time, exclude_id=None):
        await asyncio.sleep(0)
        return list(stored)

    async def create_exercise(exercise):
        await asyncio.sleep(0)
        created = exercise.model_copy(update={"id": len(stored) + 1})
        stored.append(created)
        return created

    @asynccontextmanager
    async def atomic():
        yield

    repository = MagicMock(spec=ExerciseRepositoryInterface)
    repository.find_overlap_candidates = find_overlap_candidates
    repository.create_exercise = create_exercise
    repository.atomic = atomic
    usecase = ExerciseUseCase(repository=repository, locks=UserLockRegistry())

    results = await asyncio.gather(
        usecase.create_exercise(**valid_exercise_data),
        usecase.create_exercise(**valid_exercise_data),
        return_exceptions=True,
    )

    assert len(stored) == 1
    assert sum(isinstance(result, OverlapConflictError) for result in results) == 1


@pytest.mark.asyncio
async def test_update_exercise_success(exercise_usecase, mock_repository, stored_exercise):
    mock_repository.get_exercise.return_value = stored_exercise

    result = await exercise_usecase.update_exercise(
        exercise_id=5,
        description="Evening run",
        start_time="2024-05-01T18:00:00",
        duration=1800,
        calories=200,
    )

    assert result.id == 5
    assert result.user_id == 1
    assert result.category == ExerciseCategory.RUNNING
    assert result.description == "Evening run"
    assert result.finish_time == datetime(2024, 5, 1, 18, 30)
    mock_repository.find_overlap_candidates.assert_awaited_once_with(
        user_id=1,
        start_time=datetime(2024, 5, 1, 18, 0),
        finish_time=datetime(2024, 5, 1, 18, 30),
        exclude_id=5,
    )
    assert mock_repository.committed == 1


@pytest.mark.asyncio
async def test_update_exercise_not_found(exercise_usecase, mock_repository):
    with pytest.raises(ExerciseNotFoundError) as exc_info:
        await exercise_usecase.update_exercise(
            exercise_id=99,
            description="Evening run",
            start_time="2024-05-01T18:00:00",
            duration=1800,
            calories=200,
        )

    assert exc_info.value.kind == "NotFound"
    mock_repository.update_exercise.assert_not_called()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "extra, expected_field",
    [({"user_id": 2}, "userId"), ({"category": "SWIMMING"}, "type")],
)
async def test_update_exercise_rejects_immutable_fields(
    exercise_usecase, mock_repository, extra, expected_field
):
    with pytest.raises(InvalidFieldError) as exc_info:
        await exercise_usecase.update_exercise(
            exercise_id=5,
            description="Evening run",
            start_time="2024-05-01T18:00:00",
            duration=1800,
            calories=200,
            **extra,
        )

    assert exc_info.value.field == expected_field
    mock_repository.get_exercise.assert_not_called()


@pytest.mark.asyncio
async def test_update_exercise_overlap(exercise_usecase, mock_repository, stored_exercise):
    other = stored_exercise.model_copy(update={"id": 6})
    mock_repository.get_exercise.return_value = stored_exercise
    mock_repository.find_overlap_candidates.return_value = [other]

    with pytest.raises(OverlapConflictError) as exc_info:
        await exercise_usecase.update_exercise(
            exercise_id=5,
            description="Evening run",
            start_time="2024-05-01T10:15:00",
            duration=600,
            calories=200,
        )

    assert "update" in exc_info.value.message
    mock_repository.update_exercise.assert_not_called()
