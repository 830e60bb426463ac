from fastapi import APIRouter, Depends, HTTPException, Path, Request, Response, status

from core.exceptions import ExerciseError
from core.usecase import ExerciseUseCase
from gymrank import network_logger
from gymrank.models import ExerciseCreate, ExerciseUpdate, ExerciseResponse, ExerciseEnvelope
from gymrank.utils.logging_config import setup_logger, log_network_io
from interface.di import get_exercise_usecase
from interface.middleware.rate_limit import limiter, app_settings
from interface.routers.error_mapping import ExerciseRoute, to_http_exception

logger = setup_logger("exercise_routes", "router.log")

exercise_router = APIRouter(
    prefix="/exercise",
    tags=["exercise"],
    route_class=ExerciseRoute,
    responses={
        status.HTTP_400_BAD_REQUEST: {"description": "Missing or invalid field"},
        status.HTTP_409_CONFLICT: {"description": "Exercise overlaps an existing one"},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"description": "Storage failure"},
    },
)


@exercise_router.post("", status_code=status.HTTP_201_CREATED, response_model=ExerciseEnvelope)
@limiter.limit(app_settings.write_rate_limit)
async def create_exercise(
    exercise_data: ExerciseCreate,
    request: Request,
    response: Response,
    exercise_service: ExerciseUseCase = Depends(get_exercise_usecase),
):
    """
    Log a new exercise for a user.

    The exercise is rejected when its time window collides with another
    exercise of the same user.
    """
    try:
        exercise = await exercise_service.create_exercise(
            user_id=exercise_data.userId,
            description=exercise_data.description,
            category=exercise_data.type,
            start_time=exercise_data.startTime,
            duration=exercise_data.duration,
            calories=exercise_data.calories,
        )
        return ExerciseEnvelope(
            exercise=ExerciseResponse.model_validate(exercise.model_dump())
        )
    except ExerciseError as e:
        logger.warning(f"Exercise creation rejected ({e.kind}): {e.message}")
        raise to_http_exception(e)
    except Exception as e:
        logger.exception(f"Error in create_exercise: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )
    finally:
        log_network_io(
            logger=network_logger,
            endpoint=request.url,
            method=request.method,
            response_status=response.status_code,
        )


@exercise_router.put("/{exerciseId}",response_model=ExerciseEnvelope)
@limiter.limit(app_settings.write_rate_limit)
async def update_exercise(
    update_data: ExerciseUpdate,
    request: Request,
    response: Response,
    exercise_id: int = Path(..., alias="exerciseId"),
    exercise_service: ExerciseUseCase = Depends(get_exercise_usecase),
):
    """
    Replace description, start time, duration and calories of an exercise.

    Owner and category of an exercise can not be changed.
    """
    try:
        exercise = await exercise_service.update_exercise(
            exercise_id=exercise_id,
            description=update_data.description,
            start_time=update_data.startTime,
            duration=update_data.duration,
            calories=update_data.calories,
            user_id=update_data.userId,
            category=update_data.type,
        )
        return ExerciseEnvelope(
            exercise=ExerciseResponse.model_validate(exercise.model_dump())
        )
    except ExerciseError as e:
        logger.warning(f"Exercise {exercise_id} update rejected ({e.kind}): {e.message}")
        raise to_http_exception(e)
    except Exception as e:
        logger.exception(f"Error in update_exercise: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )
    finally:
        log_network_io(
            logger=network_logger,
            endpoint=request.url,
            method=request.method,
            response_status=response.status_code,
        )
