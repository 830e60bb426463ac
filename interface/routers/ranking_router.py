from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status

from core.exceptions import ExerciseError
from core.service import parse_user_ids
from core.usecase import RankingUseCase
from gymrank import network_logger
from gymrank.models import RankingEntry, RankingResponse
from gymrank.utils.logging_config import setup_logger, log_network_io
from interface.di import get_ranking_usecase
from interface.middleware.rate_limit import limiter, app_settings
from interface.routers.error_mapping import ExerciseRoute, to_http_exception

logger = setup_logger("ranking_routes", "router.log")

ranking_router = APIRouter(
    prefix="/ranking",
    tags=["ranking"],
    route_class=ExerciseRoute,
    responses={
        status.HTTP_400_BAD_REQUEST: {"description": "Invalid params userIds"},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"description": "Storage failure"},
    },
)


@ranking_router.get("", response_model=RankingResponse)
@limiter.limit(app_settings.ranking_rate_limit)
async def get_ranking(
    request: Request,
    response: Response,
    user_ids: List[str] = Query(default=[], alias="userIds"),
    ranking_service: RankingUseCase = Depends(get_ranking_usecase),
):
    """
    Rank the requested users by their score over the lookback window.

    userIds may be repeated or given as a comma separated list.
    """
    try:
        selected = parse_user_ids(user_ids)
        scores = await ranking_service.get_ranking(selected)
        return RankingResponse(
            ranking=[RankingEntry.model_validate(score.to_dict()) for score in scores]
        )
    except ExerciseError as e:
        logger.warning(f"Ranking request rejected ({e.kind}): {e.message}")
        raise to_http_exception(e)
    except Exception as e:
        logger.exception(f"Error in get_ranking: {e}")
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
