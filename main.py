from fastapi import FastAPI, HTTPException, status, Request, Response
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder

from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from lifespan import lifespan

from gymrank import network_logger
from gymrank.models import AppInfo
from gymrank.utils.logging_config import log_network_io, setup_logger

from utils import AppSettings, CorsSettings

from interface.middleware.cors import add_cors_middleware
from interface.middleware.rate_limit import limiter
from interface.routers import exercise_router, ranking_router

app_settings = AppSettings()
cors_settings = CorsSettings()

app = FastAPI(
    title=app_settings.name,
    version=app_settings.version,
    debug=app_settings.debug_mode,
    lifespan=lifespan,
)

app.include_router(exercise_router)
app.include_router(ranking_router)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

add_cors_middleware(app, cors_settings)
app.add_middleware(SlowAPIMiddleware)

logger = setup_logger(
    "main",
    "gymrank_main.log",
    file_level=app_settings.file_log_level,
    console_level=app_settings.screen_log_level,
)


# API Endpoint [About App]
@app.get("/app-info")
@limiter.limit("20/minute")
async def get_app_info(request: Request, response: Response):
    """Endpoint to get information about the app."""
    try:
        appinfo = AppInfo(app_name=app_settings.name, version=app_settings.version)
        return JSONResponse(
            content=jsonable_encoder(appinfo), status_code=status.HTTP_200_OK
        )
    except Exception as e:
        logger.exception(f"Error in get_app_info: {e}")
        return JSONResponse(
            content={"msg": "Internal server error"},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    finally:
        log_network_io(
            logger=network_logger,
            endpoint=request.url,
            method=request.method,
            response_status=response.status_code,
        )


@app.get("/ping")
@limiter.limit("10/minute")
async def ping(request: Request, response: Response):
    """Endpoint to check if the server is alive."""
    try:
        return JSONResponse(content={"status": "ok"}, status_code=status.HTTP_200_OK)
    except HTTPException as httpe:
        return JSONResponse(
            content={"msg": httpe.detail}, status_code=httpe.status_code
        )
    finally:
        log_network_io(
            logger=network_logger,
            endpoint=request.url,
            method=request.method,
            response_status=response.status_code,
        )
