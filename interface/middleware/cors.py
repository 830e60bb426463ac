from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from utils import CorsSettings


def add_cors_middleware(app: FastAPI, settings: CorsSettings) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=settings.allow_credentials,
        allow_methods=settings.allowed_methods,
        allow_headers=settings.allowed_headers,
        max_age=600,
    )
