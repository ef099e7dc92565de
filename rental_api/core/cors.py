from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rental_api.core.settings import get_settings


def add_cors_middleware(app: FastAPI) -> None:
    """Allow the configured frontend origins.

    Auth travels in the Authorization header, so cookies are only allowed
    when origins are listed explicitly (browsers reject "*" with
    credentials).
    """
    settings = get_settings()
    origins = settings.cors_origins_list
    wildcard = "*" in origins

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if wildcard else origins,
        allow_credentials=not wildcard,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type"],
    )
