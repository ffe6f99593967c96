import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.config import assert_secure_configuration, settings
from .core.logging import configure_logging
from .api.routes.v1.health import router as health_router
from .api.routes.v1.chat import router as chat_router
from .api.routes.v1.auth import router as auth_router
from .api.routes.v1.palette import router as palette_router


log = logging.getLogger("bridal.main")


def create_app() -> FastAPI:
    configure_logging(settings.log_level)
    assert_secure_configuration()

    app = FastAPI(title="Bridal Lab API", version="0.1.0")

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routers v1
    app.include_router(health_router, prefix=f"{settings.api_prefix}/v1", tags=["health"])
    app.include_router(chat_router, prefix=f"{settings.api_prefix}/v1", tags=["chat"])
    app.include_router(auth_router, prefix=f"{settings.api_prefix}/v1", tags=["auth"])
    app.include_router(palette_router, prefix=f"{settings.api_prefix}/v1", tags=["palette"])

    log.info(
        "Bridal Lab API ready: env=%s relay=%s model=%s",
        settings.env,
        "forwarded" if settings.has_llm_credential else "fallback",
        settings.llm_model,
    )
    return app


app = create_app()
