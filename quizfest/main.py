import uvicorn
from fastapi import FastAPI

from quizfest.api.routes.health import router as health_router
from quizfest.api.routes.participations import router as participations_router
from quizfest.api.routes.questions import router as questions_router
from quizfest.api.routes.quizzes import router as quizzes_router
from quizfest.core.config import get_settings
from quizfest.core.logging import configure_logging


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)

    docs_enabled = bool(settings.enable_openapi_docs)
    app = FastAPI(
        title="Quiz Festif API",
        version="1.0.0",
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
    )
    app.include_router(health_router)
    app.include_router(quizzes_router)
    app.include_router(questions_router)
    app.include_router(participations_router)
    return app


app = create_app()


def run() -> None:
    settings = get_settings()
    uvicorn.run(
        "quizfest.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.app_env == "dev",
    )


if __name__ == "__main__":
    run()
