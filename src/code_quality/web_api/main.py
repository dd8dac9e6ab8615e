"""
FastAPI application for the Java analysis engine.

    uvicorn code_quality.web_api.main:app

``create_app`` builds an app for explicit ``Settings``; ``app`` is the one
built from the environment.
"""
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from code_quality import __version__
from code_quality.web_api.config import Settings, settings as env_settings
from code_quality.web_api.routers import analyze, health

API_TITLE = "Code Quality API"


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or env_settings
    docs_url = "/docs" if settings.debug else None

    application = FastAPI(
        title=API_TITLE,
        description="Bug, vulnerability, performance and style checks for Java sources",
        version=__version__,
        docs_url=docs_url,
        redoc_url="/redoc" if settings.debug else None,
    )
    application.state.settings = settings

    # Credentials cannot be combined with a wildcard origin.
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    application.include_router(health.router, tags=["Health"])
    application.include_router(analyze.router, prefix="/analyze", tags=["Analyze"])

    @application.get("/")
    async def root():
        """Service name, version and where the interactive docs live"""
        return {
            "name": API_TITLE,
            "version": __version__,
            "docs": docs_url or "disabled",
        }

    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=env_settings.host, port=env_settings.port)
