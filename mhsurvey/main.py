# mhsurvey/main.py
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mhsurvey.api.v1.endpoints import (
    auth,
    companies,
    employee,
    employees,
    health,
    manager,
    payments,
    questions,
    reports,
    settings as settings_ep,
    surveys,
    videos,
)
from mhsurvey.core.config import settings
from mhsurvey.core.exceptions import register_exception_handlers
from mhsurvey.core.logging_config import setup_logging
from mhsurvey.db.store import MemoryStore, build_store

API_V1_PREFIX = "/api/v1"


def create_app(store: Optional[MemoryStore] = None) -> FastAPI:
    """Crea la app; sin store explícito arranca uno nuevo con datos de ejemplo."""
    logger = setup_logging()

    app = FastAPI(
        title=settings.APP_NAME,
        description="API de gestão de saúde mental corporativa",
        version="1.0.0",
    )
    app.state.store = store if store is not None else build_store()

    # CORS (en prod: restringe orígenes con CORS_ORIGINS)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Routers versionados
    app.include_router(health.router,      prefix=API_V1_PREFIX)
    app.include_router(auth.router,        prefix=API_V1_PREFIX)
    app.include_router(companies.router,   prefix=API_V1_PREFIX)
    app.include_router(employees.router,   prefix=API_V1_PREFIX)
    app.include_router(questions.router,   prefix=API_V1_PREFIX)
    app.include_router(surveys.router,     prefix=API_V1_PREFIX)
    app.include_router(reports.router,     prefix=API_V1_PREFIX)
    app.include_router(videos.router,      prefix=API_V1_PREFIX)
    app.include_router(payments.router,    prefix=API_V1_PREFIX)
    app.include_router(settings_ep.router, prefix=API_V1_PREFIX)
    app.include_router(manager.router,     prefix=API_V1_PREFIX)
    app.include_router(employee.router,    prefix=API_V1_PREFIX)

    @app.get("/")
    def root():
        return {
            "message": "Bem-vindo à API de Saúde Mental Corporativa",
            "version": "1.0.0",
            "docs": "/docs",
            "api_v1": API_V1_PREFIX,
        }

    logger.info("%s iniciada (env=%s)", settings.APP_NAME, settings.ENV)
    return app


app = create_app()
