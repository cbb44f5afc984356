"""
Grade API - FastAPI application

Subject grades and the graded inputs (quizzes, exams, ...) behind them.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime

import uvicorn
from fastapi import Depends, FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import Engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from grade_api.core.config import Settings, settings as default_settings
from grade_api.core.db import create_db_engine, create_session_factory, get_db
from grade_api.core.errors import add_error_handlers
from grade_api.core.logging_config import configure_logging
from grade_api.routers import grade_inputs, grades

API_VERSION = "1.0.0"

logger = logging.getLogger(__name__)


def _now_iso() -> str:
    return datetime.utcnow().isoformat() + "Z"


def _check_database(engine: Engine) -> None:
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.exception("Database connection error")
        return
    logger.info("Database connected successfully")


@asynccontextmanager
async def lifespan(app: FastAPI):
    engine = create_db_engine(app.state.settings)
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    _check_database(engine)
    try:
        yield
    finally:
        engine.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title="Grade API",
        description="Subject grades and graded inputs",
        version=API_VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.include_router(grades.router, prefix="/api")
    app.include_router(grade_inputs.router, prefix="/api")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    add_error_handlers(app, expose_details=settings.EXPOSE_ERROR_DETAILS)

    @app.get("/")
    def root():
        """Service metadata"""
        return {
            "message": "Grade API Service",
            "version": API_VERSION,
            "endpoints": {
                "grades": {
                    "getAll": "GET /api/grades",
                    "getOne": "GET /api/grades/:id",
                    "create": "POST /api/grades",
                    "update": "PUT /api/grades/:id",
                    "delete": "DELETE /api/grades/:id",
                    "stats": "GET /api/grades/stats/:student_id",
                },
                "gradeInputs": {
                    "getAll": "GET /api/grade_inputs",
                    "getOne": "GET /api/grade_inputs/:id",
                    "create": "POST /api/grade_inputs",
                    "update": "PUT /api/grade_inputs/:id",
                    "delete": "DELETE /api/grade_inputs/:id",
                    "summary": "GET /api/grade_inputs/summary/:subject_grade_id",
                },
            },
        }

    @app.get("/health")
    def health(db: Session = Depends(get_db)):
        """Liveness plus database reachability"""
        try:
            db.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            logger.warning("Health check failed: %s", exc)
            content = {
                "status": "DEGRADED",
                "database": "unavailable",
                "timestamp": _now_iso(),
            }
            if settings.EXPOSE_ERROR_DETAILS:
                content["error"] = str(exc)
            return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=content)

        return {"status": "OK", "database": "connected", "timestamp": _now_iso()}

    return app


app = create_app()


def run() -> None:
    base_url = f"http://localhost:{default_settings.PORT}"
    logger.info("Grade API Server running on port %s", default_settings.PORT)
    logger.info("Health check: %s/health", base_url)
    logger.info("API documentation: %s/", base_url)
    uvicorn.run(app, host=default_settings.HOST, port=default_settings.PORT)


if __name__ == "__main__":
    run()
