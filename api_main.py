import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from habitlog.api import router
from habitlog.config import settings
from habitlog.db import make_engine, make_session_factory
from habitlog.errors import HabitLogError, InternalError, InvalidInputError
from habitlog.models import Base

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(x) for x in err.get("loc", ()) if x != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts) or InvalidInputError.default_message


def create_app(session_factory: Optional[sessionmaker[Session]] = None) -> FastAPI:
    if session_factory is None:
        session_factory = make_session_factory(make_engine())

    app = FastAPI(title="Habitlog API", version="0.1.0")
    app.state.session_factory = session_factory
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS if settings.CORS_ORIGINS else ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(router)

    @app.exception_handler(HabitLogError)
    async def habitlog_error_handler(request: Request, exc: HabitLogError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        err = InvalidInputError(_validation_message(exc))
        return JSONResponse(status_code=err.status_code, content=err.to_dict())

    @app.exception_handler(SQLAlchemyError)
    async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        logger.exception("store failure on %s %s", request.method, request.url.path)
        err = InternalError()
        return JSONResponse(status_code=err.status_code, content=err.to_dict())

    @app.get("/health/live")
    def health_live() -> dict[str, str]:
        return {"status": "alive"}

    @app.get("/health/ready")
    def health_ready() -> dict[str, str]:
        with app.state.session_factory() as db:
            db.execute(text("SELECT 1"))
        return {"status": "ready"}

    @app.on_event("startup")
    def on_startup() -> None:
        if settings.AUTO_CREATE_SCHEMA:
            Base.metadata.create_all(bind=app.state.session_factory.kw["bind"])
            logger.info("schema created")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("api_main:app", host="0.0.0.0", port=8000)
