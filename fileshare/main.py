import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from fileshare.core.config import Settings, get_settings
from fileshare.core.exceptions import FileShareError
from fileshare.core.security import TokenIssuer
from fileshare.models.database import init_db, make_engine, make_session_factory
from fileshare.routers import auth, files
from fileshare.services.storage import build_blob_storage

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        engine = make_engine(settings.database_url)
        init_db(engine)
        app.state.engine = engine
        app.state.session_factory = make_session_factory(engine)
        app.state.storage = build_blob_storage(settings)
        logger.info("Server running on port %s", settings.port)
        try:
            yield
        finally:
            engine.dispose()

    app = FastAPI(title="fileshare", lifespan=lifespan)
    app.state.settings = settings
    app.state.token_issuer = TokenIssuer(
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expire_minutes=settings.token_expire_minutes,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "HEAD", "PUT", "PATCH", "POST", "DELETE"],
        allow_headers=["*"],
    )

    @app.exception_handler(FileShareError)
    async def fileshare_error_handler(request: Request, exc: FileShareError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    # include our routers
    app.include_router(auth.router)
    app.include_router(files.router)

    @app.get("/", response_class=PlainTextResponse)
    def home():
        logger.info("Home endpoint hit")
        return f"Server is running on port:{settings.port} ...!"

    return app


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run("fileshare.main:create_app", factory=True, host="0.0.0.0", port=settings.port)
