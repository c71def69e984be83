import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse

from passlab.api.accounts import router as accounts_router
from passlab.api.admin import router as admin_router
from passlab.config import settings
from passlab.database import CredentialStore
from passlab.errors import PassLabError, ValidationError
from passlab.services.accounts import warm_dummy_digest
from passlab.templating import templates

logger = logging.getLogger(__name__)


async def passlab_error_handler(request: Request, exc: PassLabError):
    if exc.status_code >= 500:
        logger.error(
            f"{request.method} {request.url.path} failed: {exc}",
            exc_info=exc,
        )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.public_message})


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(
        f"{request.method} {request.url.path} failed unexpectedly: {exc}",
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"error": PassLabError.public_message})


async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=ValidationError.status_code,
        content={"error": ValidationError.public_message},
    )


def create_app(store: CredentialStore | None = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logging.basicConfig(level=settings.log_level)
        owned = store is None
        app.state.store = store or CredentialStore(settings.sqlalchemy_url)
        app.state.store.init_schema()
        warm_dummy_digest()
        yield
        if owned:
            app.state.store.dispose()

    app = FastAPI(title="Password Lab", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(PassLabError, passlab_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(accounts_router, prefix="/api")
    app.include_router(admin_router, prefix="/api")

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    @app.get("/", response_class=HTMLResponse)
    async def index(request: Request):
        return templates.TemplateResponse(request, "index.html")

    return app


app = create_app()
