# /backend/therapy_ai/main.py
from __future__ import annotations
import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from therapy_ai import config
from therapy_ai.db import init_db
from therapy_ai.store import open_store, store_engine
from therapy_ai.api.deps import GuardRedirect
from therapy_ai.api.routers import admin, auth, children, therapist
from therapy_ai.services.auth_service import SessionContext, dashboard_path, get_session_context
from therapy_ai.services.results import InvalidCredentialsError, InvalidOperationError, NotFoundError
from therapy_ai.services.seed import seed_if_empty

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    init_db(store_engine())
    if config.AUTO_SEED:
        with open_store() as store:
            seed_if_empty(store)
    yield


app = FastAPI(
    title="Therapy AI Demo API",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(GuardRedirect)
async def guard_redirect_handler(request: Request, exc: GuardRedirect):
    return RedirectResponse(exc.location, status_code=status.HTTP_303_SEE_OTHER)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


@app.exception_handler(InvalidOperationError)
async def invalid_operation_handler(request: Request, exc: InvalidOperationError):
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})


@app.exception_handler(InvalidCredentialsError)
async def invalid_credentials_handler(request: Request, exc: InvalidCredentialsError):
    return JSONResponse(status_code=status.HTTP_401_UNAUTHORIZED, content={"detail": str(exc)})


app.include_router(auth.router)
app.include_router(admin.router)
app.include_router(therapist.router)
app.include_router(children.router)


@app.get("/")
async def index(ctx: SessionContext = Depends(get_session_context)):
    return RedirectResponse(dashboard_path(ctx), status_code=status.HTTP_303_SEE_OTHER)


@app.get("/health")
async def health():
    return {"ok": True}
