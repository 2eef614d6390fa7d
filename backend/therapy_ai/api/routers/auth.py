from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse

from therapy_ai.config import LOGIN_PATH
from therapy_ai.store import KeyValueStore, get_store
from therapy_ai.api.deps import authenticated_session
from therapy_ai.schemas import LoginRequest, LoginResponse, UserPublic
from therapy_ai.services.auth_service import (
    SessionContext, dashboard_path, get_session_context, login, logout,
)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("/login")
async def login_page(ctx: SessionContext = Depends(get_session_context)):
    # already logged in: straight to the dashboard
    if ctx.is_authenticated:
        return RedirectResponse(dashboard_path(ctx), status_code=status.HTTP_303_SEE_OTHER)
    return {"detail": "Login required"}


@router.post("/login", response_model=LoginResponse)
def login_for_session(req: LoginRequest, store: KeyValueStore = Depends(get_store)):
    # InvalidCredentialsError is turned into a 401 by the app
    ctx = login(store, req.email, req.password)
    return LoginResponse(
        user=UserPublic.model_validate(ctx.user.model_dump()),
        redirect_to=dashboard_path(ctx),
    )


@router.post("/logout")
def logout_session(store: KeyValueStore = Depends(get_store)):
    logout(store)
    return {"redirect_to": LOGIN_PATH}


@router.get("/me", response_model=UserPublic)
async def get_my_info(ctx: SessionContext = Depends(authenticated_session)):
    """The logged-in user, without the password."""
    return UserPublic.model_validate(ctx.user.model_dump())
