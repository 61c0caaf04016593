"""Authentication routes (signup, login, logout)."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse

from api.dependencies import get_auth_service
from api.models import LoginRequest, LoginResponse, MessageResponse, SignupRequest
from api.security import clear_session_cookie, read_session_token, set_flash, set_session_cookie
from api.templating import render
from domain.model.errors import AuthenticationError, DuplicateError, StoreError
from services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.get("/signup", response_class=HTMLResponse, summary="Show the signup page")
def signup_page(request: Request):
    return render(request, "signup.html")


@router.post(
    "/signup",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    responses={
        400: {"description": "Invalid username or password payload"},
        409: {"description": "Username already registered"},
        500: {"description": "Error registering user"},
    },
)
def signup(payload: SignupRequest, auth_service: AuthService = Depends(get_auth_service)):
    """Create a user with a bcrypt-hashed password and an empty activity list."""
    try:
        auth_service.register(payload.username, payload.password)
    except DuplicateError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Username already registered",
        )
    except StoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error registering user",
        )

    return MessageResponse(message="User registered")


def _close_session(auth_service: AuthService, token: str | None) -> None:
    try:
        auth_service.logout(token)
    except StoreError:
        # The stale record expires via the TTL index
        logger.warning("Failed to delete session")


@router.get("/login", response_class=HTMLResponse, summary="Show the login page")
def login_page(request: Request):
    return render(request, "login.html")


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Log in and open a session",
    responses={
        400: {"description": "Invalid username or password payload"},
        401: {"description": "Invalid username or password"},
    },
)
def login(
    payload: LoginRequest,
    request: Request,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Check credentials, then set the session cookie.

    Unknown usernames and wrong passwords get the same 401 so the response
    does not reveal which usernames exist.
    """
    previous_token = read_session_token(request)
    try:
        result = auth_service.authenticate(payload.username, payload.password)
    except AuthenticationError:
        failed = JSONResponse(
            {"detail": AuthenticationError.GENERIC_MESSAGE},
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
        set_flash(failed, AuthenticationError.GENERIC_MESSAGE)
        return failed
    except StoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error logging in",
        )

    # A fresh login replaces whatever session the browser still held
    _close_session(auth_service, previous_token)
    set_session_cookie(response, result.session.token)
    return LoginResponse(message="Logged in", redirect="/profile")


@router.post("/logout", response_model=MessageResponse, summary="Close the current session")
def logout(request: Request, auth_service: AuthService = Depends(get_auth_service)):
    _close_session(auth_service, read_session_token(request))
    response = JSONResponse({"message": "Logged out"})
    clear_session_cookie(response)
    set_flash(response, "You have been logged out", category="success")
    return response


@router.get("/logout", summary="Close the current session and go to the login page")
def logout_page(request: Request, auth_service: AuthService = Depends(get_auth_service)):
    _close_session(auth_service, read_session_token(request))
    response = RedirectResponse("/login", status_code=status.HTTP_303_SEE_OTHER)
    clear_session_cookie(response)
    set_flash(response, "You have been logged out", category="success")
    return response
