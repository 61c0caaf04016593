"""Session cookies, flash messages and the login guard.

The session cookie carries the opaque session token inside an HS256 JWS
signed with SESSION_SECRET; the session itself lives server-side. Flash
messages ride in a second short-lived signed cookie until the next page
render pops them.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, Request, Response, status
from fastapi.responses import JSONResponse, RedirectResponse
from jose import JWTError, jwt

from api.dependencies import get_auth_service
from domain.model.errors import StoreError
from domain.model.session import AuthContext
from services.auth_service import AuthService
from utils.config import get_settings

logger = logging.getLogger(__name__)

SESSION_COOKIE_NAME = "session"
FLASH_COOKIE_NAME = "flash"
COOKIE_ALGORITHM = "HS256"
FLASH_TTL_SECONDS = 60
LOGIN_REQUIRED_MESSAGE = "Please login to view your profile"
SESSION_ERROR_MESSAGE = "Could not check your session, please login again"


class NotAuthenticatedError(Exception):
    """Raised by the guard; turned into a redirect or 401 by the app.

    stale_session is False when the session could not be checked at all,
    so the cookie is kept for the next attempt.
    """

    def __init__(self, message: str = LOGIN_REQUIRED_MESSAGE, stale_session: bool = True):
        super().__init__(message)
        self.message = message
        self.stale_session = stale_session


def _sign(claims: dict, ttl_seconds: int) -> str:
    now = datetime.now(timezone.utc)
    payload = {**claims, "iat": now, "exp": now + timedelta(seconds=ttl_seconds)}
    return jwt.encode(payload, get_settings().session_secret, algorithm=COOKIE_ALGORITHM)


def _unsign(value: str | None) -> dict | None:
    if not value:
        return None
    try:
        return jwt.decode(value, get_settings().session_secret, algorithms=[COOKIE_ALGORITHM])
    except JWTError as e:
        logger.debug(f"Cookie signature check failed: {e}")
        return None


def _set_cookie(response: Response, name: str, value: str, max_age: int) -> None:
    response.set_cookie(
        name,
        value,
        max_age=max_age,
        httponly=True,
        secure=get_settings().is_prod,
        samesite="lax",
        path="/",
    )


def wants_json(request: Request) -> bool:
    """True when the client asked for JSON rather than a rendered page."""
    accept = request.headers.get("accept", "")
    return "application/json" in accept and "text/html" not in accept


# ── session cookie ───────────────────────────────────────

def set_session_cookie(response: Response, token: str) -> None:
    ttl = get_settings().session_ttl_seconds
    _set_cookie(response, SESSION_COOKIE_NAME, _sign({"sid": token}, ttl), ttl)


def read_session_token(request: Request) -> str | None:
    claims = _unsign(request.cookies.get(SESSION_COOKIE_NAME))
    return claims.get("sid") if claims else None


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(SESSION_COOKIE_NAME, path="/")


# ── flash messages ───────────────────────────────────────

def set_flash(response: Response, message: str, category: str = "error") -> None:
    _set_cookie(
        response,
        FLASH_COOKIE_NAME,
        _sign({"msg": message, "cat": category}, FLASH_TTL_SECONDS),
        FLASH_TTL_SECONDS,
    )


def read_flash(request: Request) -> dict[str, list[str]]:
    """Pending flash messages keyed by category ("success" / "error")."""
    messages = {"success": [], "error": []}
    claims = _unsign(request.cookies.get(FLASH_COOKIE_NAME))
    if claims and claims.get("msg"):
        category = "success" if claims.get("cat") == "success" else "error"
        messages[category].append(claims["msg"])
    return messages


def clear_flash(request: Request, response: Response) -> None:
    """Drop the flash cookie once its messages have been shown."""
    if request.cookies.get(FLASH_COOKIE_NAME):
        response.delete_cookie(FLASH_COOKIE_NAME, path="/")


# ── guard ────────────────────────────────────────────────

def get_current_user(
    request: Request,
    auth_service: AuthService = Depends(get_auth_service),
) -> Optional[AuthContext]:
    """Resolve the caller from the session cookie (optional).

    A store failure on a page request sends the browser to /login; API
    callers get the StoreError and with it a 500.
    """
    try:
        return auth_service.resolve(read_session_token(request))
    except StoreError:
        logger.error("Session lookup failed", extra={"path": request.url.path})
        if request.method == "GET" and not wants_json(request):
            raise NotAuthenticatedError(SESSION_ERROR_MESSAGE, stale_session=False)
        raise


def get_current_user_required(
    current_user: Optional[AuthContext] = Depends(get_current_user),
) -> AuthContext:
    """Resolve the caller or raise NotAuthenticatedError."""
    if current_user is None:
        raise NotAuthenticatedError()
    return current_user


def not_authenticated_handler(request: Request, exc: NotAuthenticatedError) -> Response:
    """Send page requests to /login, API requests get a 401. Both get a flash."""
    if request.method == "GET" and not wants_json(request):
        response = RedirectResponse("/login", status_code=status.HTTP_303_SEE_OTHER)
    else:
        response = JSONResponse(
            {"detail": "Not authenticated"},
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
    if exc.stale_session and request.cookies.get(SESSION_COOKIE_NAME):
        clear_session_cookie(response)
    set_flash(response, exc.message)
    return response
