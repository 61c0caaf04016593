"""Jinja2 page rendering with flash messages in the context."""

from pathlib import Path

from fastapi import Request, Response
from fastapi.templating import Jinja2Templates

from api.security import clear_flash, read_flash

TEMPLATES_DIR = Path(__file__).parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def render(request: Request, name: str, context: dict | None = None, status_code: int = 200) -> Response:
    flash = read_flash(request)
    page_context = {
        "success_msg": flash["success"],
        "error_msg": flash["error"],
        **(context or {}),
    }
    response = templates.TemplateResponse(request, name, page_context, status_code=status_code)
    clear_flash(request, response)
    return response
