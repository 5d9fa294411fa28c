import logging
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import APIRouter, FastAPI, HTTPException, Request, status
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel, Field

from .config import Settings, get_settings
from .gateway import ModelGateway
from .shell import TABS, Shell, ShellSessions, create_panel, find_tab

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger("programming_helper")

BASE_DIR = Path(__file__).resolve().parent
templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))

router = APIRouter()


class ToolRunRequest(BaseModel):
    text: str = Field(..., description="User text for the tool")
    options: Dict[str, Any] = Field(default_factory=dict, description="Tool options, same names as the form fields")


class ToolRunResult(BaseModel):
    tool: str
    status: str
    outcome: Dict[str, Any]


def _session_shell(request: Request) -> tuple[str, Shell]:
    sessions: ShellSessions = request.app.state.sessions
    cookie_name = request.app.state.settings.session_cookie
    return sessions.get_or_create(request.cookies.get(cookie_name))


def _redirect_home(request: Request, session_id: str) -> RedirectResponse:
    response = RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)
    response.set_cookie(request.app.state.settings.session_cookie, session_id, httponly=True, samesite="lax")
    return response


@router.get("/", response_class=HTMLResponse)
async def index(request: Request) -> HTMLResponse:
    session_id, shell = _session_shell(request)
    panel = shell.active_panel
    context: Dict[str, Any] = {
        "tabs": TABS,
        "active_tab": shell.active_tab,
        "panel": panel,
        "available": request.app.state.gateway.is_available(),
    }
    if panel is not None:
        context.update(panel.context())
    response = templates.TemplateResponse(request, "index.html", context)
    response.set_cookie(request.app.state.settings.session_cookie, session_id, httponly=True, samesite="lax")
    return response


@router.post("/tabs/{slug}", response_class=HTMLResponse)
async def select_tab(request: Request, slug: str) -> RedirectResponse:
    session_id, shell = _session_shell(request)
    try:
        shell.select(slug)
    except KeyError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown tool: {slug}") from exc
    return _redirect_home(request, session_id)


@router.post("/tools/{slug}", response_class=HTMLResponse)
async def submit_tool(request: Request, slug: str) -> RedirectResponse:
    try:
        find_tab(slug)
    except KeyError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown tool: {slug}") from exc

    session_id, shell = _session_shell(request)
    panel = shell.panel_for(slug)
    if panel is None:
        logger.info("Ignoring submission for %s; it is not the mounted panel", slug)
        return _redirect_home(request, session_id)

    form = await request.form()
    try:
        panel.apply_form(form)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Invalid option: {exc}") from exc

    logger.info("Tool submission tool=%s session=%s", slug, session_id)
    await panel.submit()
    return _redirect_home(request, session_id)


@router.post("/api/tools/{slug}", response_model=ToolRunResult)
async def api_run_tool(request: Request, slug: str, payload: ToolRunRequest) -> ToolRunResult:
    """
    JSON API running one request on a fresh panel.

    Nothing is kept between calls; conversation tools return only the
    latest reply.
    """
    gateway: ModelGateway = request.app.state.gateway
    try:
        panel = create_panel(slug, gateway)
    except KeyError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown tool: {slug}") from exc

    if not gateway.is_available():
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Model is not configured. Set GEMINI_API_KEY.",
        )
    if not payload.text.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Text must not be empty.")

    try:
        panel.apply_form({**payload.options, "text": payload.text})
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Invalid option: {exc}") from exc

    logger.info("API tool run tool=%s", slug)
    outcome = await panel.submit()
    return ToolRunResult(tool=slug, status=panel.status.value, outcome=outcome.to_dict())


@router.get("/health")
async def health(request: Request) -> JSONResponse:
    available = request.app.state.gateway.is_available()
    outcome = {
        "status": "ok" if available else "degraded",
        "model": "available" if available else "unavailable",
    }
    logger.info("Health check result: %s", outcome)
    return JSONResponse(content=outcome)


def create_app(settings: Optional[Settings] = None, gateway: Optional[ModelGateway] = None) -> FastAPI:
    settings = settings or get_settings()
    gateway = gateway or ModelGateway.from_settings(settings)

    app = FastAPI(title="Programming Helper", version="0.1.0")
    app.state.settings = settings
    app.state.gateway = gateway
    app.state.sessions = ShellSessions(gateway, max_sessions=settings.max_sessions)
    app.mount("/static", StaticFiles(directory=str(BASE_DIR / "static")), name="static")
    app.include_router(router)
    return app


app = create_app()
