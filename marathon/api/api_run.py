from fastapi import (
    FastAPI,
    Request,
    Query,
    Form,
    APIRouter,
    Depends,
)
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.sessions import SessionMiddleware
from pydantic import ValidationError

from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Optional
from urllib.parse import quote
import logging
import secrets

from marathon.api.deps import (
    get_plan_repository, get_user_repository, optional_principal, require_principal, sign_in,
)
from marathon.api.routes import auth, plans
from marathon.domain.User import Principal
from marathon.domain.errors import PlanError, InvalidParameter, NotFound, AccessDenied, InconsistentState
from marathon.domain.money import format_money
from marathon.events.web_observers import start as start_event_observers, get_events as get_web_events
from marathon.infra.Plan_Repository import PlanRepository
from marathon.infra.User_Repository import UserRepository, UserExists
from marathon.logic.plans import lifecycle
from marathon.logic.reporting.statistics import calculate_plan_stats, summarize_plans
from marathon.utilities import config
from marathon.utilities.constants import MAX_DAYS, MIN_PASSWORD_LENGTH
from marathon.utilities.validators import RegisterInput

# Logging
logger = logging.getLogger("marathon_app")

ERROR_STATUS = {
    InvalidParameter: 400,
    AccessDenied: 403,
    NotFound: 404,
    InconsistentState: 500,
}

router = APIRouter()

# Templates
templates = Jinja2Templates(directory=str(config.TEMPLATES_DIR))
templates.env.filters["money"] = format_money


def _ts() -> int:
    """Cache-busting timestamp for static assets."""
    return int(datetime.now().timestamp())


def _redirect(url: str, notice: Optional[str] = None) -> RedirectResponse:
    if notice:
        url = f"{url}?notice={quote(notice)}"
    return RedirectResponse(url=url, status_code=303)


# -------------------- Error handlers --------------------
async def _plan_error_handler(request: Request, exc: PlanError):
    status = next((code for cls, code in ERROR_STATUS.items() if isinstance(exc, cls)), 500)
    if isinstance(exc, InconsistentState):
        logger.error("Inconsistent plan data on %s: %s", request.url.path, exc.message)
    return JSONResponse(status_code=status, content={"message": exc.message})


async def _http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.detail},
                        headers=getattr(exc, "headers", None))


async def _validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(p) for p in first.get("loc", ())[1:])
    message = first.get("msg", "Invalid request")
    return JSONResponse(status_code=400, content={
        "message": f"{field}: {message}" if field else message,
    })


# -------------------- Health & events --------------------
@router.get("/health")
def health():
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


@router.get("/api/events")
def api_events(since: Optional[int] = Query(default=None),
               principal: Principal = Depends(require_principal)):
    return get_web_events(since, user_id=principal.id)


# -------------------- UI PAGES --------------------
@router.get("/login", response_class=HTMLResponse)
def login_page(request: Request, notice: Optional[str] = Query(default=None)):
    return templates.TemplateResponse(request, "login.html", {
        "notice_message": notice,
        "min_password_length": MIN_PASSWORD_LENGTH,
        "time": _ts(),
    })


@router.post("/login")
def login_form(request: Request, email: str = Form(...), password: str = Form(...),
               users: UserRepository = Depends(get_user_repository)):
    user = auth.authenticate(users, email, password)
    if user is None:
        return _redirect("/login", "Invalid email or password")
    sign_in(request, user.principal())
    return _redirect("/")


@router.post("/register")
def register_form(request: Request, name: str = Form(...), email: str = Form(...),
                  password: str = Form(...),
                  users: UserRepository = Depends(get_user_repository)):
    try:
        payload = RegisterInput(name=name, email=email, password=password)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(p) for p in first.get("loc", ()))
        return _redirect("/login", f"{field}: {first.get('msg', 'Invalid input')}")
    try:
        user = auth.register_user(users, payload.name, payload.email, payload.password)
    except UserExists:
        return _redirect("/login", "User already exists")
    sign_in(request, user.principal())
    return _redirect("/")


@router.get("/logout")
def logout(request: Request):
    request.session.clear()
    return _redirect("/login")


@router.get("/", response_class=HTMLResponse)
def dashboard(request: Request, notice: Optional[str] = Query(default=None),
              repo: PlanRepository = Depends(get_plan_repository),
              principal: Optional[Principal] = Depends(optional_principal)):
    if principal is None:
        return _redirect("/login")
    user_plans = lifecycle.list_plans(repo, principal)
    cards = []
    for plan in user_plans:
        entries = repo.get_day_entries(plan.id)
        cards.append({"plan": plan, "stats": calculate_plan_stats(plan, entries)})
    return templates.TemplateResponse(request, "index.html", {
        "user": principal,
        "cards": cards,
        "summary": summarize_plans(user_plans),
        "max_days": MAX_DAYS,
        "notice_message": notice,
        "time": _ts(),
    })


@router.post("/plans")
def create_plan_form(name: str = Form(...), start_wager: str = Form(...), odds: str = Form(...),
                     days: int = Form(...),
                     repo: PlanRepository = Depends(get_plan_repository),
                     principal: Optional[Principal] = Depends(optional_principal)):
    if principal is None:
        return _redirect("/login")
    try:
        plan, _ = lifecycle.create_plan(repo, principal, name, Decimal(start_wager.strip()),
                                        Decimal(odds.strip()), days)
    except InvalidOperation:
        return _redirect("/", "Start wager and odds must be numbers")
    except PlanError as e:
        return _redirect("/", e.message)
    return _redirect(f"/plans/{plan.id}")


@router.get("/plans/{plan_id}", response_class=HTMLResponse)
def plan_page(request: Request, plan_id: str, notice: Optional[str] = Query(default=None),
              repo: PlanRepository = Depends(get_plan_repository),
              principal: Optional[Principal] = Depends(optional_principal)):
    if principal is None:
        return _redirect("/login")
    try:
        plan, entries, stats = lifecycle.get_plan_detail(repo, principal, plan_id)
    except (NotFound, AccessDenied) as e:
        return _redirect("/", e.message)
    return templates.TemplateResponse(request, "plan_detail.html", {
        "user": principal,
        "plan": plan,
        "entries": entries,
        "stats": stats,
        "notice_message": notice,
        "time": _ts(),
    })


@router.post("/plans/{plan_id}/days/{day}")
def update_day_form(plan_id: str, day: int, result: str = Form(...),
                    repo: PlanRepository = Depends(get_plan_repository),
                    principal: Optional[Principal] = Depends(optional_principal)):
    if principal is None:
        return _redirect("/login")
    try:
        plan, _ = lifecycle.update_day_result(repo, principal, plan_id, day, result)
    except PlanError as e:
        return _redirect(f"/plans/{plan_id}", e.message)
    return _redirect(f"/plans/{plan_id}", f"Day {day} recorded as {result}. Plan is {plan.status}.")


@router.post("/plans/{plan_id}/restart")
def restart_form(plan_id: str, day: int = Form(...),
                 repo: PlanRepository = Depends(get_plan_repository),
                 principal: Optional[Principal] = Depends(optional_principal)):
    if principal is None:
        return _redirect("/login")
    try:
        lifecycle.restart_plan(repo, principal, plan_id, day)
    except PlanError as e:
        return _redirect(f"/plans/{plan_id}", e.message)
    return _redirect(f"/plans/{plan_id}", f"Plan restarted from day {day}.")


@router.post("/plans/{plan_id}/delete")
def delete_form(plan_id: str,
                repo: PlanRepository = Depends(get_plan_repository),
                principal: Optional[Principal] = Depends(optional_principal)):
    if principal is None:
        return _redirect("/login")
    try:
        lifecycle.delete_plan(repo, principal, plan_id)
    except PlanError as e:
        return _redirect("/", e.message)
    return _redirect("/", "Plan deleted.")


# -------------------- App factory --------------------
def create_app(data_dir: Optional[Path] = None) -> FastAPI:
    """Build the application around repositories rooted at data_dir (config.DATA_DIR by default)."""
    app = FastAPI(title="Money Marathon API")
    app.state.plan_repository = PlanRepository(data_dir)
    app.state.user_repository = UserRepository(data_dir)

    secret = config.SESSION_SECRET
    if not secret:
        secret = secrets.token_hex(32)
        logger.warning("SESSION_SECRET not set; using a random key, sessions end on restart.")
    app.add_middleware(
        SessionMiddleware,
        secret_key=secret,
        session_cookie=config.SESSION_COOKIE,
        max_age=config.SESSION_MAX_AGE,
        same_site="lax",
        https_only=config.SESSION_HTTPS_ONLY,
    )

    app.add_exception_handler(PlanError, _plan_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)

    app.include_router(auth.router)
    app.include_router(plans.router)
    app.include_router(router)

    app.mount("/static", StaticFiles(directory=str(config.STATIC_DIR)), name="static")

    start_event_observers()
    logger.info("Web observers for plan events started")
    return app


app = create_app()
