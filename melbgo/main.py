"""
MelbGo Backend - shared itinerary, expenses, bookings and checklist for one trip

ARCHITECTURE:
- One trip document, kept live by TripStateController (Supabase Realtime,
  or an in-memory store when Supabase is not configured)
- Edits apply locally at once and persist in the background (last writer wins)
- Anyone can read; edits need the shared trip password (HttpOnly cookie marker)
- Read-only edit requests are accepted but ignored (applied=false)
- Gemini travel tips, rate limited per client IP
"""
import logging
from contextlib import asynccontextmanager
from datetime import date
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from .config import settings
from .core import AccessGate, TripStateController
from .middleware import CustomTimeoutMiddleware, SecurityHeadersMiddleware
from .middleware.auth import get_access_gate, store_marker
from .models import (
    DAYS,
    EXPENSE_CATEGORIES,
    EXPENSES,
    LINKS,
    TODO_CATEGORIES,
    TODOS,
    dump_collection,
)
from .schemas.request import (
    CategoryRequest,
    LogoutRequest,
    MemoRequest,
    SuggestionRequest,
    TodoRequest,
    UnlockRequest,
)
from .schemas.response import (
    AuthStatusResponse,
    BalanceResponse,
    ConversionResponse,
    CurrentDayResponse,
    ErrorResponse,
    MutationResponse,
    NavigationResponse,
    SettlementResponse,
    SuggestionResponse,
    TodoSummaryResponse,
    TripStateResponse,
)
from .services.balance import aud_to_twd, compute_balances, settle, twd_to_aud
from .services.categories import add_category
from .services.errors import UnknownRecordError
from .services.expenses import ExpenseDraft, add_expense, delete_expense_category, remove_expense
from .services.itinerary import (
    EventDraft,
    delete_event,
    find_event,
    navigation_url,
    save_event,
    select_initial_day,
    update_memo,
)
from .services.links import (
    LinkDraft,
    LinkSource,
    add_link,
    collect_links,
    delete_link_entry,
    dump_link_entries,
    save_link_entry,
)
from .services.todos import (
    add_todo,
    delete_todo,
    delete_todo_category,
    group_todos,
    progress,
    toggle_todo,
)
from .store import DocumentStore, InMemoryDocumentStore
from .store.supabase_store import SupabaseDocumentStore
from .tools.gemini_suggestions import SuggestionService
from .utils.rate_limiter import InMemoryRateLimiter

logging.basicConfig(
    level=settings.log_level.upper(),
    format='%(asctime)s - %(levelname)s - %(name)s - %(message)s',
)
logger = logging.getLogger(__name__)


def build_store() -> DocumentStore:
    """Supabase when configured, otherwise a process-local store"""
    if settings.supabase_configured:
        logger.info(f"Using Supabase table '{settings.trips_table}' for trip storage")
        return SupabaseDocumentStore(settings.supabase_url, settings.supabase_key, settings.trips_table)
    logger.warning("⚠️ SUPABASE_URL/SUPABASE_KEY not set - using in-memory trip store (lost on restart)")
    return InMemoryDocumentStore()


@asynccontextmanager
async def lifespan(app: FastAPI):
    controller = TripStateController(build_store(), settings.trip_id)
    await controller.start()
    app.state.controller = controller
    app.state.suggestions = SuggestionService()
    yield
    await controller.stop()


app = FastAPI(
    title="MelbGo API",
    description="Shared itinerary, split bills, bookings and checklist for the Melbourne trip",
    version="1.0.0",
    lifespan=lifespan,
)

# Suggestions call a paid API: cap requests per client IP
rate_limiter = InMemoryRateLimiter(max_requests=settings.suggestions_per_hour)

# Middleware (bottom to top execution)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(CustomTimeoutMiddleware, timeout_seconds=settings.request_timeout_seconds)

allowed_origins_list = [origin.strip() for origin in settings.allowed_origins.split(",")]
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "X-Trip-Key"],
)


# ---------------------------------------------------------------------------
# Dependencies & error handling
# ---------------------------------------------------------------------------

def get_controller(request: Request) -> TripStateController:
    return request.app.state.controller


def get_suggestion_service(request: Request) -> SuggestionService:
    return request.app.state.suggestions


@app.exception_handler(UnknownRecordError)
async def unknown_record_handler(request: Request, exc: UnknownRecordError):
    return JSONResponse(
        status_code=404,
        content={"detail": {
            "error": "NotFound",
            "message": str(exc),
            "details": {"kind": exc.kind, "id": exc.record_id},
        }},
    )


@app.exception_handler(ValidationError)
async def record_validation_handler(request: Request, exc: ValidationError):
    """Edits that would produce an invalid record (e.g. a flight without details)"""
    return JSONResponse(
        status_code=422,
        content={"detail": {
            "error": "ValidationError",
            "message": "Edit produces an invalid record",
            "details": {"errors": exc.errors(include_url=False, include_context=False, include_input=False)},
        }},
    )


def _collection(controller: TripStateController, key: str) -> list:
    return dump_collection(key, controller.get(key))


def _mutation(controller: TripStateController, key: str, applied: bool) -> MutationResponse:
    return MutationResponse(applied=applied, data=_collection(controller, key))


# ---------------------------------------------------------------------------
# Status
# ---------------------------------------------------------------------------

@app.get("/")
async def root():
    """Health check endpoint"""
    return {"status": "ok", "message": "MelbGo API is running"}


@app.get("/health")
async def health(controller: TripStateController = Depends(get_controller)):
    """Health check endpoint; reports the live sync connection"""
    return {"status": "healthy", "connection": controller.connection_status}


@app.get("/trip", response_model=TripStateResponse)
async def get_trip(
    controller: TripStateController = Depends(get_controller),
    gate: AccessGate = Depends(get_access_gate),
):
    """
    Full trip state for the initial render

    Returns:
        All six collections, sync status and the caller's access state
    """
    snapshot = controller.snapshot()
    return TripStateResponse(
        trip=snapshot.trip.model_dump(mode="json", by_alias=True, exclude_none=True),
        loading=snapshot.loading,
        connection_status=snapshot.connection_status,
        collection_states=snapshot.collection_states,
        access=gate.state,
    )


# ---------------------------------------------------------------------------
# Access gate
# ---------------------------------------------------------------------------

@app.get("/auth/status", response_model=AuthStatusResponse)
async def auth_status(gate: AccessGate = Depends(get_access_gate)):
    return AuthStatusResponse(access=gate.state)


@app.post(
    "/auth/unlock",
    response_model=AuthStatusResponse,
    responses={401: {"model": ErrorResponse}},
)
async def unlock(
    request: UnlockRequest,
    response: Response,
    gate: AccessGate = Depends(get_access_gate),
):
    """
    Unlock editing on this device and remember it in an HttpOnly cookie

    Raises:
        HTTPException: If the password is wrong
    """
    if not gate.unlock(request.password):
        raise HTTPException(
            status_code=401,
            detail={
                "error": "Unauthorized",
                "message": "Wrong trip password",
                "details": {}
            }
        )
    store_marker(response, gate)
    return AuthStatusResponse(access=gate.state)


@app.post("/auth/logout", response_model=AuthStatusResponse)
async def logout(
    request: LogoutRequest,
    response: Response,
    gate: AccessGate = Depends(get_access_gate),
):
    """Return to read-only; ignored unless `confirm` is true"""
    if gate.logout(request.confirm):
        store_marker(response, gate)
    return AuthStatusResponse(access=gate.state)


# ---------------------------------------------------------------------------
# Itinerary
# ---------------------------------------------------------------------------

@app.get("/days")
async def list_days(controller: TripStateController = Depends(get_controller)):
    return _collection(controller, DAYS)


@app.get("/days/today", response_model=CurrentDayResponse)
async def current_day(
    on: Optional[date] = Query(None, description="Date to resolve (defaults to today)"),
    controller: TripStateController = Depends(get_controller),
):
    """Day the itinerary should open on"""
    days = controller.get(DAYS)
    index = select_initial_day(days, on or date.today())
    return CurrentDayResponse(day_index=index, date=days[index].date if days else None)


@app.post("/days/{day_index}/events", response_model=MutationResponse, responses={404: {"model": ErrorResponse}})
async def create_event(
    day_index: int,
    draft: EventDraft,
    controller: TripStateController = Depends(get_controller),
    gate: AccessGate = Depends(get_access_gate),
):
    applied = controller.apply_mutation(DAYS, lambda days: save_event(days, day_index, draft), gate)
    return _mutation(controller, DAYS, applied)


@app.put("/days/{day_index}/events/{event_id}", response_model=MutationResponse, responses={404: {"model": ErrorResponse}})
async def edit_event(
    day_index: int,
    event_id: str,
    draft: EventDraft,
    controller: TripStateController = Depends(get_controller),
    gate: AccessGate = Depends(get_access_gate),
):
    applied = controller.apply_mutation(DAYS, lambda days: save_event(days, day_index, draft, event_id), gate)
    return _mutation(controller, DAYS, applied)


@app.delete("/days/{day_index}/events/{event_id}", response_model=MutationResponse, responses={404: {"model": ErrorResponse}})
async def remove_event(
    day_index: int,
    event_id: str,
    controller: TripStateController = Depends(get_controller),
    gate: AccessGate = Depends(get_access_gate),
):
    applied = controller.apply_mutation(DAYS, lambda days: delete_event(days, day_index, event_id), gate)
    return _mutation(controller, DAYS, applied)


@app.put("/days/{day_index}/memo", response_model=MutationResponse, responses={404: {"model": ErrorResponse}})
async def save_memo(
    day_index: int,
    request: MemoRequest,
    controller: TripStateController = Depends(get_controller),
    gate: AccessGate = Depends(get_access_gate),
):
    """Save a day memo (clients call this on blur, not per keystroke)"""
    applied = controller.apply_mutation(DAYS, lambda days: update_memo(days, day_index, request.tips), gate)
    return _mutation(controller, DAYS, applied)


@app.get(
    "/days/{day_index}/events/{event_id}/navigation",
    response_model=NavigationResponse,
    responses={404: {"model": ErrorResponse}},
)
async def event_navigation(
    day_index: int,
    event_id: str,
    controller: TripStateController = Depends(get_controller),
):
    found_day, event = find_event(controller.get(DAYS), event_id)
    if found_day != day_index:
        raise UnknownRecordError("event", event_id)
    return NavigationResponse(url=navigation_url(event))


@app.post(
    "/suggestions",
    response_model=SuggestionResponse,
    responses={429: {"model": ErrorResponse}},
)
async def suggest(
    request: SuggestionRequest,
    req: Request,
    service: SuggestionService = Depends(get_suggestion_service),
):
    """
    Travel tip for a location and time of day

    Always answers 200 with some text; failures turn into a placeholder.

    Raises:
        HTTPException: If the client exceeded its suggestion quota
    """
    client_ip = req.client.host if req.client else "unknown"
    if not rate_limiter.is_allowed(client_ip):
        raise HTTPException(
            status_code=429,
            detail={
                "error": "RateLimitExceeded",
                "message": "Too many suggestion requests, try again later",
                "details": {"remaining": rate_limiter.get_remaining(client_ip)}
            }
        )
    text = await service.suggest(request.location, request.time_of_day)
    return SuggestionResponse(suggestion_text=text)


# ---------------------------------------------------------------------------
# Expenses
# ---------------------------------------------------------------------------

@app.get("/expenses")
async def list_expenses(controller: TripStateController = Depends(get_controller)):
    return _collection(controller, EXPENSES)


@app.post("/expenses", response_model=MutationResponse)
async def create_expense(
    draft: ExpenseDraft,
    controller: TripStateController = Depends(get_controller),
    gate: AccessGate = Depends(get_access_gate),
):
    applied = controller.apply_mutation(EXPENSES, lambda expenses: add_expense(expenses, draft), gate)
    return _mutation(controller, EXPENSES, applied)


@app.delete("/expenses/{expense_id}", response_model=MutationResponse, responses={404: {"model": ErrorResponse}})
async def delete_expense(
    expense_id: str,
    controller: TripStateController = Depends(get_controller),
    gate: AccessGate = Depends(get_access_gate),
):
    applied = controller.apply_mutation(EXPENSES, lambda expenses: remove_expense(expenses, expense_id), gate)
    return _mutation(controller, EXPENSES, applied)


@app.get("/expenses/balance", response_model=BalanceResponse)
async def expense_balance(
    rate: float = Query(settings.default_exchange_rate, gt=0, description="NT$ per A$1"),
    controller: TripStateController = Depends(get_controller),
):
    """Per-user AUD balances and who owes whom"""
    balances = compute_balances(controller.get(EXPENSES), rate)
    settlement = settle(balances, rate)
    return BalanceResponse(
        rate=rate,
        balances=balances,
        settlement=SettlementResponse(
            debtor=settlement.debtor,
            creditor=settlement.creditor,
            amount_aud=settlement.amount_aud,
            amount_twd=settlement.amount_twd,
            message=settlement.message,
        ),
    )


@app.get("/convert", response_model=ConversionResponse, responses={400: {"model": ErrorResponse}})
async def convert(
    aud: Optional[float] = Query(None),
    twd: Optional[float] = Query(None),
    rate: float = Query(settings.default_exchange_rate, gt=0),
):
    """Scratch AUD <-> TWD calculator, independent of the ledger"""
    if aud is not None:
        return ConversionResponse(rate=rate, aud=aud, twd=aud_to_twd(aud, rate))
    if twd is not None:
        return ConversionResponse(rate=rate, aud=twd_to_aud(twd, rate), twd=twd)
    raise HTTPException(
        status_code=400,
        detail={
            "error": "ValidationError",
            "message": "Provide either aud or twd",
            "details": {}
        }
    )


@app.get("/expense-categories")
async def list_expense_categories(controller: TripStateController = Depends(get_controller)):
    return _collection(controller, EXPENSE_CATEGORIES)


@app.post("/expense-categories", response_model=MutationResponse)
async def create_expense_category(
    request: CategoryRequest,
    controller: TripStateController = Depends(get_controller),
    gate: AccessGate = Depends(get_access_gate),
):
    applied = controller.apply_mutation(EXPENSE_CATEGORIES, lambda cats: add_category(cats, request.label), gate)
    return _mutation(controller, EXPENSE_CATEGORIES, applied)


@app.delete("/expense-categories/{category_id}", response_model=MutationResponse)
async def remove_expense_category(
    category_id: str,
    controller: TripStateController = Depends(get_controller),
    gate: AccessGate = Depends(get_access_gate),
):
    """Delete a user category; default categories are kept (applied=false)"""
    applied = delete_expense_category(controller, gate, category_id)
    return _mutation(controller, EXPENSE_CATEGORIES, applied)


# ---------------------------------------------------------------------------
# Links hub
# ---------------------------------------------------------------------------

def _links_view(controller: TripStateController) -> List[dict]:
    return dump_link_entries(collect_links(controller.get(DAYS), controller.get(LINKS)))


@app.get("/links")
async def list_links(controller: TripStateController = Depends(get_controller)):
    """Event booking links followed by stored links"""
    return _links_view(controller)


@app.post("/links", response_model=MutationResponse)
async def create_link(
    draft: LinkDraft,
    controller: TripStateController = Depends(get_controller),
    gate: AccessGate = Depends(get_access_gate),
):
    applied = controller.apply_mutation(LINKS, lambda links: add_link(links, draft), gate)
    return MutationResponse(applied=applied, data=_links_view(controller))


@app.put("/links/{source}/{link_id}", response_model=MutationResponse, responses={404: {"model": ErrorResponse}})
async def edit_link(
    source: LinkSource,
    link_id: str,
    draft: LinkDraft,
    controller: TripStateController = Depends(get_controller),
    gate: AccessGate = Depends(get_access_gate),
):
    """Edit a stored link, or the booking link of an itinerary event"""
    applied = save_link_entry(controller, gate, source, link_id, draft)
    return MutationResponse(applied=applied, data=_links_view(controller))


@app.delete("/links/{source}/{link_id}", response_model=MutationResponse, responses={404: {"model": ErrorResponse}})
async def remove_link_entry(
    source: LinkSource,
    link_id: str,
    controller: TripStateController = Depends(get_controller),
    gate: AccessGate = Depends(get_access_gate),
):
    """Delete a stored link, or detach the booking URL from an event"""
    applied = delete_link_entry(controller, gate, source, link_id)
    return MutationResponse(applied=applied, data=_links_view(controller))


# ---------------------------------------------------------------------------
# Checklist
# ---------------------------------------------------------------------------

@app.get("/todos")
async def list_todos(controller: TripStateController = Depends(get_controller)):
    return _collection(controller, TODOS)


@app.get("/todos/summary", response_model=TodoSummaryResponse)
async def todo_summary(controller: TripStateController = Depends(get_controller)):
    """Completion progress and items grouped by category"""
    todos = controller.get(TODOS)
    groups = group_todos(todos, controller.get(TODO_CATEGORIES))
    return TodoSummaryResponse(
        progress=progress(todos),
        groups={category: dump_collection(TODOS, items) for category, items in groups.items()},
    )


@app.post("/todos", response_model=MutationResponse)
async def create_todo(
    request: TodoRequest,
    controller: TripStateController = Depends(get_controller),
    gate: AccessGate = Depends(get_access_gate),
):
    applied = controller.apply_mutation(TODOS, lambda todos: add_todo(todos, request.text, request.category), gate)
    return _mutation(controller, TODOS, applied)


@app.post("/todos/{todo_id}/toggle", response_model=MutationResponse, responses={404: {"model": ErrorResponse}})
async def toggle(
    todo_id: str,
    controller: TripStateController = Depends(get_controller),
    gate: AccessGate = Depends(get_access_gate),
):
    applied = controller.apply_mutation(TODOS, lambda todos: toggle_todo(todos, todo_id), gate)
    return _mutation(controller, TODOS, applied)


@app.delete("/todos/{todo_id}", response_model=MutationResponse, responses={404: {"model": ErrorResponse}})
async def remove_todo(
    todo_id: str,
    controller: TripStateController = Depends(get_controller),
    gate: AccessGate = Depends(get_access_gate),
):
    applied = controller.apply_mutation(TODOS, lambda todos: delete_todo(todos, todo_id), gate)
    return _mutation(controller, TODOS, applied)


@app.get("/todo-categories")
async def list_todo_categories(controller: TripStateController = Depends(get_controller)):
    return _collection(controller, TODO_CATEGORIES)


@app.post("/todo-categories", response_model=MutationResponse)
async def create_todo_category(
    request: CategoryRequest,
    controller: TripStateController = Depends(get_controller),
    gate: AccessGate = Depends(get_access_gate),
):
    applied = controller.apply_mutation(TODO_CATEGORIES, lambda cats: add_category(cats, request.label), gate)
    return _mutation(controller, TODO_CATEGORIES, applied)


@app.delete("/todo-categories/{category_id}", response_model=MutationResponse)
async def remove_todo_category(
    category_id: str,
    controller: TripStateController = Depends(get_controller),
    gate: AccessGate = Depends(get_access_gate),
):
    """Delete a user category; its items move to the general "todo" category"""
    applied = delete_todo_category(controller, gate, category_id)
    return _mutation(controller, TODO_CATEGORIES, applied)
