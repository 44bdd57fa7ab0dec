"""ASGI application for FridgeRaider."""
# mypy: ignore-errors

from __future__ import annotations

import logging
from datetime import date
from time import perf_counter
from typing import Any, Optional
from uuid import uuid4

from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from pydantic import BaseModel, Field, field_validator
from sse_starlette.sse import EventSourceResponse

from fridgeraider import __version__, metrics
from fridgeraider.config import Settings, get_settings
from fridgeraider.errors import ConversationBusyError, FoodRejectedError, ItemNotFoundError
from fridgeraider.kitchen.expiry import ExpiryStatus, days_until, expiry_status
from fridgeraider.llm.gemini import build_model
from fridgeraider.llm.interface import GenerativeModel
from fridgeraider.logging_utils import configure_logging as configure_app_logging
from fridgeraider.models.chat import ChatMessage
from fridgeraider.models.inventory import InventoryItem
from fridgeraider.models.preferences import UserPreferences
from fridgeraider.server import deps, ui
from fridgeraider.state.prefetch import SyncState
from fridgeraider.state.session import KitchenSession
from fridgeraider.state.views import PlannerSnapshot, RecipesSnapshot, View

logger = logging.getLogger(__name__)


def _json_safe(value: Any) -> Any:
    """Convert non-serializable values into JSON-safe representations."""

    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    if isinstance(value, bytes):
        try:
            return value.decode("utf-8")
        except UnicodeDecodeError:
            return value.hex()
    if isinstance(value, (list, tuple)):
        return [_json_safe(entry) for entry in value]
    if isinstance(value, dict):
        return {key: _json_safe(sub_value) for key, sub_value in value.items()}
    return repr(value)


def _normalize_validation_errors(errors: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Ensure validation error payloads can be serialized to JSON."""

    return [{key: _json_safe(value) for key, value in error.items()} for error in errors]


def _configure_logging(settings: Settings) -> None:
    secrets = [settings.api_token or "", settings.gemini_api_key or ""]
    configure_app_logging(settings.log_level, settings.log_format, secrets)


class InventoryEntry(InventoryItem):
    """Inventory item annotated with its expiry classification."""

    expiry_status: ExpiryStatus
    days_left: int


def _inventory_entries(items: list[InventoryItem], today: Optional[date] = None) -> list[InventoryEntry]:
    today = today or date.today()
    return [
        InventoryEntry(
            **item.model_dump(),
            expiry_status=expiry_status(item.expiry_date, today),
            days_left=days_until(item.expiry_date, today),
        )
        for item in items
    ]


def create_app(model: Optional[GenerativeModel] = None) -> FastAPI:
    """Create and configure a FastAPI application instance.

    ``model`` overrides the backend chosen from settings (used by tests).
    """

    settings = get_settings()
    _configure_logging(settings)

    application = FastAPI(title="FridgeRaider", version=__version__)

    @application.on_event("startup")
    async def start_session() -> None:
        backend = model or build_model(get_settings())
        session = KitchenSession.load(backend, get_settings())
        application.state.session = session
        # Warm recipes and the plan for whatever inventory was persisted.
        session.prefetch.evaluate()

    @application.on_event("shutdown")
    async def stop_session() -> None:
        session: Optional[KitchenSession] = getattr(application.state, "session", None)
        if session is not None:
            await session.close()
            application.state.session = None

    application.include_router(ui.router)
    logger.debug("Application created with log level %s", settings.log_level)

    if settings.log_requests:
        access_logger = logging.getLogger("fridgeraider.access")

        @application.middleware("http")
        async def log_request_response(request: Request, call_next):
            """Log request/response details without leaking sensitive data."""

            request_id = request.headers.get("X-Request-ID") or uuid4().hex
            request.state.request_id = request_id
            start = perf_counter()
            path = request.url.path
            method = request.method
            try:
                response: Response = await call_next(request)
            except Exception:
                duration_ms = (perf_counter() - start) * 1000
                access_logger.exception(
                    "HTTP %s %s status=500 duration_ms=%.2f",
                    method,
                    path,
                    duration_ms,
                    extra={"request_id": request_id},
                )
                metrics.REQUEST_COUNT.labels(method=method, path=path, status="500").inc()
                metrics.REQUEST_LATENCY.labels(method=method, path=path).observe(
                    duration_ms / 1000.0
                )
                raise

            duration_ms = (perf_counter() - start) * 1000
            response.headers.setdefault("X-Request-ID", request_id)
            access_logger.info(
                "HTTP %s %s status=%s duration_ms=%.2f",
                method,
                path,
                response.status_code,
                duration_ms,
                extra={"request_id": request_id},
            )
            metrics.REQUEST_COUNT.labels(
                method=method,
                path=path,
                status=str(response.status_code),
            ).inc()
            metrics.REQUEST_LATENCY.labels(method=method, path=path).observe(duration_ms / 1000.0)
            return response

    @application.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        body_preview: str | None = None
        try:
            raw_body = await request.body()
            if raw_body:
                decoded = raw_body.decode("utf-8", errors="replace")
                if len(decoded) > 2048:
                    decoded = decoded[:2048] + "...(truncated)"
                body_preview = decoded
        except RuntimeError:
            body_preview = "<unable to read body>"

        log_kwargs: dict[str, Any] = {}
        request_id = getattr(request.state, "request_id", None)
        if request_id:
            log_kwargs["extra"] = {"request_id": request_id}

        logger.warning(
            "Validation error on %s %s: %s | body=%s",
            request.method,
            request.url.path,
            exc.errors(),
            body_preview,
            **log_kwargs,
        )
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": _normalize_validation_errors(exc.errors())},
        )

    @application.get("/view", response_model=ViewState, summary="Active view")
    def view_get(session: KitchenSession = Depends(deps.get_session)) -> ViewState:
        return ViewState(view=session.views.active)

    @application.put("/view", response_model=ViewState, summary="Navigate to a view")
    def view_update(
        payload: ViewState,
        auth: None = Depends(deps.require_api_token),
        session: KitchenSession = Depends(deps.get_session),
    ) -> ViewState:
        return ViewState(view=session.views.navigate(payload.view))

    @application.get(
        "/preferences",
        response_model=UserPreferences,
        summary="Current dietary preferences",
    )
    def preferences_get(session: KitchenSession = Depends(deps.get_session)) -> UserPreferences:
        return session.preferences.preferences

    @application.post(
        "/onboarding",
        response_model=UserPreferences,
        summary="Extract dietary tags from a free-text description",
    )
    async def onboarding_complete(
        payload: OnboardingRequest,
        auth: None = Depends(deps.require_api_token),
        session: KitchenSession = Depends(deps.get_session),
    ) -> UserPreferences:
        return await session.complete_onboarding(payload.text)

    @application.get(
        "/inventory",
        response_model=list[InventoryEntry],
        summary="List current inventory",
    )
    def inventory_list(session: KitchenSession = Depends(deps.get_session)) -> list[InventoryEntry]:
        return _inventory_entries(session.inventory.items)

    @application.post(
        "/inventory",
        response_model=InventoryEntry,
        status_code=status.HTTP_201_CREATED,
        summary="Validate and add an inventory item",
    )
    async def inventory_create(
        payload: InventoryCreateRequest,
        auth: None = Depends(deps.require_api_token),
        session: KitchenSession = Depends(deps.get_session),
    ) -> InventoryEntry:
        logger.debug("Creating inventory item payload=%s", payload.model_dump())
        try:
            item = await session.add_item(
                name=payload.name,
                quantity=payload.quantity,
                unit=payload.unit,
                expiry_date=payload.expiry_date,
            )
        except FoodRejectedError as exc:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
            ) from exc
        return _inventory_entries([item])[0]

    @application.delete(
        "/inventory/{item_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        summary="Delete inventory item",
    )
    async def inventory_delete(
        item_id: str,
        auth: None = Depends(deps.require_api_token),
        session: KitchenSession = Depends(deps.get_session),
    ) -> None:
        try:
            session.delete_item(item_id)
        except ItemNotFoundError as exc:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    @application.get("/recipes", response_model=RecipesSnapshot, summary="Suggested recipes")
    def recipes_get(session: KitchenSession = Depends(deps.get_session)) -> RecipesSnapshot:
        return session.recipes.snapshot(inventory_empty=session.inventory.is_empty())

    @application.post(
        "/recipes/refresh",
        response_model=RecipesSnapshot,
        summary="Generate a fresh set of recipes",
    )
    async def recipes_refresh(
        auth: None = Depends(deps.require_api_token),
        session: KitchenSession = Depends(deps.get_session),
    ) -> RecipesSnapshot:
        await session.refresh_recipes()
        return session.recipes.snapshot(inventory_empty=session.inventory.is_empty())

    @application.post(
        "/recipes/{recipe_id}/cook",
        response_model=list[InventoryEntry],
        summary="Cook a recipe, deducting its ingredients from inventory",
    )
    async def recipes_cook(
        recipe_id: str,
        auth: None = Depends(deps.require_api_token),
        session: KitchenSession = Depends(deps.get_session),
    ) -> list[InventoryEntry]:
        try:
            items = await session.cook(recipe_id)
        except ItemNotFoundError as exc:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
        return _inventory_entries(items)

    @application.get("/planner", response_model=PlannerSnapshot, summary="Current meal plan")
    def planner_get(session: KitchenSession = Depends(deps.get_session)) -> PlannerSnapshot:
        return session.planner.snapshot(inventory_empty=session.inventory.is_empty())

    @application.put(
        "/planner/days",
        response_model=PlannerSnapshot,
        summary="Change the plan length and fetch a new plan",
    )
    async def planner_days(
        payload: PlanDaysRequest,
        auth: None = Depends(deps.require_api_token),
        session: KitchenSession = Depends(deps.get_session),
    ) -> PlannerSnapshot:
        await session.set_plan_days(payload.days)
        return session.planner.snapshot(inventory_empty=session.inventory.is_empty())

    @application.post(
        "/planner/refresh",
        response_model=PlannerSnapshot,
        summary="Fetch a new plan (also used to retry after an error)",
    )
    async def planner_refresh(
        auth: None = Depends(deps.require_api_token),
        session: KitchenSession = Depends(deps.get_session),
    ) -> PlannerSnapshot:
        await session.refresh_plan()
        return session.planner.snapshot(inventory_empty=session.inventory.is_empty())

    @application.get("/sync", response_model=SyncStatus, summary="Background prefetch status")
    def sync_status(session: KitchenSession = Depends(deps.get_session)) -> SyncStatus:
        return SyncStatus(
            state=session.prefetch.state,
            dirty=session.prefetch.is_dirty(),
            items=len(session.inventory),
        )

    @application.get("/chat", response_model=list[ChatMessage], summary="Chat transcript")
    def chat_history(session: KitchenSession = Depends(deps.get_session)) -> list[ChatMessage]:
        return list(session.chat.messages)

    @application.post("/chat", response_model=ChatMessage, summary="Ask the assistant")
    async def chat_ask(
        payload: ChatRequest,
        auth: None = Depends(deps.require_api_token),
        session: KitchenSession = Depends(deps.get_session),
    ) -> ChatMessage:
        try:
            return await session.ask(payload.message)
        except ConversationBusyError as exc:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc

    @application.post("/chat/stream", summary="Ask the assistant with a streamed answer")
    async def chat_stream(
        payload: ChatRequest,
        auth: None = Depends(deps.require_api_token),
        session: KitchenSession = Depends(deps.get_session),
    ):
        try:
            events = session.ask_stream(payload.message)
        except ConversationBusyError as exc:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc

        async def event_generator():
            async for event in events:
                yield {"event": event.kind, "data": event.model_dump_json()}

        return EventSourceResponse(
            event_generator(),
            headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
        )

    @application.get("/metrics", include_in_schema=False)
    def metrics_endpoint() -> Response:
        payload = generate_latest()
        return Response(content=payload, media_type=CONTENT_TYPE_LATEST)

    return application


class ViewState(BaseModel):
    view: View


class OnboardingRequest(BaseModel):
    text: str = Field(min_length=1, max_length=2000)

    @field_validator("text")
    @classmethod
    def reject_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Describe your diet before continuing")
        return value.strip()


class InventoryCreateRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    quantity: float = Field(gt=0)
    unit: str = Field(default="g", min_length=1, max_length=16)
    expiry_date: date

    @field_validator("name")
    @classmethod
    def reject_blank_name(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Name must not be blank")
        return value.strip()


class PlanDaysRequest(BaseModel):
    days: int = Field(ge=1)


class SyncStatus(BaseModel):
    state: SyncState
    dirty: bool
    items: int


class ChatRequest(BaseModel):
    message: str = Field(min_length=1, max_length=4000)

    @field_validator("message")
    @classmethod
    def reject_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Message must not be blank")
        return value.strip()


app = create_app()

__all__ = ["app", "create_app"]
