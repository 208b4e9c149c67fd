"""
FastAPI Application Entry Point

Canteen Ordering - order store API.

Endpoints:
    - GET /api/menu: Menu, optionally by category
    - GET /api/menu/{item_id}: Single menu item
    - POST /api/orders: Place an order
    - GET /api/orders: List all orders, newest first
    - GET /api/orders/{token}: Look up an order by token
    - POST /api/orders/complete: Mark an order completed (token in body)
    - POST /api/orders/{token}/complete: Mark an order completed
    - GET /health: System health check

Each application instance owns its OrderStore (app.state.order_store);
orders live in memory and are gone when the process stops.

Run with:
    uvicorn canteen.main:app --port 8001
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Query, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from canteen.core.config import Settings, get_settings, setup_logging
from canteen.menu import get_menu, get_menu_item
from canteen.schemas import (
    CompleteOrderRequest,
    CompleteOrderResponse,
    CreateOrderRequest,
    ErrorResponse,
    HealthResponse,
    MenuCategory,
    MenuItem,
    Order,
)
from canteen.store import OrderStore

logger = logging.getLogger(__name__)

router = APIRouter()


def get_order_store(request: Request) -> OrderStore:
    """Dependency returning the store owned by the running app."""
    return request.app.state.order_store


# =============================================================================
# APPLICATION LIFECYCLE
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application startup and shutdown events.
    """
    settings: Settings = app.state.settings

    logger.info("=" * 60)
    logger.info(f"🚀 Starting {settings.app_name}")
    logger.info(f"   Version: {settings.app_version}")
    logger.info(f"   Environment: {settings.env_mode.value}")
    logger.info(f"   Debug: {settings.debug}")
    logger.info(f"   Unique tokens: {settings.unique_tokens}")
    logger.info("=" * 60)

    yield

    logger.info(f"Shutting down with {len(app.state.order_store)} orders in memory")


# =============================================================================
# ROOT & HEALTH ENDPOINTS
# =============================================================================

@router.get("/", tags=["Root"])
async def root(request: Request) -> dict[str, str]:
    """API root with navigation links."""
    settings: Settings = request.app.state.settings
    return {
        "message": f"🍜 Welcome to {settings.restaurant_name}",
        "version": settings.app_version,
        "environment": settings.env_mode.value,
        "documentation": "/docs",
        "menu": "/api/menu",
        "orders": "/api/orders",
        "health": "/health",
    }


@router.get(
    "/health",
    response_model=HealthResponse,
    tags=["Health"],
    summary="System Health Check",
)
async def health_check(
    request: Request,
    store: OrderStore = Depends(get_order_store),
) -> HealthResponse:
    """Report the store size and environment."""
    settings: Settings = request.app.state.settings
    return HealthResponse(
        status="operational",
        environment=settings.env_mode.value,
        orders=len(store),
        timestamp=datetime.now(timezone.utc),
    )


# =============================================================================
# MENU ENDPOINTS
# =============================================================================

@router.get(
    "/api/menu",
    response_model=list[MenuItem],
    tags=["Menu"],
    summary="List Menu",
)
async def list_menu(
    category: Optional[MenuCategory] = Query(None),
) -> list[MenuItem]:
    """Return the menu, optionally limited to one category."""
    return get_menu(category)


@router.get(
    "/api/menu/{item_id}",
    response_model=MenuItem,
    responses={404: {"model": ErrorResponse}},
    tags=["Menu"],
)
async def read_menu_item(item_id: str) -> MenuItem:
    """Get a specific menu item by id."""
    item = get_menu_item(item_id)
    if item is None:
        raise HTTPException(status_code=404, detail=f"Menu item '{item_id}' not found")
    return item


# =============================================================================
# ORDER API ENDPOINTS
# =============================================================================

@router.post(
    "/api/orders",
    response_model=Order,
    status_code=status.HTTP_201_CREATED,
    tags=["Orders"],
    summary="Create Order",
)
async def create_order(
    order_data: CreateOrderRequest,
    store: OrderStore = Depends(get_order_store),
) -> Order:
    """
    Place a new order.

    The total is stored exactly as sent; it is not recomputed from the
    item prices.
    """
    logger.info(f"Creating order for: {order_data.customer_name}")

    return store.create_order(
        items=order_data.items,
        customer_name=order_data.customer_name,
        customer_phone=order_data.customer_phone,
        total=order_data.total,
    )


@router.get(
    "/api/orders",
    response_model=list[Order],
    tags=["Orders"],
    summary="List Orders",
)
async def list_orders(
    store: OrderStore = Depends(get_order_store),
) -> list[Order]:
    """Retrieve every order, most recent first."""
    return store.get_orders()


@router.get(
    "/api/orders/{token}",
    response_model=Order,
    responses={404: {"model": ErrorResponse}},
    tags=["Orders"],
)
async def get_order(
    token: str,
    store: OrderStore = Depends(get_order_store),
) -> Order:
    """Get an order by token."""
    order = store.find(token)
    if order is None:
        raise HTTPException(status_code=404, detail=f"Order {token} not found")
    return order


@router.post(
    "/api/orders/complete",
    response_model=CompleteOrderResponse,
    tags=["Orders"],
    summary="Complete Order By Body",
)
async def complete_order_by_body(
    payload: CompleteOrderRequest,
    store: OrderStore = Depends(get_order_store),
) -> CompleteOrderResponse:
    """
    Mark an order as completed, token in the JSON body.

    Used by HttpOrderService: the token never has to survive a URL path,
    so empty tokens or tokens containing ``/`` or ``?`` still reach the
    store and come back as ``found: false``.
    """
    found = store.complete_order(payload.token)
    return CompleteOrderResponse(token=payload.token, found=found)


@router.post(
    "/api/orders/{token}/complete",
    response_model=CompleteOrderResponse,
    tags=["Orders"],
    summary="Complete Order",
)
async def complete_order(
    token: str,
    store: OrderStore = Depends(get_order_store),
) -> CompleteOrderResponse:
    """
    Mark an order as completed.

    Always answers 200; ``found`` tells whether the token matched an order.
    """
    found = store.complete_order(token)
    return CompleteOrderResponse(token=token, found=found)


# =============================================================================
# ERROR HANDLERS
# =============================================================================

async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all exception handler."""
    logger.exception(f"Unhandled exception: {exc}")
    settings: Settings = request.app.state.settings

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal Server Error",
            "detail": str(exc) if settings.debug else "An unexpected error occurred",
        },
    )


# =============================================================================
# APPLICATION INSTANCE
# =============================================================================

def create_app(
    store: Optional[OrderStore] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """
    Build the API around an order store.

    Args:
        store: Store to serve; a new empty one when omitted
        settings: Configuration; the cached settings when omitted
    """
    settings = settings or get_settings()

    application = FastAPI(
        title=settings.app_name,
        description="Menu, order placement and token-based order tracking.",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    application.state.settings = settings
    application.state.order_store = (
        store if store is not None else OrderStore(unique_tokens=settings.unique_tokens)
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.add_exception_handler(Exception, global_exception_handler)
    application.include_router(router)

    return application


setup_logging()
app = create_app()
