# app/main.py
import json
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

import structlog
import uvicorn
from fastapi import Depends, FastAPI, Header, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, settings as default_settings
from .core import check_authorization
from .database import ProductStore
from .errors import APIError, ValidationFailed, error_envelope
from .handlers import (
    create_product_logic,
    delete_product_logic,
    get_product_logic,
    list_products_logic,
    update_product_logic,
)
from .logging_config import setup_logging
from .middleware import RequestLoggingMiddleware
from .security import build_verifier

logger = structlog.get_logger()

WELCOME_MESSAGE = "Welcome to the Product API! Go to /api/products to see all products."


# ---------------------------
# Dependencies
# ---------------------------
def get_store(request: Request) -> ProductStore:
    return request.app.state.store


def require_auth(request: Request, authorization: Optional[str] = Header(None)) -> Dict[str, Any]:
    return check_authorization(authorization, request.app.state.verifier)


async def _read_payload(request: Request) -> Any:
    body = await request.body()
    if not body:
        return {}
    try:
        return json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise ValidationFailed("Request body must be valid JSON")


# ---------------------------
# Exception handlers
# ---------------------------
async def api_error_handler(request: Request, exc: APIError):
    logger.info(
        "Request rejected",
        code=exc.code,
        error=exc.message,
        method=request.method,
        path=request.url.path,
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_envelope())


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    # unknown path, or known path with an unsupported method
    if exc.status_code in (404, 405):
        return JSONResponse(status_code=404, content=error_envelope("Endpoint not found", "NOT_FOUND"))
    code = "SERVER_ERROR" if exc.status_code >= 500 else "VALIDATION_ERROR"
    return JSONResponse(status_code=exc.status_code, content=error_envelope(str(exc.detail), code))


async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content=error_envelope("Invalid request parameters", "VALIDATION_ERROR"))


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(
        "Unhandled Exception",
        error=str(exc),
        exc_info=exc,
        method=request.method,
        path=request.url.path,
    )
    return JSONResponse(status_code=500, content=error_envelope("Internal server error", "SERVER_ERROR"))


# ---------------------------
# App factory
# ---------------------------
def create_app(settings: Optional[Settings] = None, store: Optional[ProductStore] = None) -> FastAPI:
    settings = settings or default_settings
    setup_logging(settings.log_level)

    if store is None:
        store = ProductStore.with_seed_data() if settings.seed_products else ProductStore()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Application startup", app_name=settings.app_name, products=len(app.state.store))
        yield
        logger.info("Application shutdown")

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store
    app.state.verifier = build_verifier(settings)

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins_list(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    @app.get("/", response_class=PlainTextResponse)
    async def root():
        return WELCOME_MESSAGE

    @app.get("/api/products")
    async def list_products(
        name: Optional[str] = None,
        category: Optional[str] = None,
        min_price: Optional[str] = Query(None, alias="minPrice"),
        max_price: Optional[str] = Query(None, alias="maxPrice"),
        in_stock: Optional[str] = Query(None, alias="inStock"),
        store: ProductStore = Depends(get_store),
    ):
        return await list_products_logic(
            store,
            name=name,
            category=category,
            min_price=min_price,
            max_price=max_price,
            in_stock=in_stock,
        )

    @app.get("/api/products/{product_id}")
    async def get_product(product_id: str, store: ProductStore = Depends(get_store)):
        return await get_product_logic(store, product_id)

    @app.post("/api/products", status_code=201, dependencies=[Depends(require_auth)])
    async def create_product(request: Request, store: ProductStore = Depends(get_store)):
        payload = await _read_payload(request)
        return await create_product_logic(store, payload)

    @app.put("/api/products/{product_id}", dependencies=[Depends(require_auth)])
    async def update_product(product_id: str, request: Request, store: ProductStore = Depends(get_store)):
        payload = await _read_payload(request)
        return await update_product_logic(store, product_id, payload)

    @app.delete("/api/products/{product_id}", dependencies=[Depends(require_auth)])
    async def delete_product(product_id: str, store: ProductStore = Depends(get_store)):
        return await delete_product_logic(store, product_id)

    return app


app = create_app()


def run():
    uvicorn.run(app, host=default_settings.host, port=default_settings.port, log_level=default_settings.log_level.lower())


if __name__ == "__main__":
    run()
