# app/main.py
import json
import logging
from typing import Optional, Any

from fastapi import FastAPI, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, get_settings
from .core import ProductAPIError, ProductValidationError, parse_page_params
from .database import ProductStore, seed_products
from .logging_config import setup_logging
from .models import Product, ProductPage, DeleteResult, ProductStats, Message
from .security import require_api_key
from .services import (
    list_products_logic, get_product_logic, create_product_logic,
    update_product_logic, delete_product_logic, product_stats_logic
)

logger = logging.getLogger("app")

WELCOME_TEXT = "Welcome to the Product API! Visit /api/products to view products."

ERROR_RESPONSES = {
    400: {"model": Message},
    401: {"model": Message},
    404: {"model": Message},
}


def get_store(request: Request) -> ProductStore:
    return request.app.state.store


def _reject_constant(name: str):
    raise ValueError(f"{name} is not valid JSON")


async def _read_json(request: Request) -> Any:
    raw = await request.body()
    if not raw:
        return None
    try:
        # NaN and Infinity are not JSON
        return json.loads(raw, parse_constant=_reject_constant)
    except ValueError:
        raise ProductValidationError("Malformed JSON body")


def _message(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message}, headers=headers)


# ---------------------------
# Error handlers
# ---------------------------
def register_error_handlers(app: FastAPI) -> None:

    @app.exception_handler(ProductAPIError)
    async def product_error_handler(request: Request, exc: ProductAPIError):
        return _message(exc.status, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return _message(exc.status_code, str(exc.detail), getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        detail = "; ".join(
            f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        return _message(400, detail or "Invalid request")

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("unhandled error on %s %s", request.method, request.url.path)
        status = getattr(exc, "status", None)
        if not isinstance(status, int):
            status = 500
        return _message(status, getattr(exc, "message", None) or "Internal Server Error")


# ---------------------------
# App factory
# ---------------------------
def create_app(settings: Optional[Settings] = None, store: Optional[ProductStore] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(title=settings.APP_NAME, version=settings.APP_VERSION)
    app.state.settings = settings
    app.state.store = store if store is not None else ProductStore(seed_products())

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        target = request.url.path
        if request.url.query:
            target += "?" + request.url.query
        logger.info("%s %s", request.method, target)
        return await call_next(request)

    register_error_handlers(app)

    @app.get("/", response_class=PlainTextResponse)
    async def root():
        return WELCOME_TEXT

    # ---------------------------
    # Product endpoints
    # ---------------------------
    @app.get("/api/products", response_model=ProductPage, responses=ERROR_RESPONSES)
    async def list_products(category: Optional[str] = None, search: Optional[str] = None,
                            page: Optional[str] = None, limit: Optional[str] = None,
                            store: ProductStore = Depends(get_store)):
        params = parse_page_params(page, limit, default_limit=settings.DEFAULT_PAGE_SIZE)
        return list_products_logic(store, params, category=category, search=search)

    # registered ahead of /{product_id} so "stats" is not taken for an id
    @app.get("/api/products/stats", response_model=ProductStats)
    async def product_stats(store: ProductStore = Depends(get_store)):
        return product_stats_logic(store)

    @app.get("/api/products/{product_id}", response_model=Product, responses=ERROR_RESPONSES)
    async def get_product(product_id: str, store: ProductStore = Depends(get_store)):
        return get_product_logic(store, product_id)

    # ---------------------------
    # Protected endpoints
    # ---------------------------
    @app.post("/api/products", status_code=201, response_model=Product,
              responses=ERROR_RESPONSES, dependencies=[Depends(require_api_key)])
    async def create_product(request: Request, store: ProductStore = Depends(get_store)):
        payload = await _read_json(request)
        return create_product_logic(store, payload)

    @app.put("/api/products/{product_id}", response_model=Product,
             responses=ERROR_RESPONSES, dependencies=[Depends(require_api_key)])
    async def update_product(product_id: str, request: Request, store: ProductStore = Depends(get_store)):
        payload = await _read_json(request)
        return update_product_logic(store, product_id, payload)

    @app.delete("/api/products/{product_id}", response_model=DeleteResult,
                responses=ERROR_RESPONSES, dependencies=[Depends(require_api_key)])
    async def delete_product(product_id: str, store: ProductStore = Depends(get_store)):
        return delete_product_logic(store, product_id)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
