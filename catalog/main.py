# catalog/main.py
from typing import Any, Dict, List, Optional

import uvicorn
from fastapi import APIRouter, Depends, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from .config import Settings
from .database import ProductStore, seed_products
from .errors import ApiError, Failure, SearchQueryMissing, install_error_handlers
from .logger import setup_logger
from .logic import (
    create_product_logic,
    delete_product_logic,
    get_product_logic,
    list_products_logic,
    product_stats_logic,
    search_products_logic,
    update_product_logic,
)
from .middleware import install_access_log, json_body, require_api_key, validated_product
from .models import Product

router = APIRouter()

# Mutating routes: body parser, then API key, then (via the handler's payload) validation
WRITE_STEPS = [Depends(json_body), Depends(require_api_key)]


def get_store(request: Request) -> ProductStore:
    return request.app.state.store


def _unwrap(result):
    if isinstance(result, Failure):
        raise ApiError(result)
    return result


@router.get("/", response_class=PlainTextResponse)
async def hello():
    return "Hello World!"


# ---------------------------
# Read endpoints
# ---------------------------
@router.get("/api/products", response_model=List[Product])
async def list_products(
    category: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    store: ProductStore = Depends(get_store),
):
    return await list_products_logic(store, category, page, limit)


# /search and /stats must stay above /{product_id}
@router.get("/api/products/search", response_model=List[Product])
async def search_products(q: Optional[str] = None, store: ProductStore = Depends(get_store)):
    if not q:
        raise SearchQueryMissing()
    return await search_products_logic(store, q)


@router.get("/api/products/stats", response_model=Dict[str, int])
async def product_stats(store: ProductStore = Depends(get_store)):
    return await product_stats_logic(store)


@router.get("/api/products/{product_id}", response_model=Product)
async def get_product(product_id: str, store: ProductStore = Depends(get_store)):
    return _unwrap(await get_product_logic(store, product_id))


# ---------------------------
# Write endpoints
# ---------------------------
@router.post("/api/products", response_model=Product, status_code=201, dependencies=WRITE_STEPS)
async def create_product(
    payload: Dict[str, Any] = Depends(validated_product),
    store: ProductStore = Depends(get_store),
):
    return _unwrap(await create_product_logic(store, payload))


@router.put("/api/products/{product_id}", response_model=Product, dependencies=WRITE_STEPS)
async def update_product(
    product_id: str,
    payload: Dict[str, Any] = Depends(validated_product),
    store: ProductStore = Depends(get_store),
):
    return _unwrap(await update_product_logic(store, product_id, payload))


@router.delete(
    "/api/products/{product_id}",
    status_code=204,
    response_class=Response,
    dependencies=[Depends(require_api_key)],
)
async def delete_product(product_id: str, store: ProductStore = Depends(get_store)):
    _unwrap(await delete_product_logic(store, product_id))
    return Response(status_code=204)


def create_app(settings: Optional[Settings] = None, store: Optional[ProductStore] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    logger = setup_logger(settings.log_level, settings.log_dir)

    app = FastAPI(title="product-catalog (in-memory demo)")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    install_access_log(app, logger)
    install_error_handlers(app, logger)

    app.state.settings = settings
    if store is None:
        store = ProductStore(seed_products() if settings.seed else ())
    app.state.store = store

    app.include_router(router)
    return app


app = create_app()


def run() -> None:
    settings: Settings = app.state.settings
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
