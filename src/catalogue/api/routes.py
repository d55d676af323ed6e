"""FastAPI endpoints for the Catalogue domain — menu and store locator."""

from fastapi import APIRouter, Query

from catalogue.api.schemas import (
    ProductListResponse,
    ProductResponse,
    SizePriceResponse,
    StoreListResponse,
)
from catalogue.product.browsing import filter_by_nutrition, get_product, list_products
from catalogue.product.product import ProductCategory
from catalogue.store.locator import find_stores

product_router = APIRouter(prefix="/products", tags=["products"])
store_router = APIRouter(prefix="/stores", tags=["stores"])


# --- Product endpoints ---


@product_router.get("", response_model=ProductListResponse)
async def get_products(category: ProductCategory | None = None) -> ProductListResponse:
    products = list_products(category.value if category else None)
    return ProductListResponse(products=[product.to_dict() for product in products])


@product_router.get("/nutrition", response_model=ProductListResponse)
async def get_products_by_nutrition(
    max_calories: float | None = Query(default=None, ge=0),
    max_fat: float | None = Query(default=None, ge=0),
    high_protein: bool = False,
    low_carbs: bool = False,
    # Browser clients send the camelCase names
    max_calories_alias: float | None = Query(default=None, ge=0, alias="maxCalories"),
    max_fat_alias: float | None = Query(default=None, ge=0, alias="maxFat"),
    high_protein_alias: bool = Query(default=False, alias="highProtein"),
    low_carbs_alias: bool = Query(default=False, alias="lowCarbs"),
) -> ProductListResponse:
    products = filter_by_nutrition(
        max_calories=max_calories if max_calories is not None else max_calories_alias,
        max_fat=max_fat if max_fat is not None else max_fat_alias,
        high_protein=high_protein or high_protein_alias,
        low_carbs=low_carbs or low_carbs_alias,
    )
    return ProductListResponse(products=[product.to_dict() for product in products])


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product_detail(product_id: str) -> ProductResponse:
    return ProductResponse(product=get_product(product_id).to_dict())


@product_router.get("/{product_id}/price", response_model=SizePriceResponse)
async def get_size_price(
    product_id: str,
    size: str = Query(default="regular", pattern="^(small|regular|large)$"),
) -> SizePriceResponse:
    product = get_product(product_id)
    return SizePriceResponse(product_id=str(product.id), size=size, price=product.price_for_size(size))


# --- Store endpoints ---


@store_router.get("", response_model=StoreListResponse)
async def get_stores(
    city: str | None = None,
    zip_code: str | None = None,
    latitude: float | None = Query(default=None, ge=-90, le=90),
    longitude: float | None = Query(default=None, ge=-180, le=180),
    zip_code_alias: str | None = Query(default=None, alias="zipCode"),
) -> StoreListResponse:
    stores = find_stores(city=city, zip_code=zip_code or zip_code_alias, latitude=latitude, longitude=longitude)
    return StoreListResponse(stores=[store.to_dict() for store in stores])
