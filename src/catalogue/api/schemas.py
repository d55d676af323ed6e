"""Pydantic response schemas for the Catalogue API."""

from pydantic import BaseModel


class NutritionSchema(BaseModel):
    calories: float
    protein: float
    carbs: float
    fat: float
    fiber: float | None = None


class ProductSchema(BaseModel):
    id: str
    name: str
    description: str
    category: str
    price: float
    image: str
    nutrition: NutritionSchema | None = None
    customizable: bool
    ingredients: list[str]
    available: bool


class ProductListResponse(BaseModel):
    products: list[ProductSchema]


class ProductResponse(BaseModel):
    product: ProductSchema


class SizePriceResponse(BaseModel):
    product_id: str
    size: str
    price: float


class StoreListResponse(BaseModel):
    stores: list[dict]
