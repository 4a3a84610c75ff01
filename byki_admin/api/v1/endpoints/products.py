"""Product API: catalog CRUD, stock, bulk pricing, images and inventory stats."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, Query, Request, Response, UploadFile

from byki_admin.api.v1.dependencies import get_product_service, require_found
from byki_admin.application.dtos import InventoryStats, PriceChange
from byki_admin.core.limiter import limit_upload, limit_writes
from byki_admin.domain.entities import Product, ProductCategory
from byki_admin.infrastructure.firebase.services import FirestoreProductService
from byki_admin.schemas.catalog import (
    BulkPriceUpdate,
    ImageUploadResponse,
    ProductCategoryCreate,
    ProductCategoryUpdate,
    ProductCreate,
    ProductUpdate,
    StockUpdate,
)
from byki_admin.schemas.common import CountResponse, CreatedResponse

logger = logging.getLogger(__name__)

router = APIRouter()

ProductServiceDep = Annotated[FirestoreProductService, Depends(get_product_service)]


@router.get("", response_model=list[Product])
async def list_products(
    product_svc: ProductServiceDep,
    category: str | None = None,
    brand: str | None = None,
    in_stock: bool | None = None,
    min_price: float | None = Query(default=None, ge=0),
    max_price: float | None = Query(default=None, ge=0),
):
    return await product_svc.get_products(
        category=category,
        brand=brand,
        in_stock=in_stock,
        min_price=min_price,
        max_price=max_price,
    )


@router.post("", response_model=CreatedResponse, status_code=201)
@limit_writes
async def create_product(
    request: Request, body: ProductCreate, product_svc: ProductServiceDep
):
    return CreatedResponse(id=await product_svc.create_product(body.to_document()))


@router.get("/stats", response_model=InventoryStats)
async def inventory_stats(product_svc: ProductServiceDep):
    return await product_svc.get_inventory_stats()


@router.get("/low-stock", response_model=list[Product])
async def low_stock_products(
    product_svc: ProductServiceDep,
    threshold: int | None = Query(default=None, ge=0),
):
    return await product_svc.get_low_stock_products(threshold)


@router.post("/bulk-price", response_model=CountResponse)
@limit_writes
async def bulk_update_prices(
    request: Request, body: BulkPriceUpdate, product_svc: ProductServiceDep
):
    """Reprice several products atomically; unknown ids are skipped."""
    count = await product_svc.bulk_update_prices(
        body.product_ids, PriceChange(type=body.type, value=body.value)
    )
    return CountResponse(count=count)


# ---- Categories ----


@router.get("/categories", response_model=list[ProductCategory])
async def list_categories(product_svc: ProductServiceDep):
    return await product_svc.get_categories()


@router.post("/categories", response_model=CreatedResponse, status_code=201)
@limit_writes
async def create_category(
    request: Request, body: ProductCategoryCreate, product_svc: ProductServiceDep
):
    return CreatedResponse(id=await product_svc.create_category(body.to_document()))


@router.patch("/categories/{category_id}", status_code=204)
@limit_writes
async def update_category(
    request: Request,
    category_id: str,
    body: ProductCategoryUpdate,
    product_svc: ProductServiceDep,
) -> Response:
    await product_svc.update_category(category_id, body.to_document())
    return Response(status_code=204)


@router.delete("/categories/{category_id}", status_code=204)
@limit_writes
async def delete_category(
    request: Request, category_id: str, product_svc: ProductServiceDep
) -> Response:
    await product_svc.delete_category(category_id)
    return Response(status_code=204)


# ---- Single product ----


@router.get("/{product_id}", response_model=Product)
async def get_product(product_id: str, product_svc: ProductServiceDep):
    return require_found(await product_svc.get_product(product_id), "product", product_id)


@router.patch("/{product_id}", response_model=Product)
@limit_writes
async def update_product(
    request: Request,
    product_id: str,
    body: ProductUpdate,
    product_svc: ProductServiceDep,
):
    require_found(await product_svc.get_product(product_id), "product", product_id)
    await product_svc.update_product(product_id, body.to_document())
    return await product_svc.get_product(product_id)


@router.delete("/{product_id}", status_code=204)
@limit_writes
async def delete_product(
    request: Request, product_id: str, product_svc: ProductServiceDep
) -> Response:
    await product_svc.delete_product(product_id)
    return Response(status_code=204)


@router.patch("/{product_id}/stock", response_model=Product)
@limit_writes
async def update_stock(
    request: Request,
    product_id: str,
    body: StockUpdate,
    product_svc: ProductServiceDep,
):
    require_found(await product_svc.get_product(product_id), "product", product_id)
    await product_svc.update_stock(product_id, body.quantity)
    return await product_svc.get_product(product_id)


@router.post(
    "/{product_id}/images", response_model=ImageUploadResponse, status_code=201
)
@limit_upload
async def upload_image(
    request: Request,
    product_id: str,
    product_svc: ProductServiceDep,
    file: UploadFile = File(...),
):
    """Store an image and return its download URL. The product is not modified."""
    content = await file.read()
    url = await product_svc.upload_product_image(
        product_id,
        file.filename or "image",
        content,
        file.content_type or "application/octet-stream",
    )
    return ImageUploadResponse(url=url)


@router.delete("/{product_id}/images", status_code=204)
@limit_writes
async def delete_image(
    request: Request,
    product_id: str,
    product_svc: ProductServiceDep,
    url: str = Query(..., min_length=1),
) -> Response:
    await product_svc.delete_product_image(url)
    return Response(status_code=204)
