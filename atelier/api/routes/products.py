"""
Products API.

Paged product listing with an optional category filter ("All" disables it).
"""

import logging
import sqlite3
from dataclasses import replace

from fastapi import APIRouter, Depends, HTTPException, Query, status

from atelier.api.deps import get_product_service, list_page_params
from atelier.api.schemas import PaginationResponse, ProductListResponse, ProductResponse
from atelier.components.catalog import (
    CatalogService,
    GetRecordInput,
    ListPageInput,
    Product,
    run_get,
    run_list_page,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=ProductListResponse)
def list_products(
    input_data: ListPageInput = Depends(list_page_params),
    category: str | None = Query(default=None),
    service: CatalogService[Product] = Depends(get_product_service),
) -> ProductListResponse:
    if category:
        input_data = replace(input_data, filters={"category": category})

    try:
        output = run_list_page(input_data, service)
    except sqlite3.Error as e:
        logger.exception("Error fetching products")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch products",
        ) from e

    if not output.success or output.result is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="; ".join(e.message for e in output.errors),
        )

    return ProductListResponse(
        products=[ProductResponse.from_product(p) for p in output.result.records],
        pagination=PaginationResponse.from_info(output.result.pagination),
    )


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(
    product_id: int,
    service: CatalogService[Product] = Depends(get_product_service),
) -> ProductResponse:
    try:
        output = run_get(GetRecordInput(record_id=product_id), service)
    except sqlite3.Error as e:
        logger.exception("Error fetching product %s", product_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch product",
        ) from e

    if output.record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")

    return ProductResponse.from_product(output.record)
