"""Tests for the response envelope and the error-kind mapping."""

import pytest

from storefront.application.dto import CatalogPageDTO, ProductDTO
from storefront.application.response import (
    ApiResponse,
    catalog_page_response,
    error_response,
    success_response,
)
from storefront.domain.exceptions import (
    CacheError,
    EntityNotFoundError,
    ErrorKind,
    InsufficientStockError,
    StorageError,
    ValidationError,
)


def _product_dto(name: str = "Laptop") -> ProductDTO:
    return ProductDTO(
        id="p1",
        name=name,
        price="1200.00",
        description="A portable computer",
        category="Electronics",
        stock=5,
        owner_id="u1",
        updated_by="u1",
        created_at="2024-01-01T00:00:00+00:00",
        updated_at="2024-01-01T00:00:00+00:00",
    )


class TestEnvelope:

    def test_success_shape(self):
        body = success_response("Order placed", {"id": "o1"}).to_dict()
        assert body == {
            "Success": True,
            "Message": "Order placed",
            "Object": {"id": "o1"},
            "Errors": None,
        }

    def test_dtos_are_flattened(self):
        body = success_response("ok", [_product_dto()]).to_dict()
        assert body["Object"][0]["name"] == "Laptop"
        assert body["Object"][0]["price"] == "1200.00"

    def test_catalog_page_is_paginated(self):
        page = CatalogPageDTO(products=[_product_dto()], page=2, page_size=1, total_count=11)
        body = catalog_page_response(page).to_dict()

        assert body["Message"] == "Products fetched successfully"
        assert body["PageNumber"] == 2
        assert body["PageSize"] == 1
        assert body["TotalSize"] == 11
        assert len(body["Object"]) == 1

    def test_cached_page_message_is_tagged(self):
        page = CatalogPageDTO(products=[], page=1, page_size=0, total_count=0, served_from_cache=True)
        assert catalog_page_response(page).message == "Products fetched successfully (from cache)"


class TestErrorResponse:

    @pytest.mark.parametrize("exc, kind", [
        (ValidationError("No order items provided"), ErrorKind.BAD_REQUEST),
        (EntityNotFoundError("Product with id x not found"), ErrorKind.NOT_FOUND),
        (InsufficientStockError("Laptop"), ErrorKind.INSUFFICIENT_STOCK),
    ])
    def test_caller_errors_keep_their_message(self, exc, kind):
        response = error_response(exc)
        assert response.success is False
        assert response.kind is kind
        assert response.errors == [str(exc)]

    @pytest.mark.parametrize("exc", [
        StorageError("Failed to commit transaction: primary stepped down"),
        CacheError("Redis error flushing catalog cache: timeout"),
        RuntimeError("boom"),
    ])
    def test_internal_failures_hide_backend_details(self, exc):
        response = error_response(exc)
        assert response.kind is ErrorKind.INTERNAL_FAILURE
        assert response.errors == ["Something went wrong, please try again later."]
        assert str(exc) not in response.to_dict()["Message"]

    def test_error_envelope_has_no_object(self):
        body = error_response(InsufficientStockError("Laptop")).to_dict()
        assert body["Success"] is False
        assert body["Object"] is None
        assert body["Errors"] == ["Insufficient stock for Laptop"]

    def test_kind_is_not_serialised(self):
        body = ApiResponse(success=False, message="x", kind=ErrorKind.NOT_FOUND).to_dict()
        assert set(body) == {"Success", "Message", "Object", "Errors"}
