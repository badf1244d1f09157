"""Response envelope shared with the boundary layer.

Wire shape::

    {"Success": bool, "Message": str, "Object": any | null, "Errors": [str] | null}

Paginated responses add ``PageNumber``, ``PageSize`` and ``TotalSize``.
Status codes are not decided here; the boundary maps ``ErrorKind``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from storefront.application.dto import CatalogPageDTO
from storefront.domain.exceptions import DomainException, ErrorKind

PRODUCTS_FETCHED = "Products fetched successfully"
FROM_CACHE_SUFFIX = " (from cache)"

_GENERIC_ERROR_MESSAGES = {
    ErrorKind.BAD_REQUEST: "Invalid request",
    ErrorKind.NOT_FOUND: "Resource not found",
    ErrorKind.INSUFFICIENT_STOCK: "Insufficient stock",
    ErrorKind.INTERNAL_FAILURE: "Something went wrong, please try again later.",
}


@dataclass(frozen=True)
class ApiResponse:
    success: bool
    message: str
    object: Any = None
    errors: list[str] | None = None
    kind: ErrorKind | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "Success": self.success,
            "Message": self.message,
            "Object": _plain(self.object),
            "Errors": list(self.errors) if self.errors is not None else None,
        }


@dataclass(frozen=True)
class PaginatedResponse(ApiResponse):
    page_number: int = 1
    page_size: int = 0
    total_size: int = 0

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data.update(
            PageNumber=self.page_number,
            PageSize=self.page_size,
            TotalSize=self.total_size,
        )
        return data


def success_response(message: str, obj: Any) -> ApiResponse:
    return ApiResponse(success=True, message=message, object=obj)


def paginated_response(
    message: str,
    items: list[Any],
    page_number: int,
    page_size: int,
    total_size: int,
) -> PaginatedResponse:
    return PaginatedResponse(
        success=True,
        message=message,
        object=items,
        page_number=page_number,
        page_size=page_size,
        total_size=total_size,
    )


def catalog_page_response(page: CatalogPageDTO) -> PaginatedResponse:
    message = PRODUCTS_FETCHED
    if page.served_from_cache:
        message += FROM_CACHE_SUFFIX
    return paginated_response(
        message,
        page.products,
        page_number=page.page,
        page_size=page.page_size,
        total_size=page.total_count,
    )


def error_response(exc: Exception) -> ApiResponse:
    """Envelope for a failed call.

    Internal failures get a generic message only; backend details stay
    in the logs.
    """
    kind = exc.kind if isinstance(exc, DomainException) else ErrorKind.INTERNAL_FAILURE
    message = _GENERIC_ERROR_MESSAGES[kind]
    if kind is ErrorKind.INTERNAL_FAILURE:
        errors = [message]
    else:
        errors = [str(exc)]
    return ApiResponse(success=False, message=message, errors=errors, kind=kind)


def _plain(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value
