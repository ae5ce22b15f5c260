"""
Pydantic 스키마 모듈
"""

from backoffice.schemas.auth import AdminResponse, LoginRequest, LoginResponse
from backoffice.schemas.order import (
    OrderCreateRequest,
    OrderItemResponse,
    OrderLineRequest,
    OrderResponse,
    OrderStatusUpdateRequest,
)
from backoffice.schemas.product import (
    ProductCreateRequest,
    ProductDeleteResponse,
    ProductResponse,
    ProductUpdateRequest,
)

__all__ = [
    "AdminResponse",
    "LoginRequest",
    "LoginResponse",
    "OrderCreateRequest",
    "OrderItemResponse",
    "OrderLineRequest",
    "OrderResponse",
    "OrderStatusUpdateRequest",
    "ProductCreateRequest",
    "ProductDeleteResponse",
    "ProductResponse",
    "ProductUpdateRequest",
]
