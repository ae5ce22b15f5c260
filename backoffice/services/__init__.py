"""비즈니스 로직 서비스."""

from backoffice.services.auth_service import AuthService
from backoffice.services.image_relay import ImageRelay
from backoffice.services.order_service import OrderService
from backoffice.services.product_service import ProductService

__all__ = ["AuthService", "ImageRelay", "OrderService", "ProductService"]
