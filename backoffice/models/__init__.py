"""
SQLAlchemy 데이터베이스 모델

모든 데이터베이스 모델을 이 모듈에서 import하여 export합니다.
"""

from backoffice.models.admin import Admin
from backoffice.models.product import Product
from backoffice.models.order import Order, OrderItem

__all__ = ["Admin", "Product", "Order", "OrderItem"]
