"""
Order / OrderItem 모델
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from backoffice.db.database import Base

UNKNOWN_PRODUCT_NAME = "Unknown product"


class Order(Base):
    """
    주문 헤더 모델

    Attributes:
        id: 주문 고유 ID (Primary Key)
        customer_name: 주문자 이름 (Not Null)
        customer_phone: 주문자 연락처 (Nullable)
        status: 주문 상태 (기본값 "pending", 자유 문자열)
        created_at: 주문 일시 (자동 설정)
        items: 주문 라인 목록 (삽입 순서)
    """

    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    customer_name = Column(String(100), nullable=False)
    customer_phone = Column(String(20), nullable=True)
    status = Column(String(20), nullable=False, default="pending")
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    items = relationship(
        "OrderItem",
        back_populates="order",
        order_by="OrderItem.id",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def total(self) -> Decimal:
        """주문 당시 가격 스냅샷 기준 총액"""
        return sum((item.subtotal for item in self.items), Decimal("0.00"))

    def __repr__(self) -> str:
        """Order 객체의 문자열 표현"""
        return (
            f"<Order(id={self.id}, customer_name='{self.customer_name}', "
            f"status='{self.status}')>"
        )

    def __str__(self) -> str:
        return f"Order #{self.id}: {len(self.items)} item(s)"


class OrderItem(Base):
    """
    주문 라인 모델

    product_id에는 외래 키 제약을 두지 않습니다. 상품이 삭제되어도 라인은
    product_id와 price_at_time을 그대로 보존합니다.

    Attributes:
        id: 라인 고유 ID (Primary Key, 삽입 순서)
        order_id: 소속 주문 ID (Foreign Key to orders.id)
        product_id: 주문한 상품 ID
        quantity: 수량 (양수)
        price_at_time: 주문 시점의 상품 가격 스냅샷 (변경 불가)
        product: 상품 조회용 관계 (상품 삭제 시 None)
    """

    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    product_id = Column(Integer, nullable=False, index=True)
    quantity = Column(Integer, nullable=False)
    price_at_time = Column(Numeric(10, 2), nullable=False)

    # Relationships
    order = relationship("Order", back_populates="items")
    product = relationship(
        "Product",
        primaryjoin="foreign(OrderItem.product_id) == Product.id",
        viewonly=True,
        lazy="joined",
    )

    @property
    def subtotal(self) -> Decimal:
        return Decimal(self.price_at_time) * self.quantity

    @property
    def product_name(self) -> str:
        if self.product is None:
            return UNKNOWN_PRODUCT_NAME
        return self.product.name

    def __repr__(self) -> str:
        """OrderItem 객체의 문자열 표현"""
        return (
            f"<OrderItem(id={self.id}, order_id={self.order_id}, "
            f"product_id={self.product_id}, quantity={self.quantity})>"
        )
