"""
주문 처리 서비스

주문 헤더와 주문 라인을 단일 DB 트랜잭션으로 생성하고,
주문을 라인과 함께 조회/상태 변경하는 기능을 담당합니다.
"""

from datetime import datetime
from typing import Any, Mapping, Optional, Sequence

from loguru import logger
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from backoffice.core.exceptions import (
    OrderNotFoundException,
    ProductReferenceException,
    StoreUnavailableException,
    ValidationException,
)
from backoffice.models import Order, OrderItem, Product

DEFAULT_ORDER_STATUS = "pending"


def _positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _normalize_lines(lines: Sequence[Mapping[str, Any]]) -> list[tuple[int, int]]:
    """
    주문 라인 입력을 (product_id, quantity) 목록으로 검증/변환합니다.

    Raises:
        ValidationException: 라인이 비어 있거나 값이 잘못된 경우
    """
    if not lines:
        raise ValidationException("Order must contain at least one line", field="lines")

    normalized = []
    for index, line in enumerate(lines):
        product_id = line.get("product_id", line.get("productId"))
        quantity = line.get("quantity")

        if product_id is None:
            raise ValidationException(
                f"lines[{index}].product_id is required", field="lines"
            )
        if not _positive_int(product_id):
            raise ValidationException(
                f"lines[{index}].product_id must be a positive integer", field="lines"
            )
        if not _positive_int(quantity):
            raise ValidationException(
                f"lines[{index}].quantity must be a positive integer", field="lines"
            )
        normalized.append((product_id, quantity))

    return normalized


class OrderService:
    """주문 생성 및 조회 서비스 클래스"""

    @staticmethod
    def create_order(
        customer_name: str,
        lines: Sequence[Mapping[str, Any]],
        db: Session,
        customer_phone: Optional[str] = None,
    ) -> Order:
        """
        주문을 생성합니다 (all-or-nothing).

        프로세스:
        1. 입력 검증 (DB 쓰기 전)
        2. 주문 헤더 INSERT (status="pending") 후 flush로 ID 확보
        3. 라인마다 같은 트랜잭션 안에서 상품의 현재 가격 조회
           - 상품이 없으면 전체 롤백
        4. 조회한 가격을 price_at_time으로 주문 라인 INSERT
        5. 커밋

        Args:
            customer_name: 주문자 이름
            lines: [{"product_id": int, "quantity": int}, ...]
            db: SQLAlchemy 데이터베이스 세션
            customer_phone: 주문자 연락처 (선택)

        Returns:
            Order: 라인이 포함된 주문

        Raises:
            ValidationException: 입력값이 잘못된 경우 (DB 변경 없음)
            ProductReferenceException: 참조한 상품이 없는 경우 (롤백됨)
            StoreUnavailableException: DB 오류 (롤백됨)
        """
        if not isinstance(customer_name, str) or not customer_name.strip():
            raise ValidationException("customer_name is required", field="customer_name")
        normalized = _normalize_lines(lines)

        try:
            order = Order(
                customer_name=customer_name.strip(),
                customer_phone=customer_phone,
                status=DEFAULT_ORDER_STATUS,
                created_at=datetime.utcnow(),
            )
            db.add(order)
            db.flush()

            for product_id, quantity in normalized:
                product = db.query(Product).filter(Product.id == product_id).first()
                if product is None:
                    raise ProductReferenceException(product_id)

                db.add(
                    OrderItem(
                        order_id=order.id,
                        product_id=product_id,
                        quantity=quantity,
                        price_at_time=product.price,
                    )
                )

            db.commit()

        except ProductReferenceException as e:
            db.rollback()
            logger.warning("Order rolled back: product {} not found", e.product_id)
            raise

        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Order rolled back: {}", e)
            raise StoreUnavailableException("Order could not be stored") from e

        except Exception:
            db.rollback()
            raise

        db.refresh(order)
        logger.info(
            "Order {} created with {} line(s), total {}",
            order.id,
            len(order.items),
            order.total,
        )
        return order

    @staticmethod
    def list_orders(db: Session) -> list[Order]:
        """
        주문 목록을 최신순으로 조회합니다 (라인은 삽입 순서).

        Returns:
            Order 객체 리스트
        """
        try:
            return (
                db.query(Order)
                .order_by(Order.created_at.desc(), Order.id.desc())
                .all()
            )
        except OperationalError as e:
            raise StoreUnavailableException() from e

    @staticmethod
    def get_order(order_id: int, db: Session) -> Order:
        """
        주문 ID로 주문을 조회합니다.

        Raises:
            OrderNotFoundException: 주문이 없는 경우
        """
        order = db.query(Order).filter(Order.id == order_id).first()
        if order is None:
            raise OrderNotFoundException(order_id)
        return order

    @staticmethod
    def update_status(order_id: int, status: str, db: Session) -> Order:
        """
        주문 상태를 변경합니다.

        상태 값은 열거형으로 제한하지 않으며 비어 있지 않은 문자열이면 허용합니다.

        Raises:
            ValidationException: 상태 값이 비어 있는 경우
            OrderNotFoundException: 주문이 없는 경우
        """
        if not isinstance(status, str) or not status.strip():
            raise ValidationException("status must be a non-empty string", field="status")

        order = OrderService.get_order(order_id, db)
        order.status = status.strip()

        try:
            db.commit()
        except OperationalError as e:
            db.rollback()
            raise StoreUnavailableException() from e
        db.refresh(order)

        logger.info("Order {} status changed to {}", order_id, order.status)
        return order
