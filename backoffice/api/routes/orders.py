"""
주문 API 엔드포인트

주문 생성은 고객용 공개 API이고, 조회와 상태 변경은 관리자 세션이 필요합니다.
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from backoffice.api.deps import get_current_admin, get_db
from backoffice.models import Admin
from backoffice.schemas.order import (
    OrderCreateRequest,
    OrderResponse,
    OrderStatusUpdateRequest,
)
from backoffice.services.order_service import OrderService


router = APIRouter()


@router.post("/orders", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
def create_order(
    order_data: OrderCreateRequest,
    db: Session = Depends(get_db),
):
    """
    주문을 생성합니다.

    주문 헤더와 모든 라인은 하나의 트랜잭션으로 저장되며, 각 라인에는
    주문 시점의 상품 가격이 고정됩니다.

    Raises:
        400: 입력값 오류 (라인 없음, 수량이 양수가 아님 등)
        409: 존재하지 않는 상품 참조 (주문 전체 롤백)

    Example:
        Request:
        ```json
        {
            "customer_name": "Jean Pierre",
            "lines": [{"product_id": 1, "quantity": 2}]
        }
        ```

        Response (201):
        ```json
        {
            "id": 1,
            "customer_name": "Jean Pierre",
            "customer_phone": null,
            "status": "pending",
            "created_at": "2025-01-22T10:30:00Z",
            "total": 20.0,
            "items": [
                {
                    "id": 1,
                    "product_id": 1,
                    "product_name": "Widget",
                    "quantity": 2,
                    "price_at_time": 10.0,
                    "subtotal": 20.0
                }
            ]
        }
        ```
    """
    return OrderService.create_order(
        customer_name=order_data.customer_name,
        customer_phone=order_data.customer_phone,
        lines=[line.model_dump() for line in order_data.lines],
        db=db,
    )


@router.get("/orders", response_model=List[OrderResponse])
def list_orders(
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    """주문 목록을 최신순으로 라인과 함께 조회합니다 (관리자 인증 필요)."""
    return OrderService.list_orders(db)


@router.get("/orders/{order_id}", response_model=OrderResponse)
def get_order(
    order_id: int,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    """주문 상세를 조회합니다 (관리자 인증 필요)."""
    return OrderService.get_order(order_id, db)


@router.patch("/orders/{order_id}", response_model=OrderResponse)
def update_order_status(
    order_id: int,
    status_data: OrderStatusUpdateRequest,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    """
    주문 상태를 변경합니다 (관리자 인증 필요).

    Example:
        Request:
        ```json
        {
            "status": "completed"
        }
        ```
    """
    return OrderService.update_status(order_id, status_data.status, db)
