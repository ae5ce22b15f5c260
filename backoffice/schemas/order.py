"""
주문 관련 Pydantic 스키마

API 요청/응답 모델을 정의합니다.
"""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from backoffice.schemas.product import Money


class OrderLineRequest(BaseModel):
    """
    주문 라인 요청 스키마

    Example:
        {
            "product_id": 1,
            "quantity": 2
        }
    """

    product_id: int = Field(
        ...,
        gt=0,
        validation_alias=AliasChoices("product_id", "productId"),
        description="주문할 상품 ID",
        examples=[1],
    )
    quantity: int = Field(..., gt=0, description="주문 수량 (양수)", examples=[2])


class OrderCreateRequest(BaseModel):
    """
    주문 생성 요청 스키마

    Example:
        {
            "customer_name": "Jean Pierre",
            "customer_phone": "+509 3700 0000",
            "lines": [{"product_id": 1, "quantity": 2}]
        }
    """

    customer_name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        validation_alias=AliasChoices("customer_name", "customer"),
        description="주문자 이름",
        examples=["Jean Pierre"],
    )
    customer_phone: str | None = Field(
        None, max_length=20, description="주문자 연락처 (선택)"
    )
    lines: list[OrderLineRequest] = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("lines", "items"),
        description="주문 라인 목록 (1개 이상)",
    )


class OrderStatusUpdateRequest(BaseModel):
    """
    주문 상태 변경 요청 스키마

    Example:
        {
            "status": "completed"
        }
    """

    status: str = Field(
        ..., min_length=1, max_length=20, description="새 주문 상태", examples=["completed"]
    )


class OrderItemResponse(BaseModel):
    """
    주문 라인 응답 스키마

    상품이 삭제된 라인은 product_name이 "Unknown product"로 표시됩니다.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="라인 ID")
    product_id: int = Field(..., description="상품 ID")
    product_name: str = Field(..., description="상품명")
    quantity: int = Field(..., description="수량")
    price_at_time: Money = Field(..., description="주문 시점 가격")
    subtotal: Money = Field(..., description="라인 합계")


class OrderResponse(BaseModel):
    """
    주문 정보 응답 스키마 (라인 포함)

    Example:
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
    """

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="주문 ID")
    customer_name: str = Field(..., description="주문자 이름")
    customer_phone: str | None = Field(None, description="주문자 연락처")
    status: str = Field(..., description="주문 상태")
    created_at: datetime = Field(..., description="주문 일시")
    total: Money = Field(..., description="주문 총액 (가격 스냅샷 기준)")
    items: list[OrderItemResponse] = Field(default_factory=list, description="주문 라인")
