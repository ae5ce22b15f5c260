"""
상품 관련 Pydantic 스키마

API 요청/응답 모델을 정의합니다.
구버전 클라이언트 호환을 위해 price_htg / image 필드명도 함께 받습니다.
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    computed_field,
)

# JSON 응답에서 가격을 문자열이 아닌 숫자로 직렬화
Money = Annotated[
    Decimal, PlainSerializer(float, return_type=float, when_used="json")
]


class ProductCreateRequest(BaseModel):
    """
    상품 생성 요청 스키마

    타입만 여기서 확인하고, 필수값과 가격의 숫자/음수 검증은
    ProductService에서 수행합니다.

    Example:
        {
            "name": "Widget",
            "description": "A widget",
            "price": 19.99
        }
    """

    name: str | None = Field(None, description="상품명", examples=["Widget"])
    description: str | None = Field(
        None, description="상품 설명", examples=["A widget"]
    )
    price: Decimal | str | None = Field(
        None,
        validation_alias=AliasChoices("price", "price_htg"),
        description="상품 가격 (0 이상, 소수점 2자리)",
        examples=[19.99],
    )
    image_url: str | None = Field(
        None,
        validation_alias=AliasChoices("image_url", "image"),
        description="이미 업로드된 이미지 URL (선택)",
    )


class ProductUpdateRequest(BaseModel):
    """
    상품 부분 수정 요청 스키마

    요청에 포함된 필드만 변경됩니다. 누락된 필드와 null 값은 구분됩니다
    (model_dump(exclude_unset=True) 사용).

    Example:
        {
            "price": 24.50
        }
    """

    name: str | None = Field(None, description="상품명")
    description: str | None = Field(None, description="상품 설명")
    price: Decimal | str | None = Field(
        None,
        validation_alias=AliasChoices("price", "price_htg"),
        description="상품 가격",
    )
    image_url: str | None = Field(
        None,
        validation_alias=AliasChoices("image_url", "image"),
        description="이미지 URL",
    )

    def changes(self) -> dict[str, Any]:
        """요청에 실제로 포함된 필드만 반환"""
        return self.model_dump(exclude_unset=True)


class ProductResponse(BaseModel):
    """
    상품 정보 응답 스키마

    Example:
        {
            "id": 1,
            "name": "Widget",
            "description": "A widget",
            "price": 19.99,
            "price_htg": 19.99,
            "image_url": null,
            "created_at": "2025-01-22T10:30:00Z",
            "updated_at": "2025-01-22T10:30:00Z"
        }
    """

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="상품 ID")
    name: str = Field(..., description="상품명")
    description: str = Field(..., description="상품 설명")
    price: Money = Field(..., description="상품 가격")
    image_url: str | None = Field(None, description="이미지 URL")
    created_at: datetime = Field(..., description="상품 생성 일시")
    updated_at: datetime = Field(..., description="상품 수정 일시")

    @computed_field
    @property
    def price_htg(self) -> float:
        """구버전 클라이언트용 가격 필드"""
        return float(self.price)


class ProductDeleteResponse(BaseModel):
    """상품 삭제 응답 스키마"""

    message: str = Field(..., description="처리 결과 메시지")
    id: int = Field(..., description="삭제된 상품 ID")
