"""
상품 관리 API 엔드포인트

상품 생성, 조회, 수정, 삭제 및 이미지 업로드 기능을 제공합니다.
조회는 공개, 변경은 관리자 세션이 필요합니다.

생성/수정은 JSON 본문과 multipart 폼을 모두 받습니다. 폼에 image 파일이
있으면 먼저 이미지 호스트로 업로드하고, 실패하면 상품을 변경하지 않습니다.
"""

from dataclasses import dataclass
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, File, Query, Request, UploadFile, status
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError
from sqlalchemy.orm import Session
from starlette.datastructures import UploadFile as FormFile

from backoffice.api.deps import (
    FORM_CONTENT_TYPES,
    get_current_admin,
    get_db,
    get_image_relay,
    get_settings,
)
from backoffice.core.config import Settings
from backoffice.core.exceptions import ValidationException
from backoffice.models import Admin
from backoffice.schemas.product import (
    ProductCreateRequest,
    ProductDeleteResponse,
    ProductResponse,
    ProductUpdateRequest,
)
from backoffice.services.image_relay import ImageRelay, relay_upload
from backoffice.services.product_service import ProductService


router = APIRouter()


@dataclass
class ProductPayload:
    """요청 본문에서 읽은 상품 필드와 (폼인 경우) 첨부 이미지"""

    data: dict[str, Any]
    image: Optional[FormFile] = None
    is_form: bool = False


async def read_product_payload(request: Request) -> ProductPayload:
    """
    JSON 본문 또는 multipart/urlencoded 폼에서 상품 필드를 읽습니다.

    폼의 image 항목은 파일이면 업로드 대상으로, 문자열이면 이미지 URL로 취급합니다.

    Raises:
        ValidationException: 본문이 JSON 객체나 폼이 아닌 경우
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        data: dict[str, Any] = {}
        image = None
        for key, value in form.multi_items():
            if isinstance(value, FormFile):
                # 파일 선택 없이 제출된 폼은 filename이 빈 문자열
                if key == "image" and value.filename:
                    image = value
                continue
            data[key] = value
        return ProductPayload(data=data, image=image, is_form=True)

    try:
        data = await request.json()
    except ValueError:
        raise ValidationException("Request body must be JSON or form data")
    if not isinstance(data, dict):
        raise ValidationException("Request body must be a JSON object")
    return ProductPayload(data=data)


def _parse(model: type[BaseModel], data: dict[str, Any]):
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False))


def _upload(image: FormFile, relay: ImageRelay, settings: Settings) -> str:
    return relay_upload(image.file, image.filename, relay, settings)


@router.post(
    "/products", response_model=ProductResponse, status_code=status.HTTP_201_CREATED
)
def create_product(
    current_admin: Admin = Depends(get_current_admin),
    payload: ProductPayload = Depends(read_product_payload),
    db: Session = Depends(get_db),
    relay: ImageRelay = Depends(get_image_relay),
    settings: Settings = Depends(get_settings),
):
    """
    새 상품을 생성합니다 (관리자 인증 필요).

    multipart 폼으로 image 파일을 함께 보내면 업로드된 URL이 저장됩니다.
    필드 검증은 업로드 전에 끝나므로 잘못된 요청은 호스트로 전송되지 않습니다.

    Example:
        Request:
        ```json
        {
            "name": "Widget",
            "description": "A widget",
            "price": 19.99
        }
        ```

        Response (201):
        ```json
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
        ```

    Raises:
        400: 필수 값 누락 또는 잘못된 가격
        502: 이미지 호스트 업로드 실패 (상품 미생성)
    """
    product_data = _parse(ProductCreateRequest, payload.data)
    fields = ProductService.clean_changes(product_data.model_dump())

    if payload.image is not None:
        fields["image_url"] = _upload(payload.image, relay, settings)

    return ProductService.create_product(db=db, **fields)


@router.get("/products", response_model=List[ProductResponse])
def list_products(
    skip: int = Query(0, ge=0),
    limit: Optional[int] = Query(None, ge=1),
    db: Session = Depends(get_db),
):
    """모든 상품 목록을 ID 오름차순으로 조회합니다."""
    return ProductService.list_products(db, skip=skip, limit=limit)


@router.get("/products/{product_id}", response_model=ProductResponse)
def get_product(product_id: int, db: Session = Depends(get_db)):
    """
    특정 상품의 상세 정보를 조회합니다.

    Raises:
        404: 상품을 찾을 수 없는 경우
        400: product_id가 정수가 아닌 경우
    """
    return ProductService.get_product(product_id, db)



@router.put("/products/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: int,
    current_admin: Admin = Depends(get_current_admin),
    payload: ProductPayload = Depends(read_product_payload),
    db: Session = Depends(get_db),
    relay: ImageRelay = Depends(get_image_relay),
    settings: Settings = Depends(get_settings),
):
    """
    상품을 부분 수정합니다 (관리자 인증 필요).

    요청 본문에 포함된 필드만 변경되며, 빈 본문은 400으로 거부됩니다.
    폼에서는 빈 칸이 "변경 없음"을 뜻하고, image 파일이 있으면
    업로드 후 새 URL로 교체합니다.

    Example:
        Request:
        ```json
        {
            "price": 24.50
        }
        ```

    Raises:
        404: 상품을 찾을 수 없는 경우
        502: 이미지 호스트 업로드 실패 (상품 변경 없음)
    """
    data = payload.data
    if payload.is_form:
        data = {key: value for key, value in data.items() if value != ""}
    changes = _parse(ProductUpdateRequest, data).changes()

    if payload.image is not None:
        # 업로드 전에 변경값과 상품 존재 확인
        if changes:
            ProductService.clean_changes(changes)
        ProductService.get_product(product_id, db)
        changes["image_url"] = _upload(payload.image, relay, settings)

    return ProductService.update_product(product_id, changes, db)


@router.delete("/products/{product_id}", response_model=ProductDeleteResponse)
def delete_product(
    product_id: int,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    """
    상품을 삭제합니다 (관리자 인증 필요).

    기존 주문 라인은 유지되며 상품명은 "Unknown product"로 표시됩니다.
    """
    ProductService.delete_product(product_id, db)
    return ProductDeleteResponse(message="Product deleted successfully", id=product_id)


@router.post("/products/{product_id}/image", response_model=ProductResponse)
def upload_product_image(
    product_id: int,
    image: UploadFile = File(...),
    db: Session = Depends(get_db),
    relay: ImageRelay = Depends(get_image_relay),
    settings: Settings = Depends(get_settings),
    current_admin: Admin = Depends(get_current_admin),
):
    """
    상품 이미지를 외부 호스트에 업로드하고 URL을 상품에 저장합니다 (관리자 인증 필요).

    업로드 실패 시 502를 반환하며 상품은 변경되지 않습니다.

    Raises:
        404: 상품을 찾을 수 없는 경우
        400: 빈 파일이거나 최대 크기 초과
        502: 이미지 호스트 업로드 실패
    """
    # 업로드 전에 상품 존재 확인
    ProductService.get_product(product_id, db)

    image_url = _upload(image, relay, settings)
    return ProductService.set_image(product_id, image_url, db)
