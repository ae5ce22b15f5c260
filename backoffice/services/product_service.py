"""상품 관리 서비스."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Mapping, Optional

from loguru import logger
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from backoffice.core.exceptions import (
    ProductNotFoundException,
    StoreUnavailableException,
    ValidationException,
)
from backoffice.models import Product

PRICE_QUANTUM = Decimal("0.01")
UPDATABLE_FIELDS = ("name", "description", "price", "image_url")


def parse_price(value: Any) -> Decimal:
    """
    가격 입력값을 소수점 2자리 Decimal로 변환합니다.

    Raises:
        ValidationException: 숫자가 아니거나 음수인 경우
    """
    if value is None:
        raise ValidationException("price is required", field="price")
    if isinstance(value, bool):
        raise ValidationException("price must be numeric", field="price")

    try:
        price = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationException("price must be numeric", field="price")

    if not price.is_finite():
        raise ValidationException("price must be numeric", field="price")
    if price < 0:
        raise ValidationException("price must not be negative", field="price")

    return price.quantize(PRICE_QUANTUM, rounding=ROUND_HALF_UP)


def _clean_name(value: Any) -> str:
    if value is None:
        raise ValidationException("name is required", field="name")
    if not isinstance(value, str) or not value.strip():
        raise ValidationException("name must be a non-empty string", field="name")
    return value.strip()


def _clean_description(value: Any) -> str:
    if value is None:
        raise ValidationException("description is required", field="description")
    if not isinstance(value, str):
        raise ValidationException("description must be a string", field="description")
    return value


def _clean_image_url(value: Any) -> Optional[str]:
    # 빈 문자열은 "이미지 없음"과 같으므로 NULL로 저장
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ValidationException("image_url must be a string", field="image_url")
    return value


class ProductService:
    """상품 생성, 조회, 수정, 삭제 서비스."""

    @staticmethod
    def create_product(
        name: Any,
        description: Any,
        price: Any,
        db: Session,
        image_url: Optional[str] = None,
    ) -> Product:
        """
        상품을 생성합니다.

        모든 검증은 DB 쓰기 전에 수행됩니다.

        Args:
            name: 상품명 (필수, 빈 문자열 불가)
            description: 상품 설명 (필수, 빈 문자열 허용)
            price: 가격 (필수, 숫자, 0 이상)
            db: DB 세션
            image_url: 이미지 URL (선택)

        Returns:
            생성된 Product 객체

        Raises:
            ValidationException: 필수 값 누락, 가격이 숫자가 아니거나 음수인 경우
        """
        product = Product(
            name=_clean_name(name),
            description=_clean_description(description),
            price=parse_price(price),
            image_url=_clean_image_url(image_url),
        )

        try:
            db.add(product)
            db.commit()
        except OperationalError as e:
            db.rollback()
            raise StoreUnavailableException() from e
        db.refresh(product)

        logger.info("Product {} created: {}", product.id, product.name)
        return product

    @staticmethod
    def get_product(product_id: int, db: Session) -> Product:
        """
        상품 ID로 상품을 조회합니다.

        Args:
            product_id: 상품 ID
            db: DB 세션

        Returns:
            Product 객체

        Raises:
            ProductNotFoundException: 상품이 없는 경우
        """
        product = db.query(Product).filter(Product.id == product_id).first()
        if product is None:
            raise ProductNotFoundException(product_id)
        return product

    @staticmethod
    def list_products(
        db: Session, skip: int = 0, limit: Optional[int] = None
    ) -> list[Product]:
        """
        상품 목록을 ID 오름차순으로 조회합니다.

        상품이 없으면 빈 리스트를 반환하고, DB 연결 장애는
        StoreUnavailableException으로 구분합니다.

        Args:
            db: DB 세션
            skip: 건너뛸 레코드 수 (페이지네이션)
            limit: 조회할 최대 레코드 수 (None이면 전체)

        Returns:
            Product 객체 리스트
        """
        query = db.query(Product).order_by(Product.id.asc()).offset(skip)
        if limit is not None:
            query = query.limit(limit)

        try:
            return query.all()
        except OperationalError as e:
            raise StoreUnavailableException() from e

    @staticmethod
    def clean_changes(changes: Mapping[str, Any]) -> dict[str, Any]:
        """
        변경 필드를 검증하고 저장 형태로 정규화합니다 (DB 접근 없음).

        포함된 키만 검사하므로 name/description/price를 모두 넘기면
        생성 요청의 필수값 검증과 같습니다.

        Raises:
            ValidationException: 수정 가능한 필드가 없거나 값이 잘못된 경우
        """
        updates = {k: v for k, v in changes.items() if k in UPDATABLE_FIELDS}
        if not updates:
            raise ValidationException("At least one field must be provided")

        cleaned: dict[str, Any] = {}
        if "name" in updates:
            cleaned["name"] = _clean_name(updates["name"])
        if "description" in updates:
            cleaned["description"] = _clean_description(updates["description"])
        if "price" in updates:
            cleaned["price"] = parse_price(updates["price"])
        if "image_url" in updates:
            cleaned["image_url"] = _clean_image_url(updates["image_url"])
        return cleaned

    @staticmethod
    def update_product(product_id: int, changes: dict[str, Any], db: Session) -> Product:
        """
        요청에 포함된 필드만 부분 수정합니다.

        Args:
            product_id: 상품 ID
            changes: 변경할 필드 (포함된 키만 적용, 값이 0이어도 적용)
            db: DB 세션

        Returns:
            수정된 Product 객체

        Raises:
            ValidationException: 변경 필드가 없거나 값이 잘못된 경우
            ProductNotFoundException: 상품이 없는 경우
        """
        cleaned = ProductService.clean_changes(changes)

        product = ProductService.get_product(product_id, db)
        for field, value in cleaned.items():
            setattr(product, field, value)

        try:
            db.commit()
        except OperationalError as e:
            db.rollback()
            raise StoreUnavailableException() from e
        db.refresh(product)

        logger.info("Product {} updated: {}", product_id, sorted(cleaned))
        return product

    @staticmethod
    def set_image(product_id: int, image_url: str, db: Session) -> Product:
        """업로드된 이미지 URL을 상품에 연결합니다."""
        return ProductService.update_product(product_id, {"image_url": image_url}, db)

    @staticmethod
    def delete_product(product_id: int, db: Session) -> None:
        """
        상품을 영구 삭제합니다.

        이 상품을 참조하는 주문 라인은 삭제되지 않으며 product_id와
        price_at_time을 그대로 유지합니다.

        Raises:
            ProductNotFoundException: 상품이 없는 경우
        """
        product = ProductService.get_product(product_id, db)

        try:
            db.delete(product)
            db.commit()
        except OperationalError as e:
            db.rollback()
            raise StoreUnavailableException() from e

        logger.info("Product {} deleted", product_id)
