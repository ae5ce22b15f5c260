"""
Product 모델
"""

from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, Numeric, String, Text

from backoffice.db.database import Base


class Product(Base):
    """
    상품 모델

    Attributes:
        id: 상품 고유 ID (Primary Key)
        name: 상품명 (Not Null)
        description: 상품 설명 (빈 문자열 허용)
        price: 가격 (Not Null, 소수점 2자리, 음수 불가)
        image_url: 외부 호스트에 업로드된 이미지 URL (업로드 전에는 NULL)
        created_at: 생성 일시 (자동 설정)
        updated_at: 수정 일시 (자동 업데이트)
    """

    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    name = Column(String(100), nullable=False, index=True)
    description = Column(Text, nullable=False, default="")
    price = Column(Numeric(10, 2), nullable=False)
    image_url = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    def __repr__(self) -> str:
        """Product 객체의 문자열 표현"""
        return f"<Product(id={self.id}, name='{self.name}', price={self.price})>"

    def __str__(self) -> str:
        return f"Product: {self.name}"
