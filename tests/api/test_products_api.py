"""
상품 API 엔드포인트 통합 테스트
"""

import httpx
import pytest

from backoffice.services.image_relay import ImageRelay
from conftest import UPLOADED_IMAGE_URL


@pytest.fixture
def created_product(admin_client):
    """API로 생성한 상품 (가격 19.99)"""
    response = admin_client.post(
        "/products",
        json={"name": "Widget", "description": "A widget", "price": 19.99},
    )
    assert response.status_code == 201
    return response.json()


class TestCreateProductAPI:
    """상품 생성 API 테스트 클래스"""

    def test_create_product_success(self, admin_client):
        """상품 생성 성공 테스트 (201 Created)"""
        response = admin_client.post(
            "/products",
            json={"name": "Widget", "description": "A widget", "price": 19.99},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["id"] > 0
        assert data["name"] == "Widget"
        assert data["description"] == "A widget"
        # 가격은 문자열이 아닌 숫자로 직렬화
        assert data["price"] == 19.99
        assert isinstance(data["price"], float)
        assert data["price_htg"] == 19.99
        assert data["image_url"] is None
        assert "created_at" in data
        assert "updated_at" in data

    def test_create_product_legacy_field_names(self, admin_client):
        """price_htg / image 필드명 허용"""
        response = admin_client.post(
            "/products",
            json={
                "name": "Lamp",
                "description": "",
                "price_htg": "250",
                "image": "https://files.catbox.moe/lamp.png",
            },
        )

        assert response.status_code == 201
        data = response.json()
        assert data["price"] == 250.0
        assert data["image_url"] == "https://files.catbox.moe/lamp.png"

    @pytest.mark.parametrize(
        "payload",
        [
            {"description": "d", "price": 1},
            {"name": "n", "price": 1},
            {"name": "n", "description": "d"},
            {"name": "n", "description": "d", "price": "abc"},
            {"name": "n", "description": "d", "price": -1},
        ],
    )
    def test_create_product_invalid_payload(self, admin_client, payload):
        """필수 필드 누락 또는 잘못된 가격 (400 Bad Request)"""
        response = admin_client.post("/products", json=payload)

        assert response.status_code == 400
        assert response.json()["kind"] == "validation_error"
        assert admin_client.get("/products").json() == []

    def test_create_product_requires_admin(self, test_client):
        """세션 없이 생성 시도 (401 Unauthorized)"""
        response = test_client.post(
            "/products", json={"name": "Widget", "description": "", "price": 1}
        )

        assert response.status_code == 401
        assert response.json()["kind"] == "auth_error"
        assert test_client.get("/products").json() == []


class TestReadProductAPI:
    """상품 조회 API 테스트 클래스"""

    def test_list_products_public(self, test_client, sample_product):
        """상품 목록은 인증 없이 조회 가능"""
        response = test_client.get("/products")

        assert response.status_code == 200
        data = response.json()
        assert len(data) == 1
        assert data[0]["name"] == "Widget"
        assert data[0]["price"] == 10.0

    def test_list_products_pagination(self, admin_client):
        """skip / limit 쿼리 파라미터"""
        for i in range(5):
            admin_client.post(
                "/products", json={"name": f"P{i}", "description": "", "price": i}
            )

        response = admin_client.get("/products", params={"skip": 1, "limit": 2})

        assert [p["name"] for p in response.json()] == ["P1", "P2"]

    def test_get_product_success(self, test_client, sample_product):
        """상품 상세 조회"""
        response = test_client.get(f"/products/{sample_product.id}")

        assert response.status_code == 200
        assert response.json()["id"] == sample_product.id

    def test_get_product_not_found(self, test_client):
        """존재하지 않는 상품 (404 Not Found)"""
        response = test_client.get("/products/9999")

        assert response.status_code == 404
        assert response.json()["kind"] == "not_found"

    def test_get_product_invalid_id(self, test_client):
        """정수가 아닌 ID (400 Bad Request)"""
        response = test_client.get("/products/abc")

        assert response.status_code == 400
        assert response.json()["kind"] == "validation_error"


class TestUpdateProductAPI:
    """상품 수정 API 테스트 클래스"""

    def test_update_price_then_get(self, admin_client, created_product):
        """가격만 수정 후 조회 시 새 가격, 나머지 필드 유지"""
        product_id = created_product["id"]

        response = admin_client.put(f"/products/{product_id}", json={"price": 24.50})

        assert response.status_code == 200
        fetched = admin_client.get(f"/products/{product_id}").json()
        assert fetched["price"] == 24.5
        assert fetched["name"] == "Widget"
        assert fetched["description"] == "A widget"

    def test_update_empty_body(self, admin_client, created_product):
        """빈 변경 (400 Bad Request), 상품은 그대로"""
        product_id = created_product["id"]

        response = admin_client.put(f"/products/{product_id}", json={})

        assert response.status_code == 400
        assert admin_client.get(f"/products/{product_id}").json()["price"] == 19.99

    def test_update_not_found(self, admin_client):
        """존재하지 않는 상품 수정 (404 Not Found)"""
        response = admin_client.put("/products/9999", json={"name": "x"})

        assert response.status_code == 404

    def test_update_requires_admin(self, test_client, sample_product):
        """세션 없이 수정 시도 (401 Unauthorized)"""
        response = test_client.put(f"/products/{sample_product.id}", json={"price": 1})

        assert response.status_code == 401
        assert test_client.get(f"/products/{sample_product.id}").json()["price"] == 10.0


class TestDeleteProductAPI:
    """상품 삭제 API 테스트 클래스"""

    def test_delete_product_success(self, admin_client, created_product):
        """삭제 후 조회 시 404"""
        product_id = created_product["id"]

        response = admin_client.delete(f"/products/{product_id}")

        assert response.status_code == 200
        assert response.json() == {
            "message": "Product deleted successfully",
            "id": product_id,
        }
        assert admin_client.get(f"/products/{product_id}").status_code == 404

    def test_delete_product_not_found(self, admin_client):
        """존재하지 않는 상품 삭제 (404 Not Found)"""
        assert admin_client.delete("/products/9999").status_code == 404

    def test_delete_requires_admin(self, test_client, sample_product):
        """세션 없이 삭제 시도 (401 Unauthorized)"""
        assert test_client.delete(f"/products/{sample_product.id}").status_code == 401


class TestProductImageAPI:
    """상품 이미지 업로드 API 테스트 클래스"""

    def test_upload_image_success(
        self, admin_client, created_product, image_host_requests, settings
    ):
        """업로드 성공 시 상품에 이미지 URL 저장, 임시 파일 제거"""
        product_id = created_product["id"]

        response = admin_client.post(
            f"/products/{product_id}/image",
            files={"image": ("photo.png", b"\x89PNG fake", "image/png")},
        )

        assert response.status_code == 200
        assert response.json()["image_url"] == UPLOADED_IMAGE_URL
        assert len(image_host_requests) == 1
        assert list(settings.upload_path.iterdir()) == []

    def test_upload_image_host_failure(self, admin_client, created_product, settings):
        """이미지 호스트 오류 (502 Bad Gateway), 상품 변경 없음"""
        product_id = created_product["id"]
        admin_client.app.state.image_relay = ImageRelay(
            settings.image_host_url,
            5,
            transport=httpx.MockTransport(lambda request: httpx.Response(500)),
        )

        response = admin_client.post(
            f"/products/{product_id}/image",
            files={"image": ("photo.png", b"\x89PNG fake", "image/png")},
        )

        assert response.status_code == 502
        assert response.json()["kind"] == "upload_error"
        assert admin_client.get(f"/products/{product_id}").json()["image_url"] is None
        assert list(settings.upload_path.iterdir()) == []

    def test_upload_image_too_large(
        self, admin_client, created_product, image_host_requests
    ):
        """최대 크기 초과 (400 Bad Request), 호스트로 전송하지 않음"""
        response = admin_client.post(
            f"/products/{created_product['id']}/image",
            files={"image": ("big.png", b"x" * 4096, "image/png")},
        )

        assert response.status_code == 400
        assert image_host_requests == []

    def test_upload_image_product_not_found(self, admin_client, image_host_requests):
        """존재하지 않는 상품 (404 Not Found)"""
        response = admin_client.post(
            "/products/9999/image",
            files={"image": ("photo.png", b"\x89PNG fake", "image/png")},
        )

        assert response.status_code == 404
        assert image_host_requests == []

    def test_upload_image_requires_admin(self, test_client, sample_product):
        """세션 없이 업로드 시도 (401 Unauthorized)"""
        response = test_client.post(
            f"/products/{sample_product.id}/image",
            files={"image": ("photo.png", b"\x89PNG fake", "image/png")},
        )

        assert response.status_code == 401


class TestProductFormAPI:
    """multipart 폼 기반 상품 생성/수정 테스트 클래스"""

    FORM = {"name": "Widget", "description": "A widget", "price_htg": "19.99"}
    IMAGE = {"image": ("w.png", b"\x89PNGdata", "image/png")}

    def test_create_with_image(self, admin_client, image_host_requests, settings):
        """이미지 파일과 함께 생성 시 업로드된 URL 저장 (201 Created)"""
        response = admin_client.post("/products", data=self.FORM, files=self.IMAGE)

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Widget"
        assert data["price"] == 19.99
        assert data["image_url"] == UPLOADED_IMAGE_URL
        assert len(image_host_requests) == 1
        assert list(settings.upload_path.iterdir()) == []

    def test_create_without_image(self, admin_client, image_host_requests):
        """파일 없는 폼도 생성 가능, 호스트 호출 없음"""
        response = admin_client.post("/products", data=self.FORM)

        assert response.status_code == 201
        assert response.json()["image_url"] is None
        assert image_host_requests == []

    def test_create_host_failure_creates_nothing(self, admin_client, settings):
        """업로드 실패 시 502, 상품 미생성"""
        admin_client.app.state.image_relay = ImageRelay(
            settings.image_host_url,
            5,
            transport=httpx.MockTransport(lambda request: httpx.Response(500)),
        )

        response = admin_client.post("/products", data=self.FORM, files=self.IMAGE)

        assert response.status_code == 502
        assert response.json()["kind"] == "upload_error"
        assert admin_client.get("/products").json() == []

    def test_create_invalid_price_skips_upload(self, admin_client, image_host_requests):
        """잘못된 가격은 업로드 전에 거부 (400 Bad Request)"""
        form = {**self.FORM, "price_htg": "abc"}

        response = admin_client.post("/products", data=form, files=self.IMAGE)

        assert response.status_code == 400
        assert image_host_requests == []
        assert admin_client.get("/products").json() == []

    def test_create_form_requires_admin(self, test_client, image_host_requests):
        """세션 없이 폼 생성 시도 (401 Unauthorized)"""
        response = test_client.post("/products", data=self.FORM, files=self.IMAGE)

        assert response.status_code == 401
        assert image_host_requests == []

    def test_update_with_image(
        self, admin_client, created_product, image_host_requests
    ):
        """이미지 파일로 수정 시 URL 교체, 빈 칸 필드는 유지"""
        product_id = created_product["id"]

        response = admin_client.put(
            f"/products/{product_id}",
            data={"name": "", "description": "", "price_htg": "21"},
            files=self.IMAGE,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["image_url"] == UPLOADED_IMAGE_URL
        assert data["price"] == 21.0
        assert data["name"] == "Widget"
        assert data["description"] == "A widget"
        assert len(image_host_requests) == 1

    def test_update_image_only(self, admin_client, created_product):
        """필드 없이 이미지 파일만 보내도 수정"""
        response = admin_client.put(
            f"/products/{created_product['id']}", files=self.IMAGE
        )

        assert response.status_code == 200
        assert response.json()["image_url"] == UPLOADED_IMAGE_URL
        assert response.json()["price"] == 19.99

    def test_update_host_failure_leaves_product(
        self, admin_client, created_product, settings
    ):
        """업로드 실패 시 502, 다른 필드도 변경되지 않음"""
        product_id = created_product["id"]
        admin_client.app.state.image_relay = ImageRelay(
            settings.image_host_url,
            5,
            transport=httpx.MockTransport(lambda request: httpx.Response(500)),
        )

        response = admin_client.put(
            f"/products/{product_id}", data={"price_htg": "99"}, files=self.IMAGE
        )

        assert response.status_code == 502
        fetched = admin_client.get(f"/products/{product_id}").json()
        assert fetched["price"] == 19.99
        assert fetched["image_url"] is None

    def test_update_missing_product_skips_upload(
        self, admin_client, image_host_requests
    ):
        """존재하지 않는 상품은 업로드 없이 404"""
        response = admin_client.put("/products/9999", files=self.IMAGE)

        assert response.status_code == 404
        assert image_host_requests == []


class TestProductFieldTypes:
    """상품 요청 필드 타입 검증 테스트 클래스"""

    @pytest.mark.parametrize(
        "payload",
        [
            {"name": 5, "description": "d", "price": 1},
            {"name": "n", "description": ["d"], "price": 1},
            {"name": "n", "description": "d", "price": {"amount": 1}},
        ],
    )
    def test_create_wrong_types(self, admin_client, payload):
        """문자열/숫자가 아닌 필드 (400 Bad Request)"""
        response = admin_client.post("/products", json=payload)

        assert response.status_code == 400
        assert response.json()["kind"] == "validation_error"
        assert admin_client.get("/products").json() == []

    def test_create_non_object_body(self, admin_client):
        """JSON 객체가 아닌 본문 (400 Bad Request)"""
        response = admin_client.post("/products", json=["Widget"])

        assert response.status_code == 400
