"""
커스텀 예외 정의

애플리케이션 전역에서 사용되는 커스텀 예외 클래스들입니다.
각 예외는 응답에 그대로 노출되는 kind(기계 판독용)와 message, 그리고
HTTP 상태 코드를 가집니다.
"""


class BackofficeException(Exception):
    """모든 도메인 예외의 기반 클래스"""

    kind = "error"
    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class ValidationException(BackofficeException):
    """
    입력값이 누락되었거나 형식이 잘못된 경우 발생하는 예외

    HTTP Status Code: 400 Bad Request
    """

    kind = "validation_error"
    status_code = 400

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)


class NotFoundException(BackofficeException):
    """
    참조한 엔티티를 찾을 수 없을 때 발생하는 예외

    HTTP Status Code: 404 Not Found
    """

    kind = "not_found"
    status_code = 404


class ProductNotFoundException(NotFoundException):
    """상품을 찾을 수 없을 때 발생하는 예외"""

    def __init__(self, product_id: int):
        self.product_id = product_id
        super().__init__(f"Product with id {product_id} not found")


class OrderNotFoundException(NotFoundException):
    """주문을 찾을 수 없을 때 발생하는 예외"""

    def __init__(self, order_id: int):
        self.order_id = order_id
        super().__init__(f"Order with id {order_id} not found")


class ProductReferenceException(BackofficeException):
    """
    주문 생성 트랜잭션 도중 참조한 상품이 존재하지 않을 때 발생하는 예외

    트랜잭션은 이미 롤백된 상태입니다.

    HTTP Status Code: 409 Conflict
    """

    kind = "product_reference"
    status_code = 409

    def __init__(self, product_id: int):
        self.product_id = product_id
        super().__init__(f"Product {product_id} referenced by the order does not exist")


class InvalidCredentialsException(BackofficeException):
    """
    인증 실패 시 발생하는 예외

    사용자 없음과 비밀번호 불일치를 구분하지 않습니다.

    HTTP Status Code: 401 Unauthorized
    """

    kind = "auth_error"
    status_code = 401

    def __init__(self, message: str = "Invalid username or password"):
        super().__init__(message)


class AdminAlreadyExistsException(BackofficeException):
    """
    중복된 사용자명으로 관리자를 등록하려 할 때 발생하는 예외

    HTTP Status Code: 409 Conflict
    """

    kind = "conflict"
    status_code = 409

    def __init__(self, username: str):
        self.username = username
        super().__init__(f"Admin with username '{username}' already exists")


class ImageUploadException(BackofficeException):
    """
    외부 이미지 호스트 업로드 실패 시 발생하는 예외

    원인 예외는 __cause__로 연결됩니다.

    HTTP Status Code: 502 Bad Gateway
    """

    kind = "upload_error"
    status_code = 502

    def __init__(self, message: str = "Image upload failed"):
        super().__init__(message)


class StoreUnavailableException(BackofficeException):
    """
    데이터베이스 연결 또는 트랜잭션 인프라 장애 시 발생하는 예외

    HTTP Status Code: 500 Internal Server Error
    """

    kind = "store_unavailable"
    status_code = 500

    def __init__(self, message: str = "Data store unavailable"):
        super().__init__(message)
