"""외부 이미지 호스트 업로드 서비스."""

import tempfile
from pathlib import Path
from typing import BinaryIO, Optional

import httpx
from loguru import logger

from backoffice.core.config import Settings
from backoffice.core.exceptions import ImageUploadException, ValidationException

CHUNK_SIZE = 64 * 1024


def stage_upload(
    source: BinaryIO, filename: Optional[str], upload_dir: Path, max_bytes: int
) -> Path:
    """
    업로드된 파일을 임시 파일로 저장합니다.

    Args:
        source: 업로드 파일 스트림
        filename: 원본 파일명 (확장자 유지용)
        upload_dir: 임시 파일 디렉터리
        max_bytes: 허용 최대 크기

    Returns:
        임시 파일 경로. 이후 ImageRelay.upload가 삭제를 책임집니다.

    Raises:
        ValidationException: 파일이 비어 있거나 최대 크기를 넘는 경우
    """
    upload_dir.mkdir(parents=True, exist_ok=True)
    suffix = Path(filename).suffix.lower() if filename else ""

    with tempfile.NamedTemporaryFile(
        dir=upload_dir, suffix=suffix, delete=False
    ) as tmp:
        path = Path(tmp.name)
        written = 0
        try:
            while chunk := source.read(CHUNK_SIZE):
                written += len(chunk)
                if written > max_bytes:
                    raise ValidationException(
                        f"Image exceeds the {max_bytes} byte limit", field="image"
                    )
                tmp.write(chunk)
            if written == 0:
                raise ValidationException("Image file is empty", field="image")
        except BaseException:
            tmp.close()
            path.unlink(missing_ok=True)
            raise

    return path


class ImageRelay:
    """
    로컬 임시 파일을 외부 이미지 호스트로 전달하고 공개 URL을 반환합니다.

    multipart/form-data로 reqtype=fileupload, fileToUpload=<파일>을 전송하며
    호스트는 응답 본문으로 이미지 URL을 돌려줍니다.
    """

    def __init__(
        self,
        host_url: str,
        timeout: float,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.host_url = host_url
        self.timeout = timeout
        self.transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "ImageRelay":
        return cls(settings.image_host_url, settings.image_upload_timeout_seconds)

    def upload(self, path: Path) -> str:
        """
        임시 파일을 업로드하고 URL을 반환합니다.

        성공, 실패, 예외 여부와 관계없이 임시 파일은 정확히 한 번 삭제됩니다.

        Args:
            path: 업로드할 임시 파일 경로

        Returns:
            업로드된 이미지의 공개 URL

        Raises:
            ImageUploadException: 전송 실패, 타임아웃, 오류 응답, 잘못된 응답 본문
        """
        try:
            with open(path, "rb") as fh, httpx.Client(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = client.post(
                    self.host_url,
                    data={"reqtype": "fileupload"},
                    files={"fileToUpload": (path.name, fh)},
                )
                response.raise_for_status()
        except httpx.TimeoutException as e:
            logger.warning("Image upload timed out after {}s", self.timeout)
            raise ImageUploadException("Image host timed out") from e
        except httpx.HTTPStatusError as e:
            logger.warning("Image host returned {}", e.response.status_code)
            raise ImageUploadException(
                f"Image host returned status {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            logger.warning("Image upload failed: {}", e)
            raise ImageUploadException("Image host unreachable") from e
        except OSError as e:
            raise ImageUploadException("Staged image could not be read") from e
        finally:
            path.unlink(missing_ok=True)

        url = response.text.strip()
        if not url.startswith(("http://", "https://")):
            logger.warning("Image host returned an unexpected body: {!r}", url[:200])
            raise ImageUploadException("Image host returned an invalid URL")

        return url


def relay_upload(
    source: BinaryIO, filename: Optional[str], relay: ImageRelay, settings: Settings
) -> str:
    """임시 파일 저장 후 업로드까지 한 번에 수행합니다."""
    path = stage_upload(source, filename, settings.upload_path, settings.max_upload_bytes)
    return relay.upload(path)
