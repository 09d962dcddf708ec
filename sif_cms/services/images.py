"""
services/images.py

이미지 자산(asset) 수명 주기 관리.

업로드된 이미지는 그것을 참조하는 엔티티가 소유한다.
교체 / 삭제 시의 흐름은 2단계로 고정한다.

    1) stage  : 새 이미지 업로드 (아직 어떤 레코드도 가리키지 않음)
    2) commit : 엔티티 레코드 갱신 (호출 측 서비스에서 수행)
    3) reap   : 커밋이 확인된 뒤, DB에 저장돼 있던 이전 URL 의 파일 삭제

이전 URL 은 항상 서버에 저장된 레코드 값에서 가져온다.
reap 실패는 요청 결과에 영향을 주지 않는다 (로그만 남김).

"""

import re
import time

from sif_cms.core.config import settings
from sif_cms.core.exceptions import UpstreamFailure, ValidationError
from sif_cms.core.logging import get_logger
from sif_cms.services.storage import (
    UploadedFile,
    delete_file_from_bucket,
    extract_url,
    upload_file_to_bucket,
)

logger = get_logger(__name__)

ALLOWED_IMAGE_TYPES = frozenset({"image/jpeg", "image/png", "image/gif"})

_WHITESPACE_RE = re.compile(r"\s+")


"""
업로드 이미지 검증

- MIME 타입은 JPEG / PNG / GIF 만 허용
- 크기는 max_bytes 이하까지 허용 (경계값 포함), 1 바이트라도 넘으면 거부
- 검증은 버킷 호출 전에 수행

"""

def validate_image(content_type: str | None, size: int, max_bytes: int | None = None) -> None:
    limit = settings.MAX_IMAGE_BYTES if max_bytes is None else max_bytes
    if content_type not in ALLOWED_IMAGE_TYPES:
        raise ValidationError("Invalid file type. Only JPEG, PNG, and GIF are supported.")
    if size > limit:
        raise ValidationError(f"File size exceeds {limit // (1024 * 1024)}MB limit.")


def build_object_path(folder: str, filename: str, now_ms: int | None = None) -> str:
    stamp = int(time.time() * 1000) if now_ms is None else now_ms
    safe_name = _WHITESPACE_RE.sub("_", filename.strip()) or "upload"
    return f"{folder}/{stamp}_{safe_name}"


def stage_image(
    storage,
    *,
    bucket: str,
    folder: str,
    filename: str,
    data: bytes,
    content_type: str,
) -> UploadedFile:
    validate_image(content_type, len(data))
    path = build_object_path(folder, filename)
    uploaded = upload_file_to_bucket(storage, bucket, path, data, content_type, path.rsplit("/", 1)[-1])
    if uploaded is None:
        raise UpstreamFailure("Failed to upload image")
    return uploaded


def reap_image(storage, url: str | None) -> bool:
    info = extract_url(url)
    if info is None:
        if url:
            logger.info("skip reap, unrecognized storage url: %s", url)
        return False
    return delete_file_from_bucket(storage, info.bucket, info.path)


# 이미지가 실제로 바뀐 경우에만 이전 파일 삭제
def reap_if_replaced(storage, old_url: str | None, new_url: str | None) -> bool:
    if not old_url or old_url == new_url:
        return False
    return reap_image(storage, old_url)


# 한도 + 1 바이트까지만 읽어 크기 초과 여부를 판단할 수 있게 함
def read_upload(fileobj, max_bytes: int | None = None) -> bytes:
    limit = settings.MAX_IMAGE_BYTES if max_bytes is None else max_bytes
    return fileobj.read(limit + 1)
