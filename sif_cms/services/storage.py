"""
services/storage.py

오브젝트 스토리지(버킷) 접근 계층.

Supabase Storage 클라이언트를 얇게 감싸고,
엔티티 서비스가 사용하는 버킷 헬퍼를 제공한다.

주요 기능:
- extract_url            : 공개 URL → (bucket, path) 파싱
- upload_file_to_bucket  : 업로드 후 공개 URL / 메타데이터 반환
- delete_file_from_bucket: best-effort 삭제 (실패는 로그만 남김)

설계 원칙:
- 인식하지 못하는 URL 은 예외 없이 None
- 버킷 호출 실패가 엔티티 변경을 막거나 되돌리지 않음
- 라우터에서는 get_storage 의존성으로 주입받음 (테스트에서 교체 가능)

"""

from dataclasses import dataclass
from functools import lru_cache
from urllib.parse import unquote, urlparse

from supabase import Client, create_client

from sif_cms.core.config import settings
from sif_cms.core.logging import get_logger

logger = get_logger(__name__)

PUBLIC_OBJECT_PREFIX = "/storage/v1/object/public/"


@dataclass(frozen=True)
class StoredFile:
    bucket: str
    path: str


@dataclass(frozen=True)
class UploadedFile:
    url: str
    bucket: str
    path: str
    name: str
    size: int
    content_type: str


class SupabaseStorage:
    """
    Supabase Storage 클라이언트 래퍼. 실패 시 벤더 예외를 그대로 전달한다.

    클라이언트는 첫 버킷 호출 시점에 생성하므로,
    버킷을 건드리지 않는 요청은 키 설정과 무관하게 동작한다.
    """

    def __init__(self, url: str, key: str):
        self._url = url
        self._key = key
        self._client: Client | None = None

    def _bucket(self, bucket: str):
        if self._client is None:
            self._client = create_client(self._url, self._key)
        return self._client.storage.from_(bucket)

    def upload(self, bucket: str, path: str, data: bytes, content_type: str) -> None:
        self._bucket(bucket).upload(
            path,
            data,
            {"content-type": content_type, "upsert": "false"},
        )

    def remove(self, bucket: str, path: str) -> None:
        self._bucket(bucket).remove([path])

    def public_url(self, bucket: str, path: str) -> str:
        return self._bucket(bucket).get_public_url(path)


@lru_cache
def get_storage() -> SupabaseStorage:
    return SupabaseStorage(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY)


"""
공개 URL 파싱

- {host}/storage/v1/object/public/{bucket}/{path...} 형식만 인식
- 쿼리스트링은 무시, path 는 URL 디코딩
- 형식이 다르면(외부 이미지, 빈 문자열 등) None

"""

def extract_url(public_url: str | None) -> StoredFile | None:
    if not public_url:
        return None
    try:
        parsed = urlparse(public_url)
    except ValueError:
        return None

    idx = parsed.path.find(PUBLIC_OBJECT_PREFIX)
    if idx < 0:
        return None

    rest = parsed.path[idx + len(PUBLIC_OBJECT_PREFIX):]
    bucket, sep, path = rest.partition("/")
    if not bucket or not sep or not path:
        return None
    return StoredFile(bucket=unquote(bucket), path=unquote(path))


def upload_file_to_bucket(
    storage,
    bucket: str,
    path: str,
    data: bytes,
    content_type: str,
    display_name: str,
) -> UploadedFile | None:
    try:
        storage.upload(bucket, path, data, content_type)
        url = storage.public_url(bucket, path)
    except Exception:
        logger.exception("upload failed: bucket=%s path=%s", bucket, path)
        return None

    return UploadedFile(
        url=url,
        bucket=bucket,
        path=path,
        name=display_name,
        size=len(data),
        content_type=content_type,
    )


def delete_file_from_bucket(storage, bucket: str, path: str) -> bool:
    try:
        storage.remove(bucket, path)
        return True
    except Exception as e:
        # 고아 파일은 허용되는 실패 모드 → 로그만 남기고 진행
        logger.warning("bucket delete failed: bucket=%s path=%s error=%s", bucket, path, e)
        return False
