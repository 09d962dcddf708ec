"""
services/revalidation.py

프론트엔드 페이지 캐시 재검증(revalidation) 신호 전송.

콘텐츠 변경이 성공한 뒤, 영향을 받는 페이지 분류(page)와 식별자(id)를
프론트엔드의 재검증 훅(REVALIDATE_URL)으로 POST 한다.

설계 원칙:
- 재검증 실패는 변경 결과에 영향을 주지 않음 (로그만 남김)
- REVALIDATE_URL 이 비어 있으면 호출하지 않음
- 라우터에서는 get_revalidator 의존성으로 주입받음 (테스트에서 교체 가능)

"""

from functools import lru_cache

import httpx

from sif_cms.core.config import settings
from sif_cms.core.logging import get_logger

logger = get_logger(__name__)


class Revalidator:
    def __init__(self, url: str | None, secret: str | None = None, timeout: float = 5.0):
        self._url = url
        self._secret = secret
        self._timeout = timeout

    def revalidate(self, page: str, id=None) -> bool:
        if not self._url:
            logger.debug("revalidate skipped (no REVALIDATE_URL): page=%s id=%s", page, id)
            return False

        headers = {"x-revalidate-secret": self._secret} if self._secret else {}
        payload = {"page": page, "id": str(id) if id is not None else None}
        try:
            response = httpx.post(self._url, json=payload, headers=headers, timeout=self._timeout)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning("revalidate failed: page=%s id=%s error=%s", page, id, e)
            return False
        return True


@lru_cache
def get_revalidator() -> Revalidator:
    return Revalidator(
        settings.REVALIDATE_URL,
        settings.REVALIDATE_SECRET,
        settings.REVALIDATE_TIMEOUT_SECONDS,
    )
