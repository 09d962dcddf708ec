"""
exceptions.py

도메인 예외 및 FastAPI 예외 핸들러 정의 파일.

서비스 계층은 HTTP 개념을 import하지 않고 아래 예외를 발생시키며,
이 파일에 등록된 핸들러가 일관된 JSON 응답({"error": ...})으로 변환한다.

예외 계층:
    ClubAPIError (base)
    ├── UnauthorizedError   401  인증 없음 / 토큰 오류 / 비활성 계정
    ├── ForbiddenError      403  권한(permission) 또는 rank 부족
    ├── NotFoundError       404  대상 엔티티 없음
    ├── ValidationError     400  필수 필드 누락 / 형식 오류 / 잘못된 파일
    └── UpstreamFailure     500  데이터 저장소 / 버킷 호출 실패

이미지 정리(삭제) 실패는 예외가 아니라 로그로만 남긴다.

"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from sif_cms.core.logging import get_logger

logger = get_logger(__name__)


class ClubAPIError(Exception):
    status_code = 500

    def __init__(self, detail: str = "An error occurred"):
        self.detail = detail
        super().__init__(self.detail)


class UnauthorizedError(ClubAPIError):
    status_code = 401

    def __init__(self, detail: str = "Not authenticated"):
        super().__init__(detail)


class ForbiddenError(ClubAPIError):
    status_code = 403

    def __init__(self, detail: str = "Forbidden"):
        super().__init__(detail)


class NotFoundError(ClubAPIError):
    status_code = 404

    def __init__(self, detail: str = "Not found"):
        super().__init__(detail)


class ValidationError(ClubAPIError):
    status_code = 400


class UpstreamFailure(ClubAPIError):
    """데이터 저장소 / 버킷 실패. 내부 상세는 응답에 노출하지 않는다."""

    status_code = 500

    def __init__(self, detail: str = "An unexpected error occurred"):
        super().__init__(detail)


def _first_validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    err = errors[0]
    loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path", "form")]
    field = ".".join(loc)
    msg = err.get("msg", "Invalid value")
    return f"{field}: {msg}" if field else msg


def register_exception_handlers(app: FastAPI) -> None:
    """main.py에서 앱 생성 직후 한 번 호출"""

    @app.exception_handler(ClubAPIError)
    async def club_error_handler(request: Request, exc: ClubAPIError) -> JSONResponse:
        headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=headers)

    @app.exception_handler(HTTPException)
    async def http_error_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    # 필수 필드 누락 등 요청 본문 검증 실패는 422가 아니라 400으로 통일
    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": _first_validation_message(exc)})

    # 처리되지 않은 예외도 {"error"} 형식으로 응답 (상세는 로그에만)
    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("unhandled error: %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": UpstreamFailure().detail})
