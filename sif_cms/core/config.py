"""
config.py

애플리케이션 전역 설정(Configuration) 관리 파일.

이 파일은 .env 환경 변수들을 Pydantic BaseSettings를 통해 로드하여
애플리케이션 전반에서 공통으로 사용하는 설정 값을 제공한다.

주요 설정 항목:
- 데이터베이스 연결 정보
- JWT 인증 관련 시크릿 및 만료 정책
- 오브젝트 스토리지(Supabase Storage) 접속 정보
- 페이지 재검증(revalidation) 훅 주소
- 이미지 업로드 제한
- CORS 허용 도메인 목록

설계 원칙:
- 모든 환경 변수는 이 파일을 통해서만 접근
- 로컬 / 테스트 / 운영 환경을 .env로 분리하여 관리
- 설정 값은 런타임 중 변경되지 않는 불변 객체로 취급

관련 파일:
- sif_cms.main                  : CORS / 로깅 초기화 시 설정 사용
- sif_cms.core.security         : JWT 시크릿 / 만료 설정 사용
- sif_cms.db.session            : DATABASE_URL 사용
- sif_cms.services.storage      : SUPABASE_* 사용
- sif_cms.services.revalidation : REVALIDATE_* 사용

"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

# .env 파일에 정의된 환경 변수를 로드하는 설정 클래스
# extra="ignore" 옵션으로 정의되지 않은 환경 변수는 무시
class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    DATABASE_URL: str
    TEST_DATABASE_URL: str | None = None

    SECRET_KEY: str
    ALGORITHM: str = "HS256"

    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # 외부 인증 제공자(세션 provider)가 /auth/external 호출 시 보내는 공유 시크릿
    AUTH_PROVIDER_SECRET: str | None = None

    # Supabase Storage
    # - 공개 URL 형식: {SUPABASE_URL}/storage/v1/object/public/{bucket}/{path}
    SUPABASE_URL: str = "http://localhost:54321"
    SUPABASE_SERVICE_ROLE_KEY: str = ""
    IMAGE_BUCKET: str = "images"
    PROFILE_PICTURE_BUCKET: str = "profile-pictures"

    # 프론트엔드 페이지 재검증 훅
    # - 비어 있으면 로그만 남기고 호출하지 않음
    REVALIDATE_URL: str | None = None
    REVALIDATE_SECRET: str | None = None
    REVALIDATE_TIMEOUT_SECONDS: float = 5.0

    # 이미지 업로드 최대 크기 (5MB, 경계값 포함 허용)
    MAX_IMAGE_BYTES: int = 5 * 1024 * 1024

    LOG_LEVEL: str = "INFO"

    # CORS 허용 도메인 (프론트엔드 주소)
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

# 애플리케이션 전역에서 import하여 사용하는 Settings 인스턴스
# 실행 시 한 번만 생성됨
settings = Settings()
