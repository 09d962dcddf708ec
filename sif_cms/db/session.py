"""
session.py

데이터베이스 엔진 및 세션(Session) 관리 파일.

요청 단위 세션은 sif_cms.core.deps.get_db 의존성이 열고 닫는다.
별도의 트랜잭션 / 락 규칙은 두지 않으며, 레코드 단위 원자성은 DB에 맡긴다.
(조회 후 수정처럼 두 번 나뉜 호출 사이의 경합은 last-writer-wins)

관련 파일:
- sif_cms.core.config    : DATABASE_URL 설정
- sif_cms.core.deps      : get_db 의존성
- tests/conftest.py      : make_engine 으로 테스트용 엔진 생성

"""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from sif_cms.core.config import settings


def make_engine(url: str) -> Engine:
    # 인메모리 SQLite 는 하나의 커넥션을 스레드 간 공유해야 테이블이 유지됨
    if url.startswith("sqlite"):
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    # pool_pre_ping=True: 장시간 idle 후 끊어진 커넥션 자동 감지/재연결
    return create_engine(url, pool_pre_ping=True)


engine = make_engine(settings.DATABASE_URL)

# 요청 단위로 사용할 세션 팩토리
# expire_on_commit=False: 커밋 후에도 응답 직렬화에 레코드 값을 그대로 사용
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
    bind=engine,
)
