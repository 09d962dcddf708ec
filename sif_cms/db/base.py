"""
base.py

SQLAlchemy ORM Base 및 컬렉션(테이블) 이름 → 모델 조회 헬퍼.

모든 모델(User, HomeSection, Holding 등)은 이 Base 를 상속하며,
데이터 접근 계층(sif_cms.services.common)은 테이블 이름만으로
모델 클래스를 찾아 범용 CRUD 를 수행한다.

관련 파일:
- sif_cms.models.*           : 모든 ORM 모델
- sif_cms.services.common    : 컬렉션 이름 기반 CRUD
- alembic/env.py             : 마이그레이션 메타데이터 로드

"""

from sqlalchemy.orm import declarative_base

# 모든 ORM 모델이 상속받는 Base 클래스
Base = declarative_base()


def model_for(collection: str):
    for mapper in Base.registry.mappers:
        if getattr(mapper.class_, "__tablename__", None) == collection:
            return mapper.class_
    raise KeyError(f"Unknown collection: {collection}")
