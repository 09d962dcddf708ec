"""
services/common.py

컬렉션(테이블) 이름으로 동작하는 범용 데이터 접근 계층.

엔티티 서비스(users, content, holdings)는 이 파일의 함수만 사용해
DB 조회/생성/수정/삭제를 수행한다.

설계 원칙:
- 서비스 경계를 넘어 예외를 던지지 않음
  (조회 실패 → [] / None, 변경 실패 → None / False 를 반환하고 로그 기록)
- 각 변경 함수는 즉시 commit (여러 호출을 묶는 트랜잭션 없음)
- id 가 형식에 맞지 않으면 "없음"으로 취급

관련 파일:
- sif_cms.db.base          : model_for (컬렉션 이름 → 모델)
- sif_cms.services.storage : 버킷 관련 헬퍼

"""

import uuid
from typing import Any

from sqlalchemy import asc, desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.types import Uuid

from sif_cms.core.logging import get_logger
from sif_cms.db.base import model_for

logger = get_logger(__name__)

_MISSING = object()


def _coerce_id(model, value: Any):
    pk = model.__table__.primary_key.columns.values()[0]
    if isinstance(pk.type, Uuid):
        if isinstance(value, uuid.UUID):
            return value
        try:
            return uuid.UUID(str(value))
        except ValueError:
            return _MISSING
    try:
        return pk.type.python_type(value)
    except (TypeError, ValueError, NotImplementedError):
        return value


def _column_names(model) -> set[str]:
    return {c.key for c in model.__table__.columns}


"""
전체 조회

- order_field 가 주어지면 해당 컬럼 기준 정렬 (ascending=False 면 내림차순)
- 레코드가 없거나 조회 실패 시 빈 리스트

"""

def get_all(db: Session, collection: str, order_field: str | None = None, ascending: bool = True) -> list:
    model = model_for(collection)
    stmt = select(model)
    if order_field:
        column = getattr(model, order_field)
        stmt = stmt.order_by(asc(column) if ascending else desc(column))
    try:
        return list(db.scalars(stmt).all())
    except SQLAlchemyError:
        logger.exception("get_all failed: collection=%s", collection)
        db.rollback()
        return []


def get_by_id(db: Session, collection: str, id: Any):
    model = model_for(collection)
    key = _coerce_id(model, id)
    if key is _MISSING:
        return None
    try:
        return db.get(model, key)
    except SQLAlchemyError:
        logger.exception("get_by_id failed: collection=%s id=%s", collection, id)
        db.rollback()
        return None


def get_by_field(db: Session, collection: str, field: str, value: Any):
    model = model_for(collection)
    try:
        return db.scalars(select(model).where(getattr(model, field) == value).limit(1)).first()
    except SQLAlchemyError:
        logger.exception("get_by_field failed: collection=%s field=%s", collection, field)
        db.rollback()
        return None


"""
레코드 생성

- 모델에 없는 키는 무시
- 성공 시 생성된 레코드(refresh 완료), 실패 시 None

"""

def create(db: Session, collection: str, record: dict):
    model = model_for(collection)
    columns = _column_names(model)
    obj = model(**{k: v for k, v in record.items() if k in columns})
    try:
        db.add(obj)
        db.commit()
        db.refresh(obj)
        return obj
    except SQLAlchemyError:
        logger.exception("create failed: collection=%s", collection)
        db.rollback()
        return None


def update(db: Session, collection: str, id: Any, partial: dict) -> bool:
    obj = get_by_id(db, collection, id)
    if obj is None:
        return False
    columns = _column_names(type(obj))
    try:
        for key, value in partial.items():
            if key in columns and key != "id":
                setattr(obj, key, value)
        db.commit()
        return True
    except SQLAlchemyError:
        logger.exception("update failed: collection=%s id=%s", collection, id)
        db.rollback()
        return False


def remove(db: Session, collection: str, id: Any) -> bool:
    obj = get_by_id(db, collection, id)
    if obj is None:
        return False
    try:
        db.delete(obj)
        db.commit()
        return True
    except SQLAlchemyError:
        logger.exception("remove failed: collection=%s id=%s", collection, id)
        db.rollback()
        return False
