import os

# 앱 import 전에 필수 설정 채우기 (.env 없이도 테스트 가능하도록)
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("AUTH_PROVIDER_SECRET", "test-provider-secret")
os.environ.setdefault("SUPABASE_URL", "https://proj.supabase.co")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from sif_cms.main import app as fastapi_app
from sif_cms.core.config import settings
from sif_cms.core.deps import get_db
from sif_cms.db.base import Base
from sif_cms.db.session import make_engine
from sif_cms.services.revalidation import get_revalidator
from sif_cms.services.storage import get_storage
from tests.helpers import FakeRevalidator, FakeStorage

# ✅ 모델 import (Base.metadata에 테이블 등록)
import sif_cms.models  # noqa: F401


TEST_DB_URL = settings.TEST_DATABASE_URL or "sqlite://"

engine = make_engine(TEST_DB_URL)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="session", autouse=True)
def setup_test_db():
    """테스트 전체 시작/종료 때만 스키마 생성/삭제"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def clean_tables():
    """각 테스트마다 데이터 초기화 (테이블은 유지, row만 삭제)"""
    yield
    with engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())


@pytest.fixture()
def db_session():
    """테스트에서 직접 DB 조작할 때 쓰는 세션"""
    session = TestingSessionLocal()
    try:
        yield session
        session.commit()
    finally:
        session.close()


@pytest.fixture()
def storage():
    return FakeStorage()


@pytest.fixture()
def revalidator():
    return FakeRevalidator()


@pytest.fixture()
def client(storage, revalidator):
    fastapi_app.dependency_overrides[get_db] = override_get_db
    fastapi_app.dependency_overrides[get_storage] = lambda: storage
    fastapi_app.dependency_overrides[get_revalidator] = lambda: revalidator
    with TestClient(fastapi_app) as c:
        yield c
    fastapi_app.dependency_overrides.clear()
