"""
이미지 수명 주기 / 버킷 헬퍼 단위 테스트.
- 공개 URL → (bucket, path) 파싱, 업로드 검증(타입 / 5MB 경계),
  교체 시 이전 파일만 삭제, 삭제 실패 시에도 예외가 나지 않는지 검증한다.
"""

import io

import pytest

from sif_cms.core.exceptions import UpstreamFailure, ValidationError
from sif_cms.services.images import (
    build_object_path,
    read_upload,
    reap_if_replaced,
    reap_image,
    stage_image,
    validate_image,
)
from sif_cms.services.storage import (
    StoredFile,
    delete_file_from_bucket,
    extract_url,
    upload_file_to_bucket,
)
from tests.helpers import FakeStorage, public_url

LIMIT = 5 * 1024 * 1024


def test_extract_url_parses_bucket_and_path():
    url = "https://proj.supabase.co/storage/v1/object/public/images/home/1700000000000_a%20b.png"
    assert extract_url(url) == StoredFile(bucket="images", path="home/1700000000000_a b.png")


def test_extract_url_ignores_query_string():
    url = "https://proj.supabase.co/storage/v1/object/public/profile-pictures/profile_pictures/u1/x.jpg?t=1"
    assert extract_url(url) == StoredFile(bucket="profile-pictures", path="profile_pictures/u1/x.jpg")


@pytest.mark.parametrize(
    "url",
    [
        None,
        "",
        "not a url",
        "https://cdn.example.com/images/a.png",
        "https://proj.supabase.co/storage/v1/object/public/images",
        "https://proj.supabase.co/storage/v1/object/public/images/",
        "https://proj.supabase.co/storage/v1/object/sign/images/a.png",
    ],
)
def test_extract_url_unrecognized_returns_none(url):
    assert extract_url(url) is None


def test_validate_image_types():
    for ct in ("image/jpeg", "image/png", "image/gif"):
        validate_image(ct, 10)
    for ct in ("image/webp", "application/pdf", "text/plain", None):
        with pytest.raises(ValidationError):
            validate_image(ct, 10)


def test_validate_image_size_boundary():
    validate_image("image/png", LIMIT, max_bytes=LIMIT)
    with pytest.raises(ValidationError):
        validate_image("image/png", LIMIT + 1, max_bytes=LIMIT)


def test_build_object_path():
    assert build_object_path("home", "my photo.png", now_ms=42) == "home/42_my_photo.png"
    assert build_object_path("gallery", "  ", now_ms=1) == "gallery/1_upload"


def test_read_upload_reads_one_byte_past_limit():
    data = read_upload(io.BytesIO(b"x" * 20), max_bytes=10)
    assert len(data) == 11


def test_stage_image_rejects_before_bucket_call():
    storage = FakeStorage()
    with pytest.raises(ValidationError):
        stage_image(storage, bucket="images", folder="home", filename="a.txt", data=b"hi", content_type="text/plain")
    assert storage.calls == 0


def test_stage_image_upload_failure_is_upstream_failure():
    storage = FakeStorage()
    storage.fail_upload = True
    with pytest.raises(UpstreamFailure):
        stage_image(storage, bucket="images", folder="home", filename="a.png", data=b"x", content_type="image/png")


def test_upload_file_to_bucket_returns_metadata():
    storage = FakeStorage()
    uploaded = upload_file_to_bucket(storage, "images", "home/1_a.png", b"abc", "image/png", "1_a.png")
    assert uploaded.url == public_url("home/1_a.png")
    assert uploaded.size == 3
    assert uploaded.name == "1_a.png"
    assert storage.uploads == [("images", "home/1_a.png")]


def test_delete_file_from_bucket_failure_is_swallowed():
    storage = FakeStorage()
    storage.fail_remove = True
    assert delete_file_from_bucket(storage, "images", "home/1_a.png") is False


def test_reap_if_replaced_deletes_only_previous():
    storage = FakeStorage()
    old, new = public_url("home/1_old.png"), public_url("home/2_new.png")

    assert reap_if_replaced(storage, old, new) is True
    assert storage.removed == [("images", "home/1_old.png")]

    storage.removed.clear()
    assert reap_if_replaced(storage, new, new) is False
    assert reap_if_replaced(storage, None, new) is False
    assert storage.removed == []


def test_reap_image_external_url_is_noop():
    storage = FakeStorage()
    assert reap_image(storage, "https://cdn.example.com/a.png") is False
    assert storage.calls == 0
