"""
services/content.py

관리 대상 콘텐츠(홈/소개 섹션, 갤러리, 보유 종목, 피치, 뉴스레터, 행사, 회의록)의
공통 비즈니스 로직.

콘텐츠 종류마다 ContentType 정의(컬렉션, 필수 필드, 이미지 필드, 정렬 기준,
권한 키, 재검증 페이지)를 두고, 아래 함수들이 그 정의에 따라 동작한다.

처리 순서 (update 기준):
    필수 필드 검증 → 기존 레코드 조회 → 레코드 갱신 → 이전 이미지 정리 → 재검증

설계 원칙:
- 필수 필드 누락은 어떤 변경 / 버킷 호출보다 먼저 거부
- 이전 이미지 URL 은 DB에 저장된 값 기준으로만 판단 (클라이언트 값 신뢰 안 함)
- 이미지 정리는 레코드 변경이 성공한 뒤에만, 실패해도 요청은 성공
- HTTP / FastAPI 의존성 없음 (도메인 예외만 발생)

관련 파일:
- sif_cms.services.common       : 범용 CRUD
- sif_cms.services.images       : stage / reap
- sif_cms.services.revalidation : 재검증 신호
- sif_cms.routers.content       : 콘텐츠 API

"""

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel
from sqlalchemy.orm import Session

from sif_cms.core.config import settings
from sif_cms.core.exceptions import NotFoundError, UpstreamFailure, ValidationError
from sif_cms.core.logging import get_logger
from sif_cms.core.permissions import Permission
from sif_cms.db.base import model_for
from sif_cms.schemas import content as schemas
from sif_cms.services import common
from sif_cms.services.images import reap_if_replaced, reap_image, stage_image
from sif_cms.services.storage import UploadedFile, extract_url

logger = get_logger(__name__)


@dataclass(frozen=True)
class ContentType:
    name: str                      # URL 세그먼트 (/api/admin/{name})
    collection: str                # 테이블 이름
    label: str                     # 응답 메시지용 이름
    in_schema: type[BaseModel]
    out_schema: type[BaseModel]
    required: tuple[str, ...]
    write_permission: str
    read_permission: str | None = None   # None 이면 공개 조회
    order_field: str = "created_at"
    ascending: bool = False
    image_field: str | None = None
    page: str | None = None        # 재검증 페이지 분류 (기본값: name)
    folder: str | None = None      # 버킷 내 폴더 (기본값: name)

    @property
    def revalidate_page(self) -> str:
        return self.page or self.name

    @property
    def image_folder(self) -> str:
        return self.folder or self.name


CONTENT_TYPES: dict[str, ContentType] = {
    ct.name: ct
    for ct in (
        ContentType(
            name="home",
            collection="home_sections",
            label="Section",
            in_schema=schemas.HomeSectionIn,
            out_schema=schemas.HomeSectionOut,
            required=("title", "content", "image_url"),
            write_permission=Permission.ADMIN,
            order_field="order_index",
            ascending=True,
            image_field="image_url",
        ),
        ContentType(
            name="about",
            collection="about_sections",
            label="Section",
            in_schema=schemas.AboutSectionIn,
            out_schema=schemas.AboutSectionOut,
            required=("title", "content"),
            write_permission=Permission.ADMIN,
            order_field="order_index",
            ascending=True,
            image_field="image_url",
        ),
        ContentType(
            name="gallery",
            collection="gallery_images",
            label="Image",
            in_schema=schemas.GalleryImageIn,
            out_schema=schemas.GalleryImageOut,
            required=("title", "image_url"),
            write_permission=Permission.SECRETARY,
            order_field="date",
            image_field="image_url",
        ),
        ContentType(
            name="holdings",
            collection="holdings",
            label="Holding",
            in_schema=schemas.HoldingIn,
            out_schema=schemas.HoldingOut,
            required=("company_name", "ticker"),
            write_permission=Permission.HOLDINGS_WRITE,
            read_permission=Permission.HOLDINGS_READ,
            order_field="company_name",
            ascending=True,
        ),
        ContentType(
            name="pitches",
            collection="pitches",
            label="Pitch",
            in_schema=schemas.PitchIn,
            out_schema=schemas.PitchOut,
            required=("title", "symbol", "description"),
            write_permission=Permission.HOLDINGS_WRITE,
            read_permission=Permission.HOLDINGS_READ,
            order_field="date",
            image_field="image_url",
        ),
        ContentType(
            name="newsletter",
            collection="newsletter_posts",
            label="Post",
            in_schema=schemas.NewsletterPostIn,
            out_schema=schemas.NewsletterPostOut,
            required=("title", "content"),
            write_permission=Permission.ADMIN,
            order_field="date",
            image_field="image_url",
        ),
        ContentType(
            name="events",
            collection="events",
            label="Event",
            in_schema=schemas.EventIn,
            out_schema=schemas.EventOut,
            required=("speaker_name", "title", "description"),
            write_permission=Permission.ADMIN,
            order_field="date",
            image_field="image_url",
        ),
        ContentType(
            name="notes",
            collection="notes",
            label="Note",
            in_schema=schemas.NoteIn,
            out_schema=schemas.NoteOut,
            required=("title", "content"),
            write_permission=Permission.SECRETARY,
            read_permission=Permission.USER,
            order_field="date",
        ),
    )
}


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


"""
필수 필드 검증

- 누락 / 빈 문자열 / 공백만 있는 문자열이면 ValidationError
- 변경이나 버킷 호출 전에 호출해야 함

"""

def validate_required(ct: ContentType, data: dict) -> None:
    missing = [f for f in ct.required if _is_blank(data.get(f))]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")


def list_items(db: Session, ct: ContentType) -> list:
    return common.get_all(db, ct.collection, ct.order_field, ct.ascending)


def get_item(db: Session, ct: ContentType, id: Any):
    item = common.get_by_id(db, ct.collection, id)
    if item is None:
        raise NotFoundError(f"{ct.label} not found")
    return item


def create_item(db: Session, revalidator, ct: ContentType, data: dict):
    validate_required(ct, data)

    record = {k: v for k, v in data.items() if v is not None}
    item = common.create(db, ct.collection, record)
    if item is None:
        raise UpstreamFailure(f"Failed to create {ct.label.lower()}")

    revalidator.revalidate(ct.revalidate_page, item.id)
    return item


"""
콘텐츠 수정

- data 에는 클라이언트가 실제로 보낸 필드만 포함 (보내지 않은 필드는 기존 값 유지)
- order_index 를 보내지 않으면 기존 순서 유지
- 이미지가 바뀌었으면 커밋 성공 후 DB에 저장돼 있던 이전 이미지를 정리
- client_previous_url 은 로그 비교용으로만 사용

"""

def update_item(
    db: Session,
    storage,
    revalidator,
    ct: ContentType,
    id: Any,
    data: dict,
    client_previous_url: str | None = None,
):
    validate_required(ct, data)

    existing = get_item(db, ct, id)
    old_image = getattr(existing, ct.image_field) if ct.image_field else None

    # NOT NULL 컬럼(order_index 등)에 null 이 오면 기존 값 유지
    columns = model_for(ct.collection).__table__.columns
    partial = {
        k: v for k, v in data.items()
        if v is not None or (k in columns and columns[k].nullable)
    }

    if client_previous_url and client_previous_url != old_image:
        logger.warning(
            "ignoring client previousImageUrl that differs from stored value: collection=%s id=%s",
            ct.collection,
            id,
        )

    if not common.update(db, ct.collection, existing.id, partial):
        raise UpstreamFailure(f"Failed to update {ct.label.lower()}")

    if ct.image_field and ct.image_field in partial:
        reap_if_replaced(storage, old_image, partial[ct.image_field])

    revalidator.revalidate(ct.revalidate_page, existing.id)
    return get_item(db, ct, existing.id)


def delete_item(db: Session, storage, revalidator, ct: ContentType, id: Any) -> None:
    existing = get_item(db, ct, id)
    old_image = getattr(existing, ct.image_field) if ct.image_field else None
    item_id = existing.id

    if not common.remove(db, ct.collection, item_id):
        raise UpstreamFailure(f"Failed to delete {ct.label.lower()}")

    # 레코드 삭제 후에는 이미지에 도달할 경로가 없으므로 순서 무관, 실패해도 성공 처리
    if old_image:
        reap_image(storage, old_image)

    revalidator.revalidate(ct.revalidate_page, item_id)


"""
콘텐츠 이미지 업로드 (stage 단계)

- 형식 / 크기 검증 후 버킷에 업로드하고 공개 URL 반환
- previous_url 은 "아직 어떤 레코드에도 저장되지 않은" 같은 폴더의 업로드일 때만 정리
  (저장 전에 이미지를 다시 고른 경우의 고아 파일 정리 용도)

"""

def upload_item_image(
    db: Session,
    storage,
    ct: ContentType,
    *,
    filename: str,
    content_type: str | None,
    data: bytes,
    previous_url: str | None = None,
) -> UploadedFile:
    if ct.image_field is None:
        raise ValidationError(f"{ct.label} has no image")

    uploaded = stage_image(
        storage,
        bucket=settings.IMAGE_BUCKET,
        folder=ct.image_folder,
        filename=filename,
        data=data,
        content_type=content_type,
    )

    if previous_url and previous_url != uploaded.url and _is_unreferenced_upload(db, ct, previous_url):
        reap_image(storage, previous_url)

    return uploaded


def _is_unreferenced_upload(db: Session, ct: ContentType, url: str) -> bool:
    info = extract_url(url)
    if info is None:
        return False
    if info.bucket != settings.IMAGE_BUCKET or not info.path.startswith(f"{ct.image_folder}/"):
        logger.warning("refusing to reap previousImageUrl outside %s/: %s", ct.image_folder, url)
        return False
    return common.get_by_field(db, ct.collection, ct.image_field, url) is None


def to_out(ct: ContentType, item) -> dict:
    return ct.out_schema.model_validate(item).model_dump(mode="json")
