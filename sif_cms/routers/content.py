"""
content.py

관리 대상 콘텐츠(home, about, gallery, holdings, pitches, newsletter, events, notes)
API 라우터 생성.

콘텐츠 종류마다 동일한 패턴의 엔드포인트를 ContentType 정의로부터 만든다.

관리자용 (/api/admin/{name}, 종류별 write 권한 키 필요):
- GET    /                : 목록
- POST   /                : 생성
- POST   /upload-image    : 이미지 업로드 (이미지가 있는 종류만)
- GET    /{id}            : 상세
- PUT    /{id}            : 수정 (보낸 필드만 반영)
- DELETE /{id}            : 삭제

공개 조회용 (/api/{name}, read 권한 키가 정의된 종류만 인증 필요):
- GET    /                : 목록
- GET    /{id}            : 상세

처리 흐름:
    parse → authorize → validate → fetch-existing → mutate → 이미지 정리 / 재검증 → respond

관련 파일:
- sif_cms.services.content : ContentType 정의 및 공통 로직

"""

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.orm import Session

from sif_cms.core.deps import get_db, require_permission
from sif_cms.models.user import User
from sif_cms.schemas.content import UploadImageResponse
from sif_cms.services import content as content_service
from sif_cms.services.content import CONTENT_TYPES, ContentType
from sif_cms.services.images import read_upload
from sif_cms.services.revalidation import get_revalidator
from sif_cms.services.storage import get_storage


def build_admin_router(ct: ContentType) -> APIRouter:
    router = APIRouter(prefix=f"/api/admin/{ct.name}", tags=[f"admin:{ct.name}"])
    guard = require_permission(ct.write_permission)
    InSchema = ct.in_schema

    @router.get("")
    def list_items(db: Session = Depends(get_db), _: User = Depends(guard)):
        return [content_service.to_out(ct, item) for item in content_service.list_items(db, ct)]

    @router.post("", status_code=status.HTTP_201_CREATED)
    def create_item(
        data: InSchema,
        db: Session = Depends(get_db),
        revalidator=Depends(get_revalidator),
        _: User = Depends(guard),
    ):
        item = content_service.create_item(
            db, revalidator, ct, data.model_dump(exclude_unset=True, exclude={"previous_image_url"})
        )
        return {
            "message": f"{ct.label} created successfully",
            "data": content_service.to_out(ct, item),
        }

    if ct.image_field:
        # /{id} 보다 먼저 등록
        @router.post("/upload-image", response_model=UploadImageResponse)
        def upload_image(
            file: UploadFile = File(...),
            previous_image_url: str | None = Form(default=None, alias="previousImageUrl"),
            db: Session = Depends(get_db),
            storage=Depends(get_storage),
            _: User = Depends(guard),
        ):
            uploaded = content_service.upload_item_image(
                db,
                storage,
                ct,
                filename=file.filename or "upload",
                content_type=file.content_type,
                data=read_upload(file.file),
                previous_url=previous_image_url,
            )
            return UploadImageResponse(url=uploaded.url)

    @router.get("/{item_id}")
    def get_item(item_id: str, db: Session = Depends(get_db), _: User = Depends(guard)):
        return content_service.to_out(ct, content_service.get_item(db, ct, item_id))

    @router.put("/{item_id}")
    def update_item(
        item_id: str,
        data: InSchema,
        db: Session = Depends(get_db),
        storage=Depends(get_storage),
        revalidator=Depends(get_revalidator),
        _: User = Depends(guard),
    ):
        item = content_service.update_item(
            db,
            storage,
            revalidator,
            ct,
            item_id,
            data.model_dump(exclude_unset=True, exclude={"previous_image_url"}),
            client_previous_url=data.previous_image_url,
        )
        return {
            "message": f"{ct.label} updated successfully",
            "data": content_service.to_out(ct, item),
        }

    @router.delete("/{item_id}")
    def delete_item(
        item_id: str,
        db: Session = Depends(get_db),
        storage=Depends(get_storage),
        revalidator=Depends(get_revalidator),
        _: User = Depends(guard),
    ):
        content_service.delete_item(db, storage, revalidator, ct, item_id)
        return {"message": f"{ct.label} deleted successfully"}

    return router


def build_public_router(ct: ContentType) -> APIRouter:
    dependencies = [Depends(require_permission(ct.read_permission))] if ct.read_permission else []
    router = APIRouter(prefix=f"/api/{ct.name}", tags=[ct.name], dependencies=dependencies)

    @router.get("")
    def list_items(db: Session = Depends(get_db)):
        return [content_service.to_out(ct, item) for item in content_service.list_items(db, ct)]

    @router.get("/{item_id}")
    def get_item(item_id: str, db: Session = Depends(get_db)):
        return content_service.to_out(ct, content_service.get_item(db, ct, item_id))

    return router


admin_routers = [build_admin_router(ct) for ct in CONTENT_TYPES.values()]
public_routers = [build_public_router(ct) for ct in CONTENT_TYPES.values()]
