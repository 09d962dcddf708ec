import uuid
import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# 🔹 요청 스키마
# 필수 필드(비어 있으면 안 됨) 검증은 서비스 계층(sif_cms.services.content)에서 수행
# previousImageUrl 은 호환용으로만 받으며 이미지 정리에는 사용하지 않음

class ContentIn(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    previous_image_url: Optional[str] = Field(default=None, alias="previousImageUrl")


class HomeSectionIn(ContentIn):
    title: Optional[str] = None
    content: Optional[str] = None
    image_url: Optional[str] = None
    order_index: Optional[int] = None


class AboutSectionIn(HomeSectionIn):
    pass


class GalleryImageIn(ContentIn):
    title: Optional[str] = None
    image_url: Optional[str] = None
    description: Optional[str] = None
    alt: Optional[str] = None
    date: Optional[dt.date] = None


class PitchIn(ContentIn):
    title: Optional[str] = None
    symbol: Optional[str] = None
    description: Optional[str] = None
    date: Optional[dt.date] = None
    image_url: Optional[str] = None


class NewsletterPostIn(ContentIn):
    title: Optional[str] = None
    content: Optional[str] = None
    author: Optional[str] = None
    date: Optional[dt.date] = None
    image_url: Optional[str] = None


class EventIn(ContentIn):
    speaker_name: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    date: Optional[dt.date] = None
    location: Optional[str] = None
    image_url: Optional[str] = None


class NoteIn(ContentIn):
    title: Optional[str] = None
    content: Optional[str] = None
    date: Optional[dt.date] = None
    author: Optional[str] = None


class HoldingIn(ContentIn):
    company_name: Optional[str] = None
    ticker: Optional[str] = None
    sector: Optional[str] = None
    share_count: Optional[int] = Field(default=None, ge=0)
    cost_basis: Optional[float] = Field(default=None, ge=0)
    current_price: Optional[float] = Field(default=None, ge=0)


# 🔹 응답 스키마

class ContentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    created_at: dt.datetime


class HomeSectionOut(ContentOut):
    title: str
    content: str
    image_url: str
    order_index: int


class AboutSectionOut(ContentOut):
    title: str
    content: str
    image_url: Optional[str]
    order_index: int


class GalleryImageOut(ContentOut):
    title: str
    image_url: str
    description: Optional[str]
    alt: Optional[str]
    date: Optional[dt.date]


class PitchOut(ContentOut):
    title: str
    symbol: str
    description: str
    date: Optional[dt.date]
    image_url: Optional[str]


class NewsletterPostOut(ContentOut):
    title: str
    content: str
    author: Optional[str]
    date: Optional[dt.date]
    image_url: Optional[str]


class EventOut(ContentOut):
    speaker_name: str
    title: str
    description: str
    date: Optional[dt.date]
    location: Optional[str]
    image_url: Optional[str]


class NoteOut(ContentOut):
    title: str
    content: str
    date: Optional[dt.date]
    author: Optional[str]


class HoldingOut(ContentOut):
    company_name: str
    ticker: str
    sector: Optional[str]
    share_count: int
    cost_basis: float
    current_price: float


class UploadImageResponse(BaseModel):
    url: str
    message: str = "Image uploaded successfully"
