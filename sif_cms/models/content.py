"""
content.py

관리 대상 콘텐츠(Managed Content) 모델 정의 파일.

홈 / 소개 페이지 섹션, 갤러리, 종목 피치, 뉴스레터, 초청 연사 행사, 회의록.
각 엔티티는 id, 정렬용 필드(order_index 또는 date), 텍스트 필드,
그리고 선택적으로 버킷 이미지의 공개 URL 을 가진다.

이미지 URL 이 바뀌거나 엔티티가 삭제되면 이전 이미지는
sif_cms.services.images 에서 버킷으로부터 정리(reap)된다.

"""

import uuid
import datetime

from sqlalchemy import Date, DateTime, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from sif_cms.db.base import Base


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class _ContentMixin:
    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)


class HomeSection(_ContentMixin, Base):
    __tablename__ = "home_sections"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    image_url: Mapped[str] = mapped_column(String(1024), nullable=False)
    order_index: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class AboutSection(_ContentMixin, Base):
    __tablename__ = "about_sections"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    image_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    order_index: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class GalleryImage(_ContentMixin, Base):
    __tablename__ = "gallery_images"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    image_url: Mapped[str] = mapped_column(String(1024), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    alt: Mapped[str | None] = mapped_column(String(300), nullable=True)
    date: Mapped[datetime.date | None] = mapped_column(Date, nullable=True)


class Pitch(_ContentMixin, Base):
    """종목 피치(stock pitch)"""

    __tablename__ = "pitches"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    symbol: Mapped[str] = mapped_column(String(20), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    date: Mapped[datetime.date | None] = mapped_column(Date, nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)


class NewsletterPost(_ContentMixin, Base):
    __tablename__ = "newsletter_posts"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    author: Mapped[str | None] = mapped_column(String(100), nullable=True)
    date: Mapped[datetime.date | None] = mapped_column(Date, nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)


class Event(_ContentMixin, Base):
    """초청 연사(guest speaker) 행사"""

    __tablename__ = "events"

    speaker_name: Mapped[str] = mapped_column(String(100), nullable=False)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    date: Mapped[datetime.date | None] = mapped_column(Date, nullable=True)
    location: Mapped[str | None] = mapped_column(String(200), nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)


class Note(_ContentMixin, Base):
    """회의록(meeting minutes)"""

    __tablename__ = "notes"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    date: Mapped[datetime.date | None] = mapped_column(Date, nullable=True)
    author: Mapped[str | None] = mapped_column(String(100), nullable=True)
