import uuid
import datetime

from sqlalchemy import DateTime, Integer, Numeric, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from sif_cms.db.base import Base


class Holding(Base):
    """포트폴리오 보유 종목.

    cost_basis: 보유 수량 전체의 취득 원가 합계
    current_price: 1주당 현재가
    """

    __tablename__ = "holdings"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    company_name: Mapped[str] = mapped_column(String(200), nullable=False)
    ticker: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    sector: Mapped[str | None] = mapped_column(String(100), nullable=True)

    share_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    cost_basis: Mapped[float] = mapped_column(Numeric(14, 2, asdecimal=False), nullable=False, default=0)
    current_price: Mapped[float] = mapped_column(Numeric(14, 2, asdecimal=False), nullable=False, default=0)

    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.datetime.now(datetime.timezone.utc),
        nullable=False,
    )


class Portfolio(Base):
    """포트폴리오 현금 잔고 (단일 행, id=1)"""

    __tablename__ = "portfolio"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=1)
    cash_balance: Mapped[float] = mapped_column(Numeric(14, 2, asdecimal=False), nullable=False, default=0)
