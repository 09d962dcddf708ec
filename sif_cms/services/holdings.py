"""
services/holdings.py

보유 종목(Holding) / 포트폴리오 현금 잔고 관련 비즈니스 로직.

보유 종목 자체의 CRUD 는 sif_cms.services.content 의 공통 흐름을 따르고,
이 파일은 포트폴리오 단위 계산과 내보내기 데이터만 담당한다.

계산 규칙:
- equity          : Σ (current_price × share_count)
- cost_basis      : Σ cost_basis (보유 수량 전체 취득 원가)
- total_value     : equity + cash_balance
- equity / cash % : total_value 대비 비율 (total_value 가 0 이면 0)
- gain_loss       : equity - cost_basis
- gain_loss %     : cost_basis 대비 비율 (cost_basis 가 0 이면 0)

관련 파일:
- sif_cms.models.holding   : Holding / Portfolio 모델
- sif_cms.routers.holdings : 요약 / 현금 / 내보내기 API

"""

from sqlalchemy.orm import Session

from sif_cms.core.exceptions import UpstreamFailure
from sif_cms.services import common

HOLDINGS = "holdings"
PORTFOLIO = "portfolio"
PORTFOLIO_ID = 1

EXPORT_COLUMNS = [
    "company_name",
    "ticker",
    "sector",
    "share_count",
    "cost_basis",
    "current_price",
    "market_value",
    "gain_loss",
]


def _pct(part: float, whole: float) -> float:
    if whole <= 0:
        return 0.0
    return round(part / whole * 100, 2)


def get_cash_balance(db: Session) -> float:
    portfolio = common.get_by_id(db, PORTFOLIO, PORTFOLIO_ID)
    return float(portfolio.cash_balance) if portfolio else 0.0


"""
현금 잔고 설정

- 포트폴리오 행이 없으면 생성, 있으면 갱신
- 실패 시 UpstreamFailure

"""

def set_cash_balance(db: Session, amount: float) -> float:
    if common.get_by_id(db, PORTFOLIO, PORTFOLIO_ID) is None:
        ok = common.create(db, PORTFOLIO, {"id": PORTFOLIO_ID, "cash_balance": amount}) is not None
    else:
        ok = common.update(db, PORTFOLIO, PORTFOLIO_ID, {"cash_balance": amount})
    if not ok:
        raise UpstreamFailure("Failed to update cash balance")
    return amount


# 드라이버별 반환 타입(int / Decimal / float)을 float 으로 통일
def _money(value) -> float:
    return float(value or 0)


def market_value(holding) -> float:
    return _money(holding.current_price) * (holding.share_count or 0)


def portfolio_summary(db: Session) -> dict:
    holdings = common.get_all(db, HOLDINGS, "company_name", True)
    cash = get_cash_balance(db)

    equity = sum(market_value(h) for h in holdings)
    cost_basis = sum(_money(h.cost_basis) for h in holdings)
    total_value = equity + cash
    gain_loss = equity - cost_basis

    return {
        "holding_count": len(holdings),
        "equity": round(equity, 2),
        "cash_balance": round(cash, 2),
        "total_value": round(total_value, 2),
        "equity_percent": _pct(equity, total_value),
        "cash_percent": _pct(cash, total_value),
        "cost_basis": round(cost_basis, 2),
        "gain_loss": round(gain_loss, 2),
        "gain_loss_percent": _pct(gain_loss, cost_basis) if cost_basis > 0 else 0.0,
    }


# 내보내기용 행 목록 (헤더는 EXPORT_COLUMNS)
def export_rows(db: Session) -> list[list]:
    rows = []
    for h in common.get_all(db, HOLDINGS, "company_name", True):
        value = market_value(h)
        rows.append([
            h.company_name,
            h.ticker,
            h.sector or "",
            h.share_count,
            _money(h.cost_basis),
            _money(h.current_price),
            round(value, 2),
            round(value - _money(h.cost_basis), 2),
        ])
    return rows
