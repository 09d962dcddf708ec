"""
holdings.py

포트폴리오 요약 / 현금 잔고 / 보유 종목 내보내기 API.

보유 종목 CRUD 는 sif_cms.routers.content 에서 공통 패턴으로 제공하고,
이 파일은 포트폴리오 단위 기능만 담당한다.
/{id} 경로보다 먼저 매칭되도록 main.py 에서 content 라우터보다 먼저 등록한다.

주요 기능:
- 포트폴리오 요약 (HOLDINGS_READ)
- 현금 잔고 조회 / 변경 (HOLDINGS_WRITE)
- 관리자용 CSV / Excel(xlsx) 데이터 내보내기 (HOLDINGS_WRITE)

관련 파일:
- sif_cms.services.holdings : 요약 계산 / 내보내기 행 생성

"""

import csv
import io
from datetime import date

from fastapi import APIRouter, Depends
from openpyxl import Workbook
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session
from starlette.responses import Response, StreamingResponse

from sif_cms.core.deps import get_db, require_permission
from sif_cms.core.permissions import Permission
from sif_cms.models.user import User
from sif_cms.services import holdings as holdings_service
from sif_cms.services.holdings import EXPORT_COLUMNS
from sif_cms.services.revalidation import get_revalidator

router = APIRouter(tags=["holdings"])


class CashUpdate(BaseModel):
    cash_balance: float = Field(ge=0)


# 포트폴리오 요약 (equity / cash / 손익)
@router.get("/api/holdings/summary")
def holdings_summary(
    db: Session = Depends(get_db),
    _: User = Depends(require_permission(Permission.HOLDINGS_READ)),
):
    return holdings_service.portfolio_summary(db)


@router.get("/api/admin/holdings/cash")
def get_cash(
    db: Session = Depends(get_db),
    _: User = Depends(require_permission(Permission.HOLDINGS_WRITE)),
):
    return {"cash_balance": holdings_service.get_cash_balance(db)}


@router.put("/api/admin/holdings/cash")
def set_cash(
    data: CashUpdate,
    db: Session = Depends(get_db),
    revalidator=Depends(get_revalidator),
    _: User = Depends(require_permission(Permission.HOLDINGS_WRITE)),
):
    amount = holdings_service.set_cash_balance(db, data.cash_balance)
    revalidator.revalidate("holdings")
    return {
        "message": "Cash balance updated",
        "data": {"cash_balance": amount},
    }


"""
보유 종목 CSV 다운로드 API

- 회사명 오름차순, 평가금액 / 평가손익 포함
- UTF-8 BOM을 추가하여 Excel에서 바로 열 수 있도록 처리

"""
@router.get("/api/admin/holdings/export")
def export_holdings_csv(
    db: Session = Depends(get_db),
    _: User = Depends(require_permission(Permission.HOLDINGS_WRITE)),
):
    rows = holdings_service.export_rows(db)

    def generate():
        yield "\ufeff"

        output = io.StringIO()
        writer = csv.writer(output)

        writer.writerow(EXPORT_COLUMNS)
        yield output.getvalue()
        output.seek(0)
        output.truncate(0)

        for row in rows:
            writer.writerow(row)
            yield output.getvalue()
            output.seek(0)
            output.truncate(0)

    filename = f"holdings_{date.today().isoformat()}.csv"
    headers = {"Content-Disposition": f'attachment; filename="{filename}"'}
    return StreamingResponse(generate(), media_type="text/csv; charset=utf-8", headers=headers)


# 보유 종목 Excel(xlsx) 다운로드 API (openpyxl)
@router.get("/api/admin/holdings/export.xlsx")
def export_holdings_xlsx(
    db: Session = Depends(get_db),
    _: User = Depends(require_permission(Permission.HOLDINGS_WRITE)),
):
    wb = Workbook()
    ws = wb.active
    ws.title = "holdings"

    ws.append(EXPORT_COLUMNS)
    for row in holdings_service.export_rows(db):
        ws.append(row)

    summary = holdings_service.portfolio_summary(db)
    ws2 = wb.create_sheet("summary")
    for key, value in summary.items():
        ws2.append([key, value])

    bio = io.BytesIO()
    wb.save(bio)
    bio.seek(0)

    filename = f"holdings_{date.today().isoformat()}.xlsx"
    headers = {"Content-Disposition": f'attachment; filename="{filename}"'}
    return Response(
        content=bio.getvalue(),
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers=headers,
    )
