"""
admin_deposits.py

관리자 전용 조인 입금 현황 API.

주요 기능:
- 입금 상태 / 예약 기간별 조인 목록 조회
- 같은 조건의 목록을 Excel(xlsx)로 내보내기
- 조인 입금 상태 변경 (입금 확인 / 환불 처리)

관련 파일:
- golf_intranet.services.join_persons  : 입금 현황 조회 / 상태 전이 로직
- golf_intranet.routers.joins          : 조인 취소 / 유형 변경 API

"""

import io
import logging
import uuid
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query
from openpyxl import Workbook
from sqlalchemy.orm import Session
from starlette.responses import Response

from golf_intranet.core.deps import get_db, get_current_admin, get_join_store
from golf_intranet.models.join_person import JoinPersonStatus
from golf_intranet.models.user import User
from golf_intranet.schemas.join_person import DepositRow, JoinPersonResponse, JoinStatusUpdateRequest
from golf_intranet.services.join_persons import advance_status, list_deposits
from golf_intranet.services.join_store import JoinStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/deposits", tags=["admin-deposits"])


def _check_range(start: datetime | None, end: datetime | None) -> None:
    if start and end and start > end:
        raise HTTPException(status_code=400, detail="start must be before end")


# 영문 태그(CONFIRMED) 또는 한글 라벨(입금완료)
def _parse_status(value: str | None) -> JoinPersonStatus | None:
    if value is None:
        return None
    try:
        return JoinPersonStatus.parse(value)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("", response_model=list[DepositRow])
def deposit_status(
    status: str | None = Query(default=None, description="예: 입금확인전"),
    start: datetime | None = None,
    end: datetime | None = None,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_admin),
):
    _check_range(start, end)
    join_status = _parse_status(status)
    return [
        DepositRow(
            join_id=jp.id,
            time_id=ct.id,
            reserved_time=ct.reserved_time,
            reserved_name=ct.reserved_name,
            name=jp.name,
            phone_number=jp.phone_number,
            join_type=jp.join_type,
            green_fee=jp.green_fee,
            charge_fee=jp.charge_fee,
            status=jp.status,
        )
        for jp, ct in list_deposits(db, status=join_status, start=start, end=end)
    ]


"""
입금 현황 Excel(xlsx) 다운로드 API

- 한글 라벨(조인 유형 / 입금 상태) 그대로 기록
- 조건에 맞는 조인이 없으면 헤더만 있는 파일 반환

"""
@router.get("/export.xlsx")
def export_deposits_xlsx(
    status: str | None = Query(default=None, description="예: 입금확인전"),
    start: datetime | None = None,
    end: datetime | None = None,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_admin),
):
    _check_range(start, end)
    join_status = _parse_status(status)

    wb = Workbook()
    ws = wb.active
    ws.title = "deposits"

    ws.append(["reserved_time", "reserved_name", "name", "phone_number", "join_type", "green_fee", "charge_fee", "status"])

    for jp, ct in list_deposits(db, status=join_status, start=start, end=end):
        ws.append([
            ct.reserved_time.strftime("%Y-%m-%d %H:%M"),
            ct.reserved_name,
            jp.name,
            jp.phone_number,
            jp.join_type.label,
            jp.green_fee,
            jp.charge_fee,
            jp.status.label,
        ])

    buf = io.BytesIO()
    wb.save(buf)

    suffix = join_status.value.lower() if join_status is not None else "all"
    headers = {"Content-Disposition": f'attachment; filename="deposits_{suffix}.xlsx"'}
    return Response(
        content=buf.getvalue(),
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers=headers,
    )


"""
조인 입금 상태 변경 API

- 허용 전이: 입금확인전 → 입금확인중 / 입금완료, 입금확인중 → 입금완료,
            입금완료 → 환불확인중, 환불확인중 → 환불완료
- 환불확인중으로 바꿀 때는 refund_reason 필수
- 규칙 위반 시 400

"""
@router.patch("/{join_id}/status", response_model=JoinPersonResponse)
def change_deposit_status(
    join_id: uuid.UUID,
    body: JoinStatusUpdateRequest,
    store: JoinStore = Depends(get_join_store),
    admin: User = Depends(get_current_admin),
):
    try:
        join_person = advance_status(
            store,
            join_id,
            status=body.status,
            refund_reason=body.refund_reason,
            refund_account=body.refund_account,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    logger.info("Deposit status changed by admin=%s: join=%s status=%s", admin.id, join_id, join_person.status.value)
    return join_person
