from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional

from app.api import deps
from app.crud import payment_crud
from app.models.payment_model import PaymentStatus
from app.schemas.payment_schema import (
    OverdueSweepResult,
    PaymentRead,
    PaymentStatusUpdate,
    PaymentSummary,
    PaymentView,
)
from app.services import payment_service

router = APIRouter()


@router.get(
    "",
    response_model=List[PaymentView],
    summary="Lấy danh sách học phí"
)
def list_payments(
    status: Optional[PaymentStatus] = None,
    student_id: Optional[str] = None,
    course_id: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(deps.get_db)
):
    return payment_service.list_payment_views(
        db, status=status, student_id=student_id, course_id=course_id, skip=skip, limit=limit
    )


@router.get(
    "/summary",
    response_model=PaymentSummary,
    summary="Tổng hợp học phí đã thu / chờ thu / quá hạn"
)
def payment_summary(db: Session = Depends(deps.get_db)):
    return payment_service.summarize(payment_crud.get_all_payments(db))


@router.post(
    "/mark-overdue",
    response_model=OverdueSweepResult,
    summary="Đánh dấu các khoản quá hạn ngay lập tức"
)
def mark_overdue(db: Session = Depends(deps.get_db)):
    return OverdueSweepResult(updated=payment_service.update_overdue_payments(db))


@router.put(
    "/{payment_id}",
    response_model=PaymentRead,
    status_code=status.HTTP_200_OK,
    summary="Cập nhật trạng thái thanh toán"
)
def update_payment_status(
    payment_id: str,
    status_in: PaymentStatusUpdate,
    db: Session = Depends(deps.get_db)
):
    return payment_service.update_payment_status(db, payment_id, status_in)
