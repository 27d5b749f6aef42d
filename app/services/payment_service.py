import logging
from datetime import date
from decimal import Decimal
from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.crud import payment_crud
from app.models.payment_model import Payment, PaymentStatus
from app.schemas.payment_schema import PaymentStatusUpdate, PaymentSummary, PaymentView

logger = logging.getLogger(__name__)


def _today() -> date:
    return date.today()


def display_status(payment: Payment, today: Optional[date] = None) -> PaymentStatus:
    """Khoản pending đã qua hạn được hiển thị là overdue (kể cả khi chưa chạy tác vụ định kỳ)."""
    today = today or _today()
    if payment.status == PaymentStatus.pending and payment.due_date < today:
        return PaymentStatus.overdue
    return payment.status


def list_payment_views(
    db: Session,
    status: Optional[PaymentStatus] = None,
    student_id: Optional[str] = None,
    course_id: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
) -> List[PaymentView]:
    today = _today()
    rows = payment_crud.get_payments_with_names(
        db, status=status, student_id=student_id, course_id=course_id, skip=skip, limit=limit
    )
    return [
        PaymentView(
            payment_id=payment.payment_id,
            student_id=payment.student_id,
            course_id=payment.course_id,
            period_start=payment.period_start,
            period_end=payment.period_end,
            amount=payment.amount,
            due_date=payment.due_date,
            status=payment.status,
            paid_date=payment.paid_date,
            student_name=student.full_name,
            course_name=course.name,
            display_status=display_status(payment, today),
        )
        for payment, student, course in rows
    ]


def summarize(payments: List[Payment], today: Optional[date] = None) -> PaymentSummary:
    """
    Tổng tiền đã thu, đang chờ và quá hạn.
    Khoản pending quá hạn được tính vào overdue, không tính vào pending.
    """
    today = today or _today()
    collected = pending = overdue = Decimal(0)
    for p in payments:
        shown = display_status(p, today)
        if shown == PaymentStatus.paid:
            collected += p.amount
        elif shown == PaymentStatus.pending:
            pending += p.amount
        elif shown == PaymentStatus.overdue:
            overdue += p.amount

    return PaymentSummary(
        total_collected=float(collected),
        total_pending=float(pending),
        total_overdue=float(overdue),
        count=len(payments),
    )


def update_payment_status(db: Session, payment_id: str, status_in: PaymentStatusUpdate) -> Payment:
    """
    Cập nhật trạng thái thanh toán. `paid` ghi lại paid_date (mặc định hôm nay),
    các trạng thái khác xóa paid_date.
    """
    db_payment = payment_crud.get_payment(db, payment_id)
    if not db_payment:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Payment not found")

    db_payment.status = status_in.status
    if status_in.status == PaymentStatus.paid:
        db_payment.paid_date = status_in.paid_date or _today()
    else:
        db_payment.paid_date = None

    db.commit()
    db.refresh(db_payment)
    logger.info(f"Payment {payment_id} set to {status_in.status.value}")
    return db_payment


def update_overdue_payments(db: Session, today: Optional[date] = None) -> int:
    """Tác vụ định kỳ: pending quá hạn -> overdue. Trả về số bản ghi đã cập nhật."""
    today = today or _today()
    updated = payment_crud.mark_overdue(db, today)
    logger.info(f"Marked {updated} payment(s) overdue as of {today.isoformat()}")
    return updated
