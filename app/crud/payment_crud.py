from datetime import date
from typing import Optional, List, Tuple
from sqlalchemy import select, update, delete
from sqlalchemy.orm import Session

from app.models.payment_model import Payment, PaymentStatus
from app.models.student_model import Student
from app.models.course_model import Course


def get_payment(db: Session, payment_id: str) -> Optional[Payment]:
    return db.get(Payment, payment_id)


def get_payments_for_pair(db: Session, student_id: str, course_id: str) -> List[Payment]:
    """Các khoản học phí hiện có của một cặp (student, course), theo thứ tự chu kỳ."""
    stmt = (
        select(Payment)
        .where(Payment.student_id == student_id, Payment.course_id == course_id)
        .order_by(Payment.period_start)
    )
    return list(db.execute(stmt).scalars().all())


def get_all_payments(db: Session) -> List[Payment]:
    stmt = select(Payment).order_by(Payment.due_date, Payment.period_start)
    return list(db.execute(stmt).scalars().all())


def get_payments_with_names(
    db: Session,
    status: Optional[PaymentStatus] = None,
    student_id: Optional[str] = None,
    course_id: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
) -> List[Tuple[Payment, Student, Course]]:
    """Danh sách học phí kèm học sinh và khóa học (để hiển thị tên)."""
    stmt = (
        select(Payment, Student, Course)
        .join(Student, Payment.student_id == Student.student_id)
        .join(Course, Payment.course_id == Course.course_id)
    )
    if status is not None:
        stmt = stmt.where(Payment.status == status)
    if student_id:
        stmt = stmt.where(Payment.student_id == student_id)
    if course_id:
        stmt = stmt.where(Payment.course_id == course_id)

    stmt = stmt.order_by(Payment.due_date, Student.first_name).offset(skip).limit(limit)
    return [tuple(row) for row in db.execute(stmt).all()]


def delete_pending_payments(db: Session, student_id: str, course_id: str) -> int:
    """
    Xóa các khoản đang pending của cặp (student, course). Không commit;
    service gọi hàm này chịu trách nhiệm commit/rollback.
    """
    result = db.execute(
        delete(Payment).where(
            Payment.student_id == student_id,
            Payment.course_id == course_id,
            Payment.status == PaymentStatus.pending,
        )
    )
    return result.rowcount or 0


def mark_overdue(db: Session, today: date) -> int:
    """Chuyển các khoản pending đã quá hạn sang overdue."""
    result = db.execute(
        update(Payment)
        .where(Payment.status == PaymentStatus.pending, Payment.due_date < today)
        .values(status=PaymentStatus.overdue)
    )
    db.commit()
    return result.rowcount or 0
