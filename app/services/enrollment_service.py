import logging
from datetime import date
from typing import List, Tuple

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.crud import course_crud, enrollment_crud, payment_crud, student_crud
from app.models.course_model import Course
from app.models.enrollment_model import Enrollment
from app.models.payment_model import Payment
from app.schemas.payment_schema import PaymentCreate
from app.services.billing_service import generate_payments_for_enrollment

logger = logging.getLogger(__name__)


# --- Helper ---

def _load_student_and_course(db: Session, student_id: str, course_id: str) -> Course:
    student = student_crud.get_student(db, student_id)
    course = course_crud.get_course(db, course_id)
    if not student or not course:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Student or Course not found")
    return course


def _to_orm(candidates: List[PaymentCreate]) -> List[Payment]:
    return [Payment(**c.model_dump()) for c in candidates]


def _commit_or_conflict(db: Session, action: str):
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.error(f"{action} conflicted with existing records: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Dữ liệu đã bị thay đổi bởi một yêu cầu khác, vui lòng thử lại."
        )
    except Exception:
        db.rollback()
        raise


# --- Main Functions ---

def preview_payments(db: Session, student_id: str, course_id: str, join_date: date) -> List[PaymentCreate]:
    """
    Chạy bộ sinh học phí mà không ghi DB (xem trước trước khi enroll).
    """
    course = _load_student_and_course(db, student_id, course_id)
    existing = payment_crud.get_payments_for_pair(db, student_id, course_id)
    return generate_payments_for_enrollment(student_id, course, join_date, existing)


def enroll_student(
    db: Session, student_id: str, course_id: str, join_date: date
) -> Tuple[Enrollment, List[Payment]]:
    """
    Ghi danh học sinh vào khóa học và tạo các khoản học phí tương ứng.
    Enrollment và payments được commit cùng một lần.
    """
    course = _load_student_and_course(db, student_id, course_id)

    if enrollment_crud.get_enrollment(db, student_id, course_id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Student is already enrolled in this course.")

    # Sinh trước khi ghi gì vào session: lỗi đầu vào thì không có gì để rollback
    existing = payment_crud.get_payments_for_pair(db, student_id, course_id)
    candidates = generate_payments_for_enrollment(student_id, course, join_date, existing)

    enrollment = Enrollment(student_id=student_id, course_id=course_id, join_date=join_date)
    payments = _to_orm(candidates)

    db.add(enrollment)
    db.add_all(payments)
    _commit_or_conflict(db, f"Enroll student {student_id} into {course_id}")

    db.refresh(enrollment)
    for p in payments:
        db.refresh(p)

    logger.info(f"Enrolled student {student_id} into course {course_id} with {len(payments)} payment(s)")
    return enrollment, payments


def unenroll_student(db: Session, student_id: str, course_id: str) -> int:
    """
    Hủy ghi danh: xóa enrollment và các khoản học phí còn pending.
    Các khoản paid / waived / overdue được giữ lại. Trả về số khoản đã xóa.
    """
    enrollment = enrollment_crud.get_enrollment(db, student_id, course_id)
    if not enrollment:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Enrollment record not found")

    removed = payment_crud.delete_pending_payments(db, student_id, course_id)
    db.delete(enrollment)
    _commit_or_conflict(db, f"Unenroll student {student_id} from {course_id}")

    logger.info(f"Unenrolled student {student_id} from course {course_id}, removed {removed} pending payment(s)")
    return removed


def transfer_student(
    db: Session,
    student_id: str,
    old_course_id: str,
    new_course_id: str,
    transfer_date: date,
) -> Tuple[Enrollment, List[Payment]]:
    """
    Chuyển học sinh từ khóa cũ sang khóa mới kể từ transfer_date.
    Một transaction: xóa pending + enrollment cũ, tạo enrollment + payments mới.
    """
    if old_course_id == new_course_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Old and new course must differ.")

    new_course = _load_student_and_course(db, student_id, new_course_id)

    old_enrollment = enrollment_crud.get_enrollment(db, student_id, old_course_id)
    if not old_enrollment:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Enrollment record not found")
    if enrollment_crud.get_enrollment(db, student_id, new_course_id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Student is already enrolled in the new course.")

    existing = payment_crud.get_payments_for_pair(db, student_id, new_course_id)
    candidates = generate_payments_for_enrollment(student_id, new_course, transfer_date, existing)

    try:
        removed = payment_crud.delete_pending_payments(db, student_id, old_course_id)
        db.delete(old_enrollment)

        new_enrollment = Enrollment(student_id=student_id, course_id=new_course_id, join_date=transfer_date)
        payments = _to_orm(candidates)
        db.add(new_enrollment)
        db.add_all(payments)
    except Exception:
        db.rollback()
        raise
    _commit_or_conflict(db, f"Transfer student {student_id} from {old_course_id} to {new_course_id}")

    db.refresh(new_enrollment)
    for p in payments:
        db.refresh(p)

    logger.info(
        f"Transferred student {student_id} from {old_course_id} to {new_course_id}: "
        f"removed {removed} pending, created {len(payments)} payment(s)"
    )
    return new_enrollment, payments
