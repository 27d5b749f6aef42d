# app/crud/enrollment_crud.py
from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.orm import Session
from app.models.enrollment_model import Enrollment


def get_enrollment(db: Session, student_id: str, course_id: str) -> Optional[Enrollment]:
    """Lấy bản ghi enrollment dựa trên student_id và course_id."""
    stmt = select(Enrollment).where(
        Enrollment.student_id == student_id,
        Enrollment.course_id == course_id,
    )
    return db.execute(stmt).scalar_one_or_none()


def get_enrollments_by_student_id(db: Session, student_id: str) -> List[Enrollment]:
    stmt = (
        select(Enrollment)
        .where(Enrollment.student_id == student_id)
        .order_by(Enrollment.join_date)
    )
    return list(db.execute(stmt).scalars().all())


def get_all_enrollments(db: Session, skip: int = 0, limit: int = 100) -> List[Enrollment]:
    stmt = select(Enrollment).order_by(Enrollment.enrollment_id).offset(skip).limit(limit)
    return list(db.execute(stmt).scalars().all())
