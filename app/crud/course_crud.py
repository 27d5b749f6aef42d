from sqlalchemy.orm import Session
from sqlalchemy import select
from typing import List, Optional

from app.models.course_model import Course
from app.schemas.course_schema import CourseCreate, CourseUpdate


def get_course(db: Session, course_id: str) -> Optional[Course]:
    return db.get(Course, course_id)


def get_courses(db: Session, skip: int = 0, limit: Optional[int] = 100) -> List[Course]:
    stmt = select(Course).order_by(Course.start_date, Course.name).offset(skip).limit(limit)
    return list(db.execute(stmt).scalars().all())


def create_course(db: Session, course_in: CourseCreate) -> Course:
    db_course = Course(**course_in.model_dump())
    db.add(db_course)
    db.commit()
    db.refresh(db_course)
    return db_course


def update_course(db: Session, course_id: str, course_update: CourseUpdate) -> Optional[Course]:
    """
    Cập nhật khóa học. Các khoản học phí đã sinh không bị tính lại.
    """
    db_course = get_course(db, course_id)
    if not db_course:
        return None

    for key, value in course_update.model_dump(exclude_unset=True).items():
        setattr(db_course, key, value)

    db.commit()
    db.refresh(db_course)
    return db_course


def delete_course(db: Session, course_id: str) -> bool:
    db_course = get_course(db, course_id)
    if not db_course:
        return False
    db.delete(db_course)
    db.commit()
    return True
