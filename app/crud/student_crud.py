from typing import Optional, List
from sqlalchemy.orm import Session, selectinload
from sqlalchemy import select, or_
from app.models.student_model import Student, StudentStatus
from app.models.enrollment_model import Enrollment
from app.schemas.student_schema import StudentCreate, StudentUpdate


def get_student(db: Session, student_id: str) -> Optional[Student]:
    """Lấy học sinh theo id, kèm danh sách enrollments."""
    stmt = (
        select(Student)
        .options(selectinload(Student.enrollments))
        .where(Student.student_id == student_id)
    )
    return db.execute(stmt).scalar_one_or_none()


def get_students(
    db: Session,
    status: Optional[StudentStatus] = None,
    course_id: Optional[str] = None,
    search: Optional[str] = None,
    skip: int = 0,
    limit: Optional[int] = 100,
) -> List[Student]:
    """
    Danh sách học sinh, lọc theo trạng thái, khóa học đang theo và tên.
    """
    stmt = select(Student).options(selectinload(Student.enrollments))

    if status is not None:
        stmt = stmt.where(Student.status == status)
    if course_id:
        stmt = stmt.join(Enrollment, Enrollment.student_id == Student.student_id).where(
            Enrollment.course_id == course_id
        )
    if search:
        pattern = f"%{search.strip()}%"
        stmt = stmt.where(or_(
            Student.first_name.ilike(pattern),
            Student.last_name.ilike(pattern),
            Student.phone.ilike(pattern),
        ))

    stmt = stmt.order_by(Student.first_name, Student.last_name).offset(skip).limit(limit)
    return list(db.execute(stmt).scalars().unique().all())


def create_student(db: Session, student_in: StudentCreate) -> Student:
    db_student = Student(**student_in.model_dump())
    db.add(db_student)
    db.commit()
    db.refresh(db_student)
    return db_student


def create_students(db: Session, students_in: List[StudentCreate]) -> List[Student]:
    """Tạo nhiều học sinh trong một lần commit."""
    db_students = [Student(**s.model_dump()) for s in students_in]
    try:
        db.add_all(db_students)
        db.commit()
    except Exception:
        db.rollback()
        raise
    for s in db_students:
        db.refresh(s)
    return db_students


def update_student(db: Session, student_id: str, student_update: StudentUpdate) -> Optional[Student]:
    db_student = get_student(db, student_id)
    if not db_student:
        return None

    update_data = student_update.model_dump(exclude_unset=True)
    for key, value in update_data.items():
        setattr(db_student, key, value)

    db.commit()
    db.refresh(db_student)
    return db_student


def delete_student(db: Session, student_id: str) -> bool:
    """Xóa học sinh; enrollments và payments bị xóa theo (cascade)."""
    db_student = db.get(Student, student_id)
    if not db_student:
        return False
    db.delete(db_student)
    db.commit()
    return True
