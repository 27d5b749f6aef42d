from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api import deps
from app.crud import course_crud, payment_crud, student_crud
from app.schemas.data_schema import AppData

router = APIRouter()


@router.get(
    "",
    response_model=AppData,
    summary="Lấy toàn bộ học sinh, khóa học và học phí"
)
def get_all_data(db: Session = Depends(deps.get_db)):
    return {
        "students": student_crud.get_students(db, limit=None),
        "courses": course_crud.get_courses(db, limit=None),
        "payments": payment_crud.get_all_payments(db),
    }
