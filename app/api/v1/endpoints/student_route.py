import logging
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from sqlalchemy.orm import Session
from typing import List, Optional

from app.api import deps
from app.crud import student_crud
from app.models.student_model import StudentStatus
from app.schemas import student_schema
from app.services.excel_services import export_students, import_students

router = APIRouter()


@router.post(
    "",
    response_model=student_schema.StudentRead,
    status_code=status.HTTP_201_CREATED,
    summary="Tạo học sinh mới"
)
def create_student(
    student_in: student_schema.StudentCreate,
    db: Session = Depends(deps.get_db)
):
    return student_crud.create_student(db, student_in)


@router.post(
    "/bulk",
    response_model=List[student_schema.StudentRead],
    status_code=status.HTTP_201_CREATED,
    summary="Tạo nhiều học sinh cùng lúc"
)
def create_students_bulk(
    students_in: List[student_schema.StudentCreate],
    db: Session = Depends(deps.get_db)
):
    return student_crud.create_students(db, students_in)


@router.get(
    "",
    response_model=List[student_schema.StudentRead],
    summary="Lấy danh sách học sinh"
)
def list_students(
    status: Optional[StudentStatus] = None,
    course_id: Optional[str] = None,
    search: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(deps.get_db)
):
    """
    Lọc theo trạng thái (`active`, `passive`, `prereg`), khóa học và tên / số điện thoại.
    """
    return student_crud.get_students(
        db, status=status, course_id=course_id, search=search, skip=skip, limit=limit
    )


@router.get(
    "/export",
    summary="Xuất danh sách học sinh ra file Excel"
)
def export_students_excel(db: Session = Depends(deps.get_db)):
    return export_students.export_students(db)


@router.post(
    "/import",
    response_model=student_schema.StudentImportResult,
    summary="Import học sinh từ file Excel"
)
def import_students_from_sheet(
    file: UploadFile = File(...),
    db: Session = Depends(deps.get_db),
):
    try:
        result = import_students.import_students(file, db)
    except Exception as e:
        logging.exception("Import failed")
        raise HTTPException(status_code=400, detail=f"Import failed: {str(e)}")
    return {"status": "success", **result}


@router.get(
    "/{student_id}",
    response_model=student_schema.StudentRead,
    summary="Lấy thông tin học sinh"
)
def get_student(student_id: str, db: Session = Depends(deps.get_db)):
    db_student = student_crud.get_student(db, student_id)
    if not db_student:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Student not found")
    return db_student


@router.put(
    "/{student_id}",
    response_model=student_schema.StudentRead,
    summary="Cập nhật thông tin học sinh"
)
def update_student(
    student_id: str,
    student_in: student_schema.StudentUpdate,
    db: Session = Depends(deps.get_db)
):
    updated = student_crud.update_student(db, student_id, student_in)
    if not updated:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Student not found")
    return updated


@router.delete(
    "/{student_id}",
    summary="Xóa học sinh (kèm enrollments và học phí)"
)
def delete_student(student_id: str, db: Session = Depends(deps.get_db)):
    if not student_crud.delete_student(db, student_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Student not found")
    return {"success": True}
