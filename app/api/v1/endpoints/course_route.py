from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List

from app.api.deps import get_db
from app.crud import course_crud
from app.schemas import course_schema

router = APIRouter()


# Tạo khóa học mới
@router.post(
    "",
    response_model=course_schema.CourseRead,
    status_code=status.HTTP_201_CREATED,
    summary="Tạo một khóa học mới"
)
def create_course(course_in: course_schema.CourseCreate, db: Session = Depends(get_db)):
    return course_crud.create_course(db, course_in)


@router.get(
    "",
    response_model=List[course_schema.CourseRead],
    summary="Lấy danh sách khóa học"
)
def list_courses(skip: int = 0, limit: int = 100, db: Session = Depends(get_db)):
    return course_crud.get_courses(db, skip=skip, limit=limit)


@router.get(
    "/{course_id}",
    response_model=course_schema.CourseRead,
    summary="Lấy thông tin khóa học"
)
def get_course(course_id: str, db: Session = Depends(get_db)):
    db_course = course_crud.get_course(db, course_id)
    if not db_course:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found")
    return db_course


@router.put(
    "/{course_id}",
    response_model=course_schema.CourseRead,
    summary="Cập nhật khóa học"
)
def update_course(
    course_id: str,
    course_in: course_schema.CourseUpdate,
    db: Session = Depends(get_db)
):
    updated = course_crud.update_course(db, course_id, course_in)
    if not updated:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found")
    return updated


@router.delete(
    "/{course_id}",
    summary="Xóa khóa học"
)
def delete_course(course_id: str, db: Session = Depends(get_db)):
    if not course_crud.delete_course(db, course_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found")
    return {"success": True}
