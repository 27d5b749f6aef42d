from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List

from app.api.deps import get_db
from app.crud import enrollment_crud
from app.schemas.enrollment_schema import (
    EnrollmentRead,
    EnrollRequest,
    TransferRequest,
    UnenrollRequest,
    UnenrollResult,
)
from app.schemas.payment_schema import EnrollmentResult, PaymentCreate
from app.services import enrollment_service
from app.services.billing_service import BillingError

router = APIRouter()


def _unprocessable(e: BillingError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))


@router.get(
    "",
    response_model=List[EnrollmentRead],
    summary="Lấy tất cả các bản ghi enrollment"
)
def get_all_enrollments(skip: int = 0, limit: int = 100, db: Session = Depends(get_db)):
    return enrollment_crud.get_all_enrollments(db, skip=skip, limit=limit)


@router.get(
    "/student/{student_id}",
    response_model=List[EnrollmentRead],
    summary="Lấy danh sách các khóa học mà một học sinh đã đăng ký"
)
def get_enrollments_for_student(student_id: str, db: Session = Depends(get_db)):
    return enrollment_crud.get_enrollments_by_student_id(db, student_id)


@router.post(
    "/preview",
    response_model=List[PaymentCreate],
    summary="Xem trước các khoản học phí sẽ được tạo khi ghi danh"
)
def preview_enrollment(request: EnrollRequest, db: Session = Depends(get_db)):
    try:
        return enrollment_service.preview_payments(db, request.student_id, request.course_id, request.join_date)
    except BillingError as e:
        raise _unprocessable(e)


@router.post(
    "/enroll",
    response_model=EnrollmentResult,
    status_code=status.HTTP_201_CREATED,
    summary="Ghi danh học sinh vào khóa học và tạo học phí"
)
def enroll(request: EnrollRequest, db: Session = Depends(get_db)):
    try:
        enrollment, payments = enrollment_service.enroll_student(
            db, request.student_id, request.course_id, request.join_date
        )
    except BillingError as e:
        raise _unprocessable(e)
    return {"enrollment": enrollment, "payments": payments}


@router.post(
    "/unenroll",
    response_model=UnenrollResult,
    summary="Hủy ghi danh và xóa các khoản học phí chưa thanh toán"
)
def unenroll(request: UnenrollRequest, db: Session = Depends(get_db)):
    removed = enrollment_service.unenroll_student(db, request.student_id, request.course_id)
    return UnenrollResult(
        student_id=request.student_id,
        course_id=request.course_id,
        removed_pending_payments=removed,
    )


@router.post(
    "/transfer",
    response_model=EnrollmentResult,
    summary="Chuyển học sinh sang khóa học khác"
)
def transfer(request: TransferRequest, db: Session = Depends(get_db)):
    try:
        enrollment, payments = enrollment_service.transfer_student(
            db,
            request.student_id,
            request.old_course_id,
            request.new_course_id,
            request.transfer_date,
        )
    except BillingError as e:
        raise _unprocessable(e)
    return {"enrollment": enrollment, "payments": payments}
