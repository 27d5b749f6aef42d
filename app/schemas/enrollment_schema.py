# app/schemas/enrollment_schema.py
from pydantic import BaseModel, Field
from datetime import date


class EnrollmentRead(BaseModel):
    enrollment_id: int
    student_id: str
    course_id: str
    join_date: date

    class Config:
        from_attributes = True

class EnrollRequest(BaseModel):
    student_id: str = Field(..., example="5b7c...")
    course_id: str = Field(..., example="c1d2...")
    join_date: date = Field(..., example="2024-01-16")

class UnenrollRequest(BaseModel):
    student_id: str
    course_id: str

class TransferRequest(BaseModel):
    student_id: str
    old_course_id: str
    new_course_id: str
    transfer_date: date = Field(..., example="2024-03-10")

class UnenrollResult(BaseModel):
    student_id: str
    course_id: str
    removed_pending_payments: int
