from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import date
from app.models.student_model import StudentStatus
from app.schemas.enrollment_schema import EnrollmentRead

class StudentBase(BaseModel):
    first_name: str = Field(..., min_length=1, example="Ali")
    last_name: str = Field(..., min_length=1, example="Yilmaz")
    phone: str = Field("", example="0555 000 00 00")
    dob: Optional[date] = Field(None, example="2012-05-01")
    mother_name: Optional[str] = None
    mother_phone: Optional[str] = None
    father_name: Optional[str] = None
    father_phone: Optional[str] = None
    notes: Optional[str] = None
    status: StudentStatus = StudentStatus.active

class StudentCreate(StudentBase):
    pass

class StudentUpdate(BaseModel):
    """Schema để cập nhật thông tin học sinh (không bao gồm enrollments)."""
    first_name: Optional[str] = Field(None, min_length=1)
    last_name: Optional[str] = Field(None, min_length=1)
    phone: Optional[str] = None
    dob: Optional[date] = None
    mother_name: Optional[str] = None
    mother_phone: Optional[str] = None
    father_name: Optional[str] = None
    father_phone: Optional[str] = None
    notes: Optional[str] = None
    status: Optional[StudentStatus] = None

class StudentRead(StudentBase):
    student_id: str
    enrollments: List[EnrollmentRead] = []

    class Config:
        from_attributes = True

class StudentImportResult(BaseModel):
    status: str
    imported: int
    skipped: int
