from datetime import date
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field, field_serializer
from app.models.payment_model import PaymentStatus
from app.schemas.enrollment_schema import EnrollmentRead

class PaymentBase(BaseModel):
    student_id: str
    course_id: str
    period_start: date
    period_end: date
    amount: Decimal
    due_date: date

# Bản ghi ứng viên do bộ sinh chu kỳ tạo ra (chưa lưu DB)
class PaymentCreate(PaymentBase):
    payment_id: str
    status: PaymentStatus = PaymentStatus.pending

    @field_serializer("amount")
    def serialize_amount(self, amount: Decimal, _info):
        return float(amount)

# Schema dùng để đọc dữ liệu từ DB
class PaymentRead(PaymentBase):
    payment_id: str
    status: PaymentStatus
    paid_date: Optional[date] = None

    class Config:
        from_attributes = True

    @field_serializer("amount")
    def serialize_amount(self, amount: Decimal, _info):
        return float(amount)

# Schema dùng để cập nhật trạng thái thanh toán
class PaymentStatusUpdate(BaseModel):
    status: PaymentStatus
    paid_date: Optional[date] = None

class PaymentView(PaymentRead):
    student_name: str
    course_name: str
    display_status: PaymentStatus

class PaymentSummary(BaseModel):
    total_collected: float
    total_pending: float
    total_overdue: float
    count: int

class EnrollmentResult(BaseModel):
    enrollment: EnrollmentRead
    payments: List[PaymentRead] = Field(default_factory=list)

class OverdueSweepResult(BaseModel):
    updated: int
