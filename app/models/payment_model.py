import enum
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Numeric, DateTime, Enum, ForeignKey, Date, UniqueConstraint
from sqlalchemy.orm import relationship
from app.models.base_model import Base


class PaymentStatus(str, enum.Enum):
    """
    Enum để đại diện cho trạng thái thanh toán.
    """
    pending = "pending"
    paid = "paid"
    overdue = "overdue"
    waived = "waived"


class Payment(Base):
    """
    Mô hình database cho bảng `payments`.
    Mỗi bản ghi ứng với một chu kỳ thu phí [period_start, period_end).
    """
    __tablename__ = "payments"
    __table_args__ = (
        # Mỗi (student, course) chỉ có một khoản phí cho mỗi ngày bắt đầu chu kỳ
        UniqueConstraint("student_id", "course_id", "period_start", name="uq_payment_cycle"),
    )

    payment_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    student_id = Column(String(36), ForeignKey("students.student_id", ondelete="CASCADE"), nullable=False, index=True)
    course_id = Column(String(36), ForeignKey("courses.course_id", ondelete="CASCADE"), nullable=False, index=True)
    period_start = Column(Date, nullable=False)
    period_end = Column(Date, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    due_date = Column(Date, nullable=False)
    status = Column(Enum(PaymentStatus), default=PaymentStatus.pending, nullable=False)
    paid_date = Column(Date, nullable=True)  # Chỉ có giá trị khi status = paid
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    student = relationship("Student", back_populates="payments")
    course = relationship("Course", back_populates="payments")

    def __repr__(self):
        return (
            f"<Payment(student_id={self.student_id}, course_id={self.course_id}, "
            f"period_start={self.period_start}, amount={self.amount}, status={self.status})>"
        )
