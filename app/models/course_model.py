import enum
import uuid
from sqlalchemy import Column, String, Date, Text, Numeric, Enum, JSON
from sqlalchemy.orm import relationship
from app.models.base_model import Base


class BillingPeriod(str, enum.Enum):
    """
    Chu kỳ thu học phí của một khóa học.
    """
    weekly = "weekly"
    monthly = "monthly"
    yearly = "yearly"


class Course(Base):
    __tablename__ = 'courses'

    course_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(100), nullable=False)
    # Mốc neo của mọi chu kỳ thu phí: start_date + k * period
    start_date = Column(Date, nullable=False)
    fee = Column(Numeric(12, 2), nullable=False)
    period = Column(Enum(BillingPeriod), nullable=False, default=BillingPeriod.monthly)

    schedule_days = Column(JSON, nullable=False, default=list)  # ví dụ ["Monday", "Wednesday"]
    schedule_time = Column(String(5), nullable=True)  # "14:00"
    notes = Column(Text, nullable=True)

    enrollments = relationship(
        "Enrollment",
        back_populates="course",
        cascade="all, delete-orphan"
    )
    payments = relationship(
        "Payment",
        back_populates="course",
        cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<Course(name='{self.name}', period={self.period}, fee={self.fee})>"
