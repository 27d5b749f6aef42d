import enum
import uuid
from sqlalchemy import Column, String, Date, Text, Enum
from sqlalchemy.orm import relationship
from app.models.base_model import Base


class StudentStatus(str, enum.Enum):
    active = "active"
    passive = "passive"
    prereg = "prereg"


class Student(Base):
    """
    Model cho bảng students.
    """
    __tablename__ = 'students'

    student_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    phone = Column(String(30), nullable=False, default="")  # có thể rỗng nếu không có số
    dob = Column(Date, nullable=True)

    # Thông tin phụ huynh
    mother_name = Column(String(100), nullable=True)
    mother_phone = Column(String(30), nullable=True)
    father_name = Column(String(100), nullable=True)
    father_phone = Column(String(30), nullable=True)

    notes = Column(Text, nullable=True)
    status = Column(Enum(StudentStatus), default=StudentStatus.active, nullable=False)

    # Các mối quan hệ
    enrollments = relationship(
        "Enrollment",
        back_populates="student",
        cascade="all, delete-orphan"
    )
    payments = relationship(
        "Payment",
        back_populates="student",
        cascade="all, delete-orphan"
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def __repr__(self):
        return f"<Student(student_id='{self.student_id}', name='{self.full_name}')>"
