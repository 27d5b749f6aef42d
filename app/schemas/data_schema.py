from typing import List
from pydantic import BaseModel
from app.schemas.student_schema import StudentRead
from app.schemas.course_schema import CourseRead
from app.schemas.payment_schema import PaymentRead

class AppData(BaseModel):
    """Toàn bộ dữ liệu cho màn hình quản trị: học sinh, khóa học, học phí."""
    students: List[StudentRead]
    courses: List[CourseRead]
    payments: List[PaymentRead]
