from datetime import date
from decimal import Decimal
from io import BytesIO

from fastapi.responses import StreamingResponse
from openpyxl import Workbook # type: ignore
from openpyxl.utils import get_column_letter # type: ignore
from sqlalchemy.orm import Session

from app.crud import course_crud, payment_crud, student_crud
from app.services.payment_service import display_status
from app.models.payment_model import PaymentStatus

HEADERS = [
    "First name",
    "Last name",
    "Phone",
    "Date of birth",
    "Mother name",
    "Mother phone",
    "Father name",
    "Father phone",
    "Notes",
    "Enrolled courses",
    "Total overdue",
]


def build_students_workbook(db: Session, today: date | None = None) -> Workbook:
    """
    Tạo workbook danh sách học sinh:
    - Dòng 1: header
    - Mỗi học sinh một dòng, kèm các khóa đang học và tổng tiền quá hạn
    """
    today = today or date.today()
    students = student_crud.get_students(db, limit=None)
    courses = {c.course_id: c for c in course_crud.get_courses(db, limit=None)}

    overdue_by_student: dict[str, Decimal] = {}
    for p in payment_crud.get_all_payments(db):
        if display_status(p, today) == PaymentStatus.overdue:
            overdue_by_student[p.student_id] = overdue_by_student.get(p.student_id, Decimal(0)) + p.amount

    wb = Workbook()
    ws = wb.active
    ws.title = "Students"
    ws.append(HEADERS)

    for st in students:
        course_info = ", ".join(
            f"{courses[e.course_id].name} (joined {e.join_date.isoformat()})"
            for e in st.enrollments
            if e.course_id in courses
        )
        ws.append([
            st.first_name,
            st.last_name,
            st.phone,
            st.dob.isoformat() if st.dob else "",
            st.mother_name or "",
            st.mother_phone or "",
            st.father_name or "",
            st.father_phone or "",
            st.notes or "",
            course_info,
            float(overdue_by_student.get(st.student_id, Decimal(0))),
        ])

    # Auto-adjust column width to fit content
    for col in range(1, ws.max_column + 1):
        col_letter = get_column_letter(col)
        max_length = max(len(str(cell.value)) if cell.value is not None else 0 for cell in ws[col_letter])
        ws.column_dimensions[col_letter].width = max_length + 2

    return wb


def export_students(db: Session):
    wb = build_students_workbook(db)

    stream = BytesIO()
    wb.save(stream)
    stream.seek(0)

    headers = {"Content-Disposition": "attachment; filename=students.xlsx"}
    return StreamingResponse(
        stream,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers=headers
    )
