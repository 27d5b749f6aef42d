import logging
from io import BytesIO
from typing import List, Tuple

from fastapi import UploadFile
from openpyxl import load_workbook  # type: ignore
from sqlalchemy.orm import Session

from .. import service_helper
from app.crud.student_crud import create_students
from app.schemas.student_schema import StudentCreate

logger = logging.getLogger(__name__)

# Tên cột trong file -> field của StudentCreate
COLUMN_MAP = {
    "first name": "first_name",
    "last name": "last_name",
    "phone": "phone",
    "date of birth": "dob",
    "mother name": "mother_name",
    "mother phone": "mother_phone",
    "father name": "father_name",
    "father phone": "father_phone",
    "notes": "notes",
}


def _cell_text(value) -> str:
    if value is None:
        return ""
    # Số điện thoại đọc từ Excel có thể là số thực: 5550000000.0
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


def parse_student_rows(contents: bytes) -> Tuple[List[StudentCreate], int]:
    """
    Đọc sheet đầu tiên, dòng 1 là header. Trả về (danh sách học sinh hợp lệ, số dòng bị bỏ qua).
    Dòng thiếu first name hoặc last name bị bỏ qua.
    """
    workbook = load_workbook(filename=BytesIO(contents), data_only=True)
    ws = workbook.worksheets[0]

    rows = ws.iter_rows(values_only=True)
    header = next(rows, None)
    if not header:
        raise ValueError("File trống hoặc không đúng định dạng")

    columns = {}
    for idx, name in enumerate(header):
        field = COLUMN_MAP.get(_cell_text(name).lower())
        if field:
            columns[field] = idx
    if "first_name" not in columns or "last_name" not in columns:
        raise ValueError("File phải có cột 'First name' và 'Last name'")

    students: List[StudentCreate] = []
    skipped = 0
    for row in rows:
        values = {field: row[idx] if idx < len(row) else None for field, idx in columns.items()}
        first_name = _cell_text(values.get("first_name"))
        last_name = _cell_text(values.get("last_name"))
        if not first_name or not last_name:
            skipped += 1
            continue

        students.append(StudentCreate(
            first_name=first_name,
            last_name=last_name,
            phone=_cell_text(values.get("phone")),
            dob=service_helper.parse_date_safe(values.get("dob")),
            mother_name=_cell_text(values.get("mother_name")) or None,
            mother_phone=_cell_text(values.get("mother_phone")) or None,
            father_name=_cell_text(values.get("father_name")) or None,
            father_phone=_cell_text(values.get("father_phone")) or None,
            notes=_cell_text(values.get("notes")) or None,
        ))

    return students, skipped


def import_students(file: UploadFile, db: Session) -> dict:
    contents = file.file.read()
    students, skipped = parse_student_rows(contents)
    if not students:
        raise ValueError("Không đọc được học sinh hợp lệ nào từ file")

    created = create_students(db, students)
    logger.info(f"Imported {len(created)} student(s), skipped {skipped} row(s)")
    return {"imported": len(created), "skipped": skipped}
