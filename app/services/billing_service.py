"""
Sinh các kỳ học phí cho một enrollment.

Các chu kỳ luôn được neo vào ngày bắt đầu khóa học: ranh giới thứ k là
``start_date + k * period``. Học sinh vào giữa chu kỳ chỉ trả phần còn lại của
chu kỳ đầu tiên. Hàm không ghi DB; các khoản đã tồn tại được bỏ qua để việc
enroll/transfer có thể chạy lại mà không tạo phí trùng.
"""
import logging
import uuid
from datetime import date
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Iterable, List

from app.models.course_model import BillingPeriod
from app.models.payment_model import PaymentStatus
from app.schemas.payment_schema import PaymentCreate
from app.services.service_helper import add_days, add_months, add_years, parse_date_safe

logger = logging.getLogger(__name__)

# Số chu kỳ sinh trước trong mỗi lần gọi
HORIZON = {
    BillingPeriod.weekly: 52,
    BillingPeriod.monthly: 12,
    BillingPeriod.yearly: 5,
}


class BillingError(ValueError):
    """Lỗi dữ liệu đầu vào của bộ sinh học phí."""


class InvalidCourseConfiguration(BillingError):
    pass


class InvalidJoinDate(BillingError):
    pass


def _coerce_period(period) -> BillingPeriod:
    try:
        return BillingPeriod(period)
    except ValueError:
        raise InvalidCourseConfiguration(f"Chu kỳ không hợp lệ: {period!r}")


def _coerce_fee(fee) -> Decimal:
    if fee is None:
        raise InvalidCourseConfiguration("Khóa học chưa có học phí")
    try:
        value = fee if isinstance(fee, Decimal) else Decimal(str(fee))
    except InvalidOperation:
        raise InvalidCourseConfiguration(f"Học phí không hợp lệ: {fee!r}")
    if not value.is_finite() or value <= 0:
        raise InvalidCourseConfiguration(f"Học phí phải lớn hơn 0: {fee!r}")
    return value


def cycle_boundary(start_date: date, period: BillingPeriod, k: int) -> date:
    """Ranh giới chu kỳ thứ k, luôn tính từ mốc start_date để không bị trôi ngày."""
    if period == BillingPeriod.weekly:
        return add_days(start_date, 7 * k)
    if period == BillingPeriod.monthly:
        return add_months(start_date, k)
    if period == BillingPeriod.yearly:
        return add_years(start_date, k)
    raise InvalidCourseConfiguration(f"Chu kỳ không hợp lệ: {period!r}")


def align_cycle_index(start_date: date, period: BillingPeriod, join_date: date) -> int:
    """Trả về k lớn nhất sao cho start_date + k * period <= join_date."""
    if period == BillingPeriod.weekly:
        return max((join_date - start_date).days // 7, 0)

    k = 0
    while cycle_boundary(start_date, period, k + 1) <= join_date:
        k += 1
    return k


def prorate(fee: Decimal, cycle_start: date, period_end: date, join_date: date) -> Decimal:
    """Học phí cho phần [join_date, period_end) của chu kỳ, làm tròn tới đơn vị tiền."""
    total_days = (period_end - cycle_start).days
    student_days = (period_end - join_date).days
    amount = fee * Decimal(student_days) / Decimal(total_days)
    return amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP)


def generate_payments_for_enrollment(
    student_id: str,
    course,
    join_date,
    existing_payments: Iterable,
) -> List[PaymentCreate]:
    """
    Sinh danh sách khoản học phí mới cho (student, course) kể từ join_date.

    `course` cần có course_id, fee, period, start_date (ORM Course hoặc CourseRead).
    `existing_payments` chỉ dùng để đối chiếu trùng theo (student_id, course_id, period_start).
    Raise InvalidCourseConfiguration / InvalidJoinDate khi đầu vào không hợp lệ.
    """
    fee = _coerce_fee(course.fee)
    period = _coerce_period(course.period)
    start_date = parse_date_safe(course.start_date)
    if start_date is None:
        raise InvalidCourseConfiguration(f"Ngày bắt đầu khóa học không hợp lệ: {course.start_date!r}")

    joined = parse_date_safe(join_date)
    if joined is None:
        raise InvalidJoinDate(f"Ngày tham gia không hợp lệ: {join_date!r}")
    if joined < start_date:
        raise InvalidJoinDate(
            f"Ngày tham gia {joined.isoformat()} trước ngày bắt đầu khóa học {start_date.isoformat()}"
        )

    # Các ngày bắt đầu chu kỳ đã có phí cho cặp (student, course) này
    taken = {
        parse_date_safe(p.period_start)
        for p in existing_payments
        if p.student_id == student_id and p.course_id == course.course_id
    }

    first_index = align_cycle_index(start_date, period, joined)
    cycle_start = cycle_boundary(start_date, period, first_index)

    new_payments: List[PaymentCreate] = []
    for i in range(HORIZON[period]):
        current_start = cycle_boundary(start_date, period, first_index + i)
        period_end = cycle_boundary(start_date, period, first_index + i + 1)

        effective_start = max(current_start, joined)
        # Chu kỳ rỗng (ngày bắt đầu hiệu lực không trước ngày kết thúc) thì bỏ qua
        if effective_start >= period_end:
            continue

        amount = fee
        if i == 0 and joined > current_start:
            amount = prorate(fee, cycle_start, period_end, joined)

        if effective_start in taken:
            continue

        new_payments.append(PaymentCreate(
            payment_id=str(uuid.uuid4()),
            student_id=student_id,
            course_id=course.course_id,
            period_start=effective_start,
            period_end=period_end,
            amount=amount,
            status=PaymentStatus.pending,
            due_date=period_end,
        ))

    logger.info(
        f"Generated {len(new_payments)} payment(s) for student {student_id} "
        f"in course {course.course_id} from {joined.isoformat()}"
    )
    return new_payments
