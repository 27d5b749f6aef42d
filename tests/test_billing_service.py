from datetime import date
from decimal import Decimal
from types import SimpleNamespace

import pytest

from app.models.course_model import BillingPeriod
from app.models.payment_model import PaymentStatus
from app.services.billing_service import (
    InvalidCourseConfiguration,
    InvalidJoinDate,
    align_cycle_index,
    generate_payments_for_enrollment,
)
from app.services.service_helper import add_days, add_months, add_years


def make_course(period="monthly", fee=1000, start_date=date(2024, 1, 1), course_id="course-1"):
    return SimpleNamespace(course_id=course_id, fee=fee, period=period, start_date=start_date)


def existing(period_start, student_id="student-1", course_id="course-1"):
    return SimpleNamespace(student_id=student_id, course_id=course_id, period_start=period_start)


def test_first_cycle_is_prorated():
    payments = generate_payments_for_enrollment("student-1", make_course(), date(2024, 1, 16), [])

    first = payments[0]
    assert first.period_start == date(2024, 1, 16)
    assert first.period_end == date(2024, 2, 1)
    assert first.due_date == date(2024, 2, 1)
    # 1000 * 16 / 31 = 516.13
    assert first.amount == 516


def test_following_cycles_charge_full_fee():
    payments = generate_payments_for_enrollment("student-1", make_course(), date(2024, 1, 16), [])

    second = payments[1]
    assert second.period_start == date(2024, 2, 1)
    assert second.period_end == date(2024, 3, 1)
    assert second.amount == Decimal("1000")
    assert all(p.amount == 1000 for p in payments[1:])


def test_candidates_are_pending_with_unique_ids():
    payments = generate_payments_for_enrollment("student-1", make_course(), date(2024, 1, 16), [])

    assert all(p.status == PaymentStatus.pending for p in payments)
    assert all(p.student_id == "student-1" and p.course_id == "course-1" for p in payments)
    assert len({p.payment_id for p in payments}) == len(payments)


def test_join_on_cycle_boundary_is_not_prorated():
    payments = generate_payments_for_enrollment("student-1", make_course(), date(2024, 3, 1), [])

    assert payments[0].period_start == date(2024, 3, 1)
    assert payments[0].period_end == date(2024, 4, 1)
    assert payments[0].amount == 1000


def test_monthly_horizon_and_order():
    payments = generate_payments_for_enrollment("student-1", make_course(), date(2024, 1, 16), [])

    assert len(payments) == 12
    starts = [p.period_start for p in payments]
    assert starts == sorted(starts)
    assert payments[-1].period_end == date(2025, 1, 1)


def test_weekly_alignment_and_horizon():
    course = make_course(period="weekly", fee=100)
    payments = generate_payments_for_enrollment("student-1", course, date(2024, 1, 10), [])

    assert len(payments) == 52
    # 2024-01-10 nằm trong chu kỳ [2024-01-08, 2024-01-15)
    assert payments[0].period_start == date(2024, 1, 10)
    assert payments[0].period_end == date(2024, 1, 15)
    # 100 * 5 / 7 = 71.43
    assert payments[0].amount == 71
    for p in payments[1:]:
        assert (p.period_start - date(2024, 1, 1)).days % 7 == 0
        assert (p.period_end - p.period_start).days == 7


def test_yearly_alignment_and_proration():
    course = make_course(period="yearly", fee=1200, start_date=date(2020, 3, 1))
    payments = generate_payments_for_enrollment("student-1", course, date(2022, 9, 1), [])

    assert len(payments) == 5
    assert payments[0].period_start == date(2022, 9, 1)
    assert payments[0].period_end == date(2023, 3, 1)
    # 1200 * 181 / 365 = 595.07
    assert payments[0].amount == 595
    assert [p.period_start for p in payments[1:]] == [date(y, 3, 1) for y in range(2023, 2027)]


def test_cycle_boundaries_stay_anchored_to_course_start():
    start = date(2024, 1, 31)
    course = make_course(start_date=start)
    payments = generate_payments_for_enrollment("student-1", course, date(2024, 3, 15), [])

    assert payments[0].period_start == date(2024, 3, 15)
    assert payments[0].period_end == date(2024, 3, 31)
    assert payments[1].period_end == date(2024, 4, 30)
    # 31 giữ nguyên cho các tháng có 31 ngày, không trôi về 29/30
    assert payments[2].period_end == date(2024, 5, 31)
    boundaries = {add_months(start, k) for k in range(0, 30)}
    for p in payments[1:]:
        assert p.period_start in boundaries
        assert p.period_end in boundaries


def test_align_cycle_index():
    start = date(2024, 1, 1)
    assert align_cycle_index(start, BillingPeriod.monthly, date(2024, 1, 1)) == 0
    assert align_cycle_index(start, BillingPeriod.monthly, date(2024, 1, 31)) == 0
    assert align_cycle_index(start, BillingPeriod.monthly, date(2024, 2, 1)) == 1
    assert align_cycle_index(start, BillingPeriod.weekly, date(2024, 1, 14)) == 1
    assert align_cycle_index(start, BillingPeriod.yearly, date(2026, 6, 1)) == 2


def test_second_call_with_extended_snapshot_is_empty():
    course = make_course()
    first = generate_payments_for_enrollment("student-1", course, date(2024, 1, 16), [])
    second = generate_payments_for_enrollment("student-1", course, date(2024, 1, 16), list(first))

    assert first
    assert second == []


@pytest.mark.parametrize("period", ["weekly", "monthly", "yearly"])
def test_idempotence_for_every_period(period):
    course = make_course(period=period, fee=250)
    first = generate_payments_for_enrollment("student-1", course, date(2024, 5, 20), [])
    assert generate_payments_for_enrollment("student-1", course, date(2024, 5, 20), first) == []


def test_existing_cycle_is_skipped_but_others_kept():
    payments = generate_payments_for_enrollment(
        "student-1", make_course(), date(2024, 1, 16), [existing(date(2024, 2, 1))]
    )

    starts = [p.period_start for p in payments]
    assert date(2024, 2, 1) not in starts
    assert date(2024, 1, 16) in starts
    assert date(2024, 3, 1) in starts
    assert len(payments) == 11


def test_existing_payments_of_other_pairs_are_ignored():
    others = [
        existing(date(2024, 2, 1), student_id="student-2"),
        existing(date(2024, 3, 1), course_id="course-2"),
    ]
    payments = generate_payments_for_enrollment("student-1", make_course(), date(2024, 1, 16), others)

    assert len(payments) == 12


def test_duplicate_check_uses_calendar_date():
    # period_start dạng chuỗi ISO có phần giờ vẫn khớp theo ngày
    payments = generate_payments_for_enrollment(
        "student-1", make_course(), date(2024, 1, 16), [existing("2024-02-01T00:00:00.000Z")]
    )

    assert date(2024, 2, 1) not in [p.period_start for p in payments]


def test_join_date_string_is_accepted():
    payments = generate_payments_for_enrollment("student-1", make_course(), "2024-01-16", [])
    assert payments[0].period_start == date(2024, 1, 16)


@pytest.mark.parametrize("fee", [0, -100, None, "abc"])
def test_rejects_non_positive_or_missing_fee(fee):
    with pytest.raises(InvalidCourseConfiguration):
        generate_payments_for_enrollment("student-1", make_course(fee=fee), date(2024, 1, 16), [])


def test_rejects_unknown_period():
    with pytest.raises(InvalidCourseConfiguration):
        generate_payments_for_enrollment("student-1", make_course(period="daily"), date(2024, 1, 16), [])


def test_rejects_missing_start_date():
    with pytest.raises(InvalidCourseConfiguration):
        generate_payments_for_enrollment("student-1", make_course(start_date=None), date(2024, 1, 16), [])


def test_rejects_unparseable_join_date():
    with pytest.raises(InvalidJoinDate):
        generate_payments_for_enrollment("student-1", make_course(), "yesterday", [])


def test_rejects_join_before_course_start():
    with pytest.raises(InvalidJoinDate):
        generate_payments_for_enrollment("student-1", make_course(), date(2023, 12, 31), [])


def test_billing_errors_are_value_errors():
    with pytest.raises(ValueError):
        generate_payments_for_enrollment("student-1", make_course(fee=0), date(2024, 1, 16), [])


def test_input_snapshot_is_not_modified():
    snapshot = [existing(date(2024, 2, 1))]
    generate_payments_for_enrollment("student-1", make_course(), date(2024, 1, 16), snapshot)
    assert len(snapshot) == 1
    assert snapshot[0].period_start == date(2024, 2, 1)


def test_accepts_enum_period_and_decimal_fee():
    course = make_course(period=BillingPeriod.yearly, fee=Decimal("500.00"), start_date=date(2024, 1, 1))
    payments = generate_payments_for_enrollment("student-1", course, date(2024, 1, 1), [])
    assert [p.period_start for p in payments] == [add_years(date(2024, 1, 1), k) for k in range(5)]
    assert all(p.amount == Decimal("500.00") for p in payments)
    assert add_days(payments[0].period_start, 366) == payments[0].period_end
