from datetime import date
from decimal import Decimal
from types import SimpleNamespace

from app.models.payment_model import PaymentStatus
from app.services.payment_service import display_status, summarize


def payment(status, amount, due_date):
    return SimpleNamespace(status=status, amount=Decimal(amount), due_date=due_date)


TODAY = date(2024, 6, 15)


def test_display_status_for_past_due_pending():
    assert display_status(payment(PaymentStatus.pending, 100, date(2024, 6, 1)), TODAY) == PaymentStatus.overdue
    assert display_status(payment(PaymentStatus.pending, 100, TODAY), TODAY) == PaymentStatus.pending
    assert display_status(payment(PaymentStatus.paid, 100, date(2024, 6, 1)), TODAY) == PaymentStatus.paid
    assert display_status(payment(PaymentStatus.waived, 100, date(2024, 6, 1)), TODAY) == PaymentStatus.waived


def test_summarize():
    payments = [
        payment(PaymentStatus.paid, 1000, date(2024, 2, 1)),
        payment(PaymentStatus.pending, 516, date(2024, 5, 1)),
        payment(PaymentStatus.overdue, 1000, date(2024, 4, 1)),
        payment(PaymentStatus.pending, 1000, date(2024, 7, 1)),
        payment(PaymentStatus.waived, 1000, date(2024, 3, 1)),
    ]

    summary = summarize(payments, TODAY)
    assert summary.total_collected == 1000
    assert summary.total_overdue == 1516
    assert summary.total_pending == 1000
    assert summary.count == 5
