from datetime import datetime, date, timedelta
from dateutil.relativedelta import relativedelta


def add_days(d: date, days: int) -> date:
    return d + timedelta(days=days)


def add_months(d: date, months: int) -> date:
    """
    Cộng `months` tháng dương lịch, trả về date mới.
    Nếu tháng đích ngắn hơn (31/01 + 1 tháng) thì lấy ngày cuối tháng (29/02 hoặc 28/02).
    """
    return d + relativedelta(months=months)


def add_years(d: date, years: int) -> date:
    # 29/02 rơi vào năm không nhuận -> 28/02
    return d + relativedelta(years=years)


def parse_date_safe(d):
    """Chuyển đổi giá trị ngày (Excel, ISO string, date) sang date object."""
    if d is None or d == "":
        return None

    if isinstance(d, datetime):
        return d.date()
    if isinstance(d, date):
        return d

    # Nếu là số serial ngày của Excel
    if isinstance(d, (int, float)):
        try:
            return datetime.fromordinal(datetime(1900, 1, 1).toordinal() + int(d) - 2).date()
        except (ValueError, OverflowError):
            return None

    # Nếu là string
    if isinstance(d, str):
        d = d.strip()
        # ISO có phần giờ, ví dụ "2024-01-16T00:00:00.000Z"
        if "T" in d:
            d = d.split("T", 1)[0]
        for fmt in ("%Y-%m-%d %H:%M:%S", "%Y-%m-%d", "%d/%m/%Y", "%d-%m-%Y", "%d.%m.%Y"):
            try:
                return datetime.strptime(d, fmt).date()
            except ValueError:
                continue

    return None
