"""Date manipulation utilities"""

import calendar
from datetime import datetime, timedelta
from typing import Tuple


def start_of_day(moment: datetime) -> datetime:
    """Truncate to 00:00:00.000 of the same local calendar day"""
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def previous_month(year: int, month: int) -> Tuple[int, int]:
    """Calendar month before (year, month); January rolls back to December"""
    if month == 1:
        return year - 1, 12
    return year, month - 1


def shift_month(year: int, month: int, offset: int) -> Tuple[int, int]:
    """Move (year, month) by offset months, negative offsets go back in time"""
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def month_label(month: int) -> str:
    """Three-letter month abbreviation (Jan, Feb, ...)"""
    return calendar.month_abbr[month]


def format_date(moment: datetime) -> str:
    """Display format used for record dates, e.g. 05 Mar 2025"""
    return moment.strftime("%d %b %Y")


def format_header_date(day: datetime, now: datetime) -> str:
    """Day-group header: Today, Yesterday, or the formatted date"""
    today = start_of_day(now)
    day = start_of_day(day)
    if day == today:
        return "Today"
    if day == today - timedelta(days=1):
        return "Yesterday"
    return format_date(day)
