"""
캘린더 그리드 계산 (순수 날짜 계산)

- 주의 시작은 일요일 (일~토 7칸)
- 날짜 비교는 로컬 날짜 문자열 'yyyy-MM-dd' 기준 (타임존 처리 없음)
"""
import calendar
from collections import defaultdict
from datetime import date, datetime
from decimal import Decimal

from .models import TYPE_SALES, TYPE_DELIVERY

DATE_FORMAT = '%Y-%m-%d'
WEEKDAY_LABELS = ['일', '월', '화', '수', '목', '금', '토']


def days_in_month(year, month):
    """해당 월의 일수"""
    return calendar.monthrange(year, month)[1]


def leading_blanks(year, month):
    """
    1일 앞에 들어갈 빈 칸 수 (일요일 시작 기준, 0~6)

    calendar.weekday()는 월요일=0 이므로 일요일=0 으로 변환
    """
    return (calendar.weekday(year, month, 1) + 1) % 7


def format_day(day):
    return day.strftime(DATE_FORMAT)


def parse_day(value, default=None):
    """'yyyy-MM-dd' 문자열 → date (잘못된 값이면 default)"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(str(value).strip(), DATE_FORMAT).date()
    except (TypeError, ValueError):
        return default


def shift_month(year, month, delta):
    """(year, month)에서 delta개월 이동"""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def entries_by_day(entries):
    """
    날짜 문자열별 항목 묶음

    Example:
        {'2024-01-15': [<Entry>, <Entry>], '2024-01-16': [...]}
    """
    buckets = defaultdict(list)
    for entry in entries:
        buckets[format_day(entry.date)].append(entry)
    return dict(buckets)


def day_totals(entries):
    """하루치 항목의 유형별 합계"""
    totals = {TYPE_SALES: Decimal('0'), TYPE_DELIVERY: Decimal('0')}
    for entry in entries:
        totals[entry.type] = totals.get(entry.type, Decimal('0')) + entry.amount
    return totals


def month_grid(year, month, entries, selected=None, today=None):
    """
    월 달력 그리드 (주 단위 리스트)

    각 칸은 None(빈 칸) 또는 날짜 정보 dict:
        {'date', 'key', 'day', 'entries', 'totals', 'is_selected', 'is_today'}
    """
    buckets = entries_by_day(entries)
    cells = [None] * leading_blanks(year, month)

    for day_number in range(1, days_in_month(year, month) + 1):
        day = date(year, month, day_number)
        key = format_day(day)
        day_entries = buckets.get(key, [])
        cells.append({
            'date': day,
            'key': key,
            'day': day_number,
            'entries': day_entries,
            'totals': day_totals(day_entries),
            'is_selected': day == selected,
            'is_today': day == today,
        })

    # 마지막 주 빈 칸 채우기
    while len(cells) % 7:
        cells.append(None)

    return [cells[i:i + 7] for i in range(0, len(cells), 7)]
