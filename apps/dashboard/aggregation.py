"""
대시보드 집계 (순수 함수)

DB를 조회하지 않고 EntryStore.entries 목록만 가지고 계산합니다.

- last_12_months(): 최근 12개월 빈 버킷 (오래된 달 → 최근 달)
- monthly_series(): 유형별 월 x 카테고리 합계
- category_stats(): 합계 / 활동월 평균 / 12개월 러닝레이트
- pie_data(): 선택한 기간의 카테고리별 합계 (파이 차트)
"""
from datetime import date
from decimal import Decimal

from apps.entries.calendar_utils import days_in_month, shift_month
from apps.entries.models import CATEGORIES, CATEGORY_COLORS

MONTH_WINDOW = 12

# 파이 차트 기간 선택지
RANGE_CHOICES = [
    ('last-3-months', 'Last 3 Months'),
    ('last-6-months', 'Last 6 Months'),
    ('last-12-months', 'Last 12 Months'),
    ('all-time', 'All Time'),
]
RANGE_MONTHS = {
    'last-3-months': 3,
    'last-6-months': 6,
    'last-12-months': 12,
    'all-time': None,
}
DEFAULT_RANGE = 'last-3-months'


def month_key(year, month):
    return f"{year}-{month:02d}"


def last_12_months(today):
    """
    최근 12개월 버킷

    Example (today=2024-03-10):
        [{'month_key': '2023-04', 'label': 'Apr 2023', 'Training': 0, ...},
         ...
         {'month_key': '2024-03', 'label': 'Mar 2024', 'Training': 0, ...}]
    """
    months = []
    for offset in range(MONTH_WINDOW - 1, -1, -1):
        year, month = shift_month(today.year, today.month, -offset)
        bucket = {
            'month_key': month_key(year, month),
            'label': date(year, month, 1).strftime('%b %Y'),
        }
        for category in CATEGORIES:
            bucket[category] = Decimal('0')
        months.append(bucket)
    return months


def monthly_series(entries, entry_type, today):
    """해당 유형의 실적을 월 버킷에 카테고리별로 합산 (범위 밖은 무시)"""
    months = last_12_months(today)
    by_key = {bucket['month_key']: bucket for bucket in months}

    for entry in entries:
        if entry.type != entry_type:
            continue
        bucket = by_key.get(month_key(entry.date.year, entry.date.month))
        if bucket is not None:
            bucket[entry.category] += entry.amount

    for bucket in months:
        bucket['total'] = sum((bucket[category] for category in CATEGORIES), Decimal('0'))
    return months


def category_stats(series, category):
    """
    카테고리 1개의 통계

    - total: 12개월 합계
    - average: 실적이 있었던 달만의 평균 (없으면 0)
    - running_rate: 최근 12개월 합계 / 12 (실적 없는 달 포함)
    """
    values = [bucket[category] for bucket in series]
    active = [value for value in values if value > 0]

    total = sum(active, Decimal('0'))
    average = total / len(active) if active else Decimal('0')
    running_rate = sum(values[-MONTH_WINDOW:], Decimal('0')) / MONTH_WINDOW

    return {
        'total': total,
        'average': average.quantize(Decimal('0.01')),
        'running_rate': running_rate.quantize(Decimal('0.01')),
    }


def stats_table(series):
    """모든 카테고리 통계 {category: stats}"""
    return {category: category_stats(series, category) for category in CATEGORIES}


def normalize_range(range_key):
    return range_key if range_key in RANGE_MONTHS else DEFAULT_RANGE


def range_bounds(range_key, today):
    """
    기간 선택 → (시작일, 종료일)

    최근 N개월 = N-1개월 전 1일 ~ 이번 달 말일
    전체 기간은 (None, None)
    """
    months = RANGE_MONTHS[normalize_range(range_key)]
    if months is None:
        return None, None

    start_year, start_month = shift_month(today.year, today.month, -(months - 1))
    start = date(start_year, start_month, 1)
    end = date(today.year, today.month, days_in_month(today.year, today.month))
    return start, end


def pie_data(entries, entry_type, range_key, today):
    """
    파이 차트 데이터 (선택한 기간으로 실제 필터링)

    반환: [{'name', 'value', 'color', 'percentage'}, ...] (금액 0인 카테고리 제외)
    """
    start, end = range_bounds(range_key, today)

    totals = {category: Decimal('0') for category in CATEGORIES}
    for entry in entries:
        if entry.type != entry_type:
            continue
        if start is not None and not (start <= entry.date <= end):
            continue
        totals[entry.category] += entry.amount

    grand_total = sum(totals.values(), Decimal('0'))

    slices = []
    for category in CATEGORIES:
        value = totals[category]
        if value <= 0:
            continue
        slices.append({
            'name': category,
            'value': value,
            'color': CATEGORY_COLORS[category],
            'percentage': round(value / grand_total * 100, 1),
        })
    return slices
