from django.contrib.auth.decorators import login_required
from django.shortcuts import render
from django.utils import timezone

from apps.entries.models import (
    CATEGORIES,
    CATEGORY_COLORS,
    TYPE_CHOICES,
    TYPE_SALES,
    TYPE_DELIVERY,
    ENTRY_TYPES,
)
from apps.entries.store import EntryStore
from .aggregation import (
    RANGE_CHOICES,
    monthly_series,
    normalize_range,
    pie_data,
    stats_table,
)


def _bar_chart(series):
    """Chart.js 막대 차트용 데이터 (Decimal → float)"""
    return {
        'labels': [bucket['label'] for bucket in series],
        'datasets': [
            {
                'label': category,
                'data': [float(bucket[category]) for bucket in series],
                'backgroundColor': CATEGORY_COLORS[category],
            }
            for category in CATEGORIES
        ],
    }


def _analysis_rows(series):
    """분석표 행 (최근 달이 위로, 금액은 카테고리 순서 리스트)"""
    return [
        {
            'month_key': bucket['month_key'],
            'label': bucket['label'],
            'amounts': [bucket[category] for category in CATEGORIES],
            'total': bucket['total'],
        }
        for bucket in reversed(series)
    ]


def _pie_chart(slices):
    return {
        'labels': [item['name'] for item in slices],
        'datasets': [{
            'data': [float(item['value']) for item in slices],
            'backgroundColor': [item['color'] for item in slices],
        }],
    }


@login_required
def dashboard(request):
    """실적 대시보드 (월별 막대 차트 + 카테고리 파이 차트 + 12개월 분석표)"""
    store = EntryStore(request.user)
    today = timezone.localdate()

    pie_type = request.GET.get('pie_type', TYPE_SALES)
    if pie_type not in ENTRY_TYPES:
        pie_type = TYPE_SALES
    pie_range = normalize_range(request.GET.get('pie_range'))

    sales_series = monthly_series(store.entries, TYPE_SALES, today)
    delivery_series = monthly_series(store.entries, TYPE_DELIVERY, today)
    slices = pie_data(store.entries, pie_type, pie_range, today)
    sales_stats = stats_table(sales_series)
    delivery_stats = stats_table(delivery_series)

    context = {
        'categories': CATEGORIES,
        'sales_series': sales_series,
        'delivery_series': delivery_series,
        'sales_rows': _analysis_rows(sales_series),
        'delivery_rows': _analysis_rows(delivery_series),
        'sales_stats': sales_stats,
        'delivery_stats': delivery_stats,
        'sales_stat_columns': [sales_stats[category] for category in CATEGORIES],
        'delivery_stat_columns': [delivery_stats[category] for category in CATEGORIES],
        'pie_slices': slices,
        'pie_type': pie_type,
        'pie_range': pie_range,
        'type_choices': TYPE_CHOICES,
        'range_choices': RANGE_CHOICES,
        'charts': {
            'sales': _bar_chart(sales_series),
            'delivery': _bar_chart(delivery_series),
            'pie': _pie_chart(slices),
        },
    }
    return render(request, 'dashboard/dashboard.html', context)
