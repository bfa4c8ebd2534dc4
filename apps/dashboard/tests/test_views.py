import json
from datetime import date
from decimal import Decimal
from unittest import mock

import pytest
from django.urls import reverse
from django.utils import timezone


@pytest.fixture
def fixed_today(today):
    with mock.patch.object(timezone, 'localdate', return_value=today):
        yield today


@pytest.mark.django_db
class TestDashboardView:
    def test_requires_login(self, client):
        response = client.get(reverse('dashboard:dashboard'))
        assert response.status_code == 302
        assert response.url.startswith('/auth/')

    def test_renders_series_and_stats(self, auth_client, make_entry, fixed_today):
        make_entry(date(2024, 1, 15), 'sales', 'Training', '2500')
        make_entry(date(2024, 1, 15), 'delivery', 'Coaching', '1800')

        response = auth_client.get(reverse('dashboard:dashboard'))

        assert response.status_code == 200
        sales = {b['month_key']: b for b in response.context['sales_series']}
        assert sales['2024-01']['Training'] == Decimal('2500')
        assert response.context['delivery_stats']['Coaching']['total'] == Decimal('1800')
        # 분석표는 최근 달부터
        assert response.context['sales_rows'][0]['month_key'] == '2024-03'
        assert response.context['sales_rows'][2]['amounts'] == [Decimal('2500'), Decimal('0'), Decimal('0')]

    def test_only_own_entries_are_aggregated(self, auth_client, make_entry, other_user, fixed_today):
        make_entry(date(2024, 2, 1), 'sales', 'Training', '100')
        make_entry(date(2024, 2, 1), 'sales', 'Training', '9000', user=other_user)

        response = auth_client.get(reverse('dashboard:dashboard'))

        assert response.context['sales_stats']['Training']['total'] == Decimal('100')

    def test_pie_defaults(self, auth_client, fixed_today):
        response = auth_client.get(reverse('dashboard:dashboard'))

        assert response.context['pie_type'] == 'sales'
        assert response.context['pie_range'] == 'last-3-months'
        assert response.context['pie_slices'] == []
        assert 'category_colors' not in response.context

    def test_pie_type_and_range_params(self, auth_client, make_entry, fixed_today):
        make_entry(date(2023, 6, 1), 'delivery', 'Speaking', '600')

        narrow = auth_client.get(reverse('dashboard:dashboard'), {'pie_type': 'delivery'})
        wide = auth_client.get(
            reverse('dashboard:dashboard'), {'pie_type': 'delivery', 'pie_range': 'last-12-months'}
        )

        assert narrow.context['pie_slices'] == []
        assert [s['name'] for s in wide.context['pie_slices']] == ['Speaking']
        assert wide.context['pie_type'] == 'delivery'

    def test_invalid_params_fall_back(self, auth_client, fixed_today):
        response = auth_client.get(
            reverse('dashboard:dashboard'), {'pie_type': 'refund', 'pie_range': 'forever'}
        )

        assert response.context['pie_type'] == 'sales'
        assert response.context['pie_range'] == 'last-3-months'

    def test_chart_data_is_json_serializable(self, auth_client, make_entry, fixed_today):
        """Chart.js용 데이터는 json_script로 출력"""
        make_entry(date(2024, 3, 1), 'sales', 'Coaching', '1234.50')

        response = auth_client.get(reverse('dashboard:dashboard'))
        charts = response.context['charts']

        json.dumps(charts)
        assert len(charts['sales']['labels']) == 12
        assert charts['pie']['datasets'][0]['data'] == [1234.5]
        assert 'id="chart-data"' in response.content.decode()
