from datetime import date, datetime
from decimal import Decimal
from io import BytesIO

import openpyxl
import pytest

from apps.entries.models import Entry
from apps.entries.store import EntryStore
from apps.entries.utils import (
    EXCEL_HEADERS,
    export_entries_to_excel,
    generate_entry_template,
    parse_entry_row,
    process_entry_excel,
    to_category,
    to_date,
    to_decimal,
    to_entry_type,
)


def workbook_bytes(rows):
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.append(EXCEL_HEADERS)
    for row in rows:
        ws.append(row)
    output = BytesIO()
    wb.save(output)
    output.seek(0)
    return output


class TestConverters:
    @pytest.mark.parametrize('value, expected', [
        ('1,000', Decimal('1000.00')),
        (2500, Decimal('2500.00')),
        ('12.345', Decimal('12.35')),
        (' 7 ', Decimal('7.00')),
    ])
    def test_to_decimal(self, value, expected):
        assert to_decimal(value) == expected

    @pytest.mark.parametrize('value', [None, '', 'abc'])
    def test_to_decimal_invalid(self, value):
        assert to_decimal(value) is None

    @pytest.mark.parametrize('value', ['2024-01-15', '2024/01/15', '2024.01.15', datetime(2024, 1, 15, 9, 30), date(2024, 1, 15)])
    def test_to_date(self, value):
        assert to_date(value) == date(2024, 1, 15)

    def test_to_date_invalid(self):
        assert to_date('15-01-2024') is None
        assert to_date(None) is None

    def test_type_and_category_are_case_insensitive(self):
        assert to_entry_type('SALES') == 'sales'
        assert to_entry_type('딜리버리') == 'delivery'
        assert to_entry_type('refund') is None
        assert to_category('coaching') == 'Coaching'
        assert to_category('Consulting') is None


class TestParseEntryRow:
    def test_valid_row(self):
        fields, error = parse_entry_row(['2024-01-15', 'Sales', 'Training', '2,500', ' 워크숍 ', None], 2)

        assert error is None
        assert fields == {
            'date': date(2024, 1, 15),
            'type': 'sales',
            'category': 'Training',
            'amount': Decimal('2500.00'),
            'title': '워크숍',
            'content': '',
        }

    def test_blank_title_is_filled(self):
        """제목이 비어 있으면 '유형 - 카테고리'"""
        fields, error = parse_entry_row(['2024-01-15', 'delivery', 'Speaking', 100], 3)
        assert error is None
        assert fields['title'] == 'Delivery - Speaking'

    @pytest.mark.parametrize('row, keyword', [
        (['bad', 'Sales', 'Training', 100, 't', ''], '날짜'),
        (['2024-01-15', 'Refund', 'Training', 100, 't', ''], '유형'),
        (['2024-01-15', 'Sales', 'Consulting', 100, 't', ''], '카테고리'),
        (['2024-01-15', 'Sales', 'Training', -5, 't', ''], '금액'),
        (['2024-01-15', 'Sales', 'Training', '', 't', ''], '금액'),
    ])
    def test_invalid_rows(self, row, keyword):
        fields, error = parse_entry_row(row, 7)
        assert fields is None
        assert error.startswith('7행')
        assert keyword in error


@pytest.mark.django_db
class TestProcessEntryExcel:
    def test_saves_valid_rows_and_reports_errors(self, test_user):
        excel = workbook_bytes([
            ['2024-01-15', 'Sales', 'Training', 2500, 'Sales - Training', ''],
            [None, None, None, None, None, None],
            ['2024-01-16', 'Delivery', 'Coaching', 1800, '', '메모'],
            ['2024-01-17', 'Sales', 'Nope', 100, 'x', ''],
        ])

        result = process_entry_excel(excel, EntryStore(test_user))

        assert result['success_count'] == 2
        assert result['error_count'] == 1
        assert 'Nope' in result['errors'][0]
        assert Entry.objects.owned_by(test_user).count() == 2
        assert Entry.objects.get(date=date(2024, 1, 16)).content == '메모'

    def test_title_too_long_fails_model_validation(self, test_user):
        excel = workbook_bytes([['2024-01-15', 'Sales', 'Training', 100, 'x' * 201, '']])

        result = process_entry_excel(excel, EntryStore(test_user))

        assert result['success_count'] == 0
        assert result['error_count'] == 1
        assert Entry.objects.count() == 0


@pytest.mark.django_db
class TestExcelFiles:
    def test_template_has_headers_and_examples(self):
        wb = openpyxl.load_workbook(generate_entry_template())
        rows = list(wb.active.iter_rows(values_only=True))

        assert list(rows[0]) == EXCEL_HEADERS
        assert len(rows) > 1

    def test_template_examples_are_importable(self, test_user):
        """양식의 예시 행은 그대로 업로드 가능"""
        result = process_entry_excel(generate_entry_template(), EntryStore(test_user))
        assert result['error_count'] == 0
        assert result['success_count'] == 3

    def test_export_rows(self, sales_entry, delivery_entry):
        wb = openpyxl.load_workbook(export_entries_to_excel([sales_entry, delivery_entry]))
        rows = list(wb.active.iter_rows(min_row=2, values_only=True))

        assert rows[0][:5] == ('2024-01-15', 'Sales', 'Training', 2500, 'Sales - Training')
        assert rows[1][1] == 'Delivery'
        assert rows[1][3] == 1800
