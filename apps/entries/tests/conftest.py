"""
entries 앱 테스트용 공통 fixture
"""
import pytest
from datetime import date
from decimal import Decimal
from django.contrib.auth.models import User

from apps.entries.models import Entry


@pytest.fixture
def test_user(db):
    """테스트용 사용자"""
    return User.objects.create_user(username='tester', password='pass')


@pytest.fixture
def other_user(db):
    """다른 사용자 (권한 테스트용)"""
    return User.objects.create_user(username='other', password='pass')


@pytest.fixture
def auth_client(client, test_user):
    """로그인된 클라이언트"""
    client.login(username='tester', password='pass')
    return client


@pytest.fixture
def make_entry(test_user):
    """Entry 생성 헬퍼 (기본값: 2024-01-15 Sales/Training 2500)"""
    def _make(user=None, **kwargs):
        fields = {
            'date': date(2024, 1, 15),
            'type': 'sales',
            'category': 'Training',
            'amount': Decimal('2500'),
            'title': 'Sales - Training',
            'content': '',
        }
        fields.update(kwargs)
        return Entry.objects.create(user=user or test_user, **fields)
    return _make


@pytest.fixture
def sales_entry(make_entry):
    return make_entry()


@pytest.fixture
def delivery_entry(make_entry):
    return make_entry(type='delivery', category='Coaching', amount=Decimal('1800'), title='Delivery - Coaching')
