"""
dashboard 앱 테스트용 공통 fixture
"""
import pytest
from datetime import date
from decimal import Decimal
from django.contrib.auth.models import User

from apps.entries.models import Entry

TODAY = date(2024, 3, 10)


@pytest.fixture
def today():
    """집계 기준일 고정"""
    return TODAY


@pytest.fixture
def test_user(db):
    return User.objects.create_user(username='tester', password='pass')


@pytest.fixture
def other_user(db):
    return User.objects.create_user(username='other', password='pass')


@pytest.fixture
def auth_client(client, test_user):
    client.login(username='tester', password='pass')
    return client


@pytest.fixture
def make_entry(test_user):
    def _make(day, entry_type='sales', category='Training', amount='0', user=None):
        return Entry.objects.create(
            user=user or test_user,
            date=day,
            type=entry_type,
            category=category,
            amount=Decimal(amount),
            title=f"{entry_type.capitalize()} - {category}",
        )
    return _make
