import uuid
from datetime import date
from decimal import Decimal

import pytest
from django.urls import reverse
from django.contrib.auth.models import User

from apps.entries.models import Entry


@pytest.fixture
def users(db):
    user_a = User.objects.create_user(username='user_a', password='pass123')
    user_b = User.objects.create_user(username='user_b', password='pass123')
    return user_a, user_b


@pytest.fixture
def entry_b(users):
    """유저 B의 실적"""
    return Entry.objects.create(
        user=users[1], date=date(2024, 1, 15), type='sales',
        category='Training', amount=Decimal('2500'), title='B의 실적'
    )


@pytest.mark.django_db
class TestSecurity:

    # --- 1. 인증 테스트 (Authentication) ---

    @pytest.mark.parametrize('path', ['/', '/data/', '/dashboard/', '/data/export/'])
    def test_unauthenticated_user_redirected_to_auth(self, client, path):
        """로그인 안 한 사용자는 인증 게이트(/auth/)로 이동"""
        response = client.get(path)
        assert response.status_code == 302
        assert response.url.startswith('/auth/')
        assert f'next={path}' in response.url

    # --- 2. 인가/권한 테스트 (Authorization) ---

    def test_user_cannot_see_others_entries(self, client, users, entry_b):
        client.login(username='user_a', password='pass123')

        response = client.get(reverse('entries:data'))

        assert response.status_code == 200
        assert 'B의 실적' not in response.content.decode()

    def test_user_cannot_update_others_entry(self, client, users, entry_b):
        """A 사용자가 B 사용자의 실적을 수정할 수 없는지 (보안 핵심)"""
        client.login(username='user_a', password='pass123')

        response = client.post(reverse('entries:entry_update', args=[entry_b.pk]), {
            'edit-date': '2024-01-15',
            'edit-type': 'sales',
            'edit-category': 'Training',
            'edit-amount': '1',
            'edit-title': 'hacked',
        })

        assert response.status_code == 404
        entry_b.refresh_from_db()
        assert entry_b.title == 'B의 실적'

    def test_user_cannot_delete_others_entry(self, client, users, entry_b):
        client.login(username='user_a', password='pass123')

        response = client.post(reverse('entries:entry_delete', args=[entry_b.pk]))

        assert response.status_code == 404
        assert Entry.objects.filter(pk=entry_b.pk).exists()

    def test_random_uuid_is_404(self, client, users):
        client.login(username='user_a', password='pass123')
        response = client.post(reverse('entries:entry_delete', args=[uuid.uuid4()]))
        assert response.status_code == 404

    # --- 3. 알 수 없는 경로 ---

    def test_unknown_route_renders_404_page(self, client, users):
        client.login(username='user_a', password='pass123')
        response = client.get('/no-such-page/')

        assert response.status_code == 404
        assert '페이지를 찾을 수 없습니다' in response.content.decode()

    # --- 4. 비밀번호 보안 ---

    def test_password_is_hashed(self, users):
        user_a, _ = users
        assert user_a.password != 'pass123'
        assert user_a.check_password('pass123')
