from io import StringIO

import pytest
from django.contrib.auth.models import User
from django.core.management import call_command

from apps.entries.models import Entry, CATEGORIES, ENTRY_TYPES


@pytest.mark.django_db
class TestSeedEntries:
    def test_creates_user_and_entries(self):
        out = StringIO()
        call_command('seed_entries', '--username', 'seeduser', '--months', '2',
                     '--entries-per-month', '5', '--seed', '1', stdout=out)

        user = User.objects.get(username='seeduser')
        assert user.check_password('test1234')
        entries = Entry.objects.owned_by(user)
        assert entries.count() == 10
        for entry in entries:
            assert entry.type in ENTRY_TYPES
            assert entry.category in CATEGORIES
            assert entry.amount >= 0
            assert entry.title == f"{entry.type.capitalize()} - {entry.category}"
        assert '생성 완료' in out.getvalue()

    def test_existing_user_keeps_password(self, test_user):
        call_command('seed_entries', '--username', 'tester', '--months', '1',
                     '--entries-per-month', '3', stdout=StringIO())

        test_user.refresh_from_db()
        assert test_user.check_password('pass')
        assert Entry.objects.owned_by(test_user).count() == 3


@pytest.mark.django_db
class TestDeleteEntries:
    def test_deletes_only_that_users_entries(self, make_entry, test_user, other_user):
        make_entry()
        make_entry()
        theirs = make_entry(user=other_user)

        out = StringIO()
        call_command('delete_entries', '--username', 'tester', stdout=out)

        assert Entry.objects.owned_by(test_user).count() == 0
        assert Entry.objects.filter(pk=theirs.pk).exists()
        assert '삭제된 실적: 2건' in out.getvalue()

    def test_unknown_user(self):
        out = StringIO()
        call_command('delete_entries', '--username', 'ghost', stdout=out)
        assert '찾을 수 없습니다' in out.getvalue()
