import random
from datetime import timedelta
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.contrib.auth import get_user_model
from django.db import transaction as db_transaction
from django.utils import timezone

from apps.entries.models import Entry, CATEGORIES, ENTRY_TYPES

User = get_user_model()


class Command(BaseCommand):
    help = '테스트용 실적 데이터 생성 (최근 N개월)'

    # 유형별 금액 범위
    AMOUNT_RANGE = {
        'sales': (500, 5000),
        'delivery': (300, 3000),
    }

    def add_arguments(self, parser):
        parser.add_argument('--username', type=str, default='testuser', help='사용자명')
        parser.add_argument('--months', type=int, default=12, help='생성할 기간 (개월)')
        parser.add_argument('--entries-per-month', type=int, default=10, help='월별 실적 건수')
        parser.add_argument('--seed', type=int, default=None, help='난수 시드 (재현용)')

    @db_transaction.atomic
    def handle(self, *args, **options):
        username = options['username']
        months = options['months']
        per_month = options['entries_per_month']
        rng = random.Random(options['seed'])

        self.stdout.write(f"=== {username} 실적 데이터 생성 시작 ===")

        # 1. 사용자
        user, created = User.objects.get_or_create(
            username=username,
            defaults={'email': f'{username}@example.com'}
        )
        if created:
            user.set_password('test1234')
            user.save()
            self.stdout.write(f"- 사용자 생성: {username} (비밀번호: test1234)")

        # 2. 실적 생성 (오늘 기준 months*30일 이내)
        today = timezone.localdate()
        span_days = max(months * 30, 1)
        entries = []
        for _ in range(months * per_month):
            entry_type = rng.choice(ENTRY_TYPES)
            category = rng.choice(CATEGORIES)
            low, high = self.AMOUNT_RANGE[entry_type]
            entries.append(Entry(
                user=user,
                date=today - timedelta(days=rng.randrange(span_days)),
                type=entry_type,
                category=category,
                amount=Decimal(rng.randrange(low, high + 1, 50)),
                title=f"{entry_type.capitalize()} - {category}",
                content='seed',
            ))

        Entry.objects.bulk_create(entries)
        self.stdout.write(self.style.SUCCESS(f"✅ 실적 {len(entries)}건 생성 완료!"))
