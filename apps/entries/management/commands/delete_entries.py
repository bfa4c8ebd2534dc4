from django.core.management.base import BaseCommand
from django.contrib.auth import get_user_model

from apps.entries.models import Entry

User = get_user_model()


class Command(BaseCommand):
    help = '사용자의 실적 데이터를 모두 삭제합니다.'

    def add_arguments(self, parser):
        parser.add_argument('--username', type=str, default='testuser')

    def handle(self, *args, **options):
        username = options['username']
        self.stdout.write(f"⚠️ {username}의 실적을 삭제하기 시작합니다...")

        try:
            user = User.objects.get(username=username)
        except User.DoesNotExist:
            self.stdout.write(self.style.ERROR(f"❌ '{username}' 사용자를 찾을 수 없습니다."))
            return

        count, _ = Entry.objects.owned_by(user).delete()
        self.stdout.write(f"- 삭제된 실적: {count}건")
        self.stdout.write(self.style.SUCCESS(f"✅ {username} 실적 삭제 완료!"))
