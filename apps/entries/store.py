"""
사용자별 실적 저장소 (EntryStore)

요청마다 request.user로 생성해서 뷰와 템플릿에 명시적으로 넘깁니다.
전역 캐시가 아니므로 로그아웃하면 빈 목록, 다시 로그인하면 새로 로드됩니다.

    store = EntryStore(request.user)
    store.entries            # 날짜 내림차순 목록
    store.create(date=..., type='sales', category='Training', amount=2500, title='...')
    store.update(pk, amount=3000)
    store.delete(pk)

모든 변경(create/update/delete) 후에는 refresh()로 목록을 다시 읽어옵니다.

에러 정책:
    - 입력 검증 실패 → ValidationError (full_clean)
    - 없는 항목 / 다른 사용자의 항목 → Entry.DoesNotExist
    - DB 오류 → 로그 기록 후 EntryStoreError
"""
import logging
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import DatabaseError, transaction

from .models import Entry, TYPE_SALES, TYPE_DELIVERY

logger = logging.getLogger(__name__)

# 사용자가 수정할 수 있는 필드
EDITABLE_FIELDS = ('date', 'type', 'category', 'amount', 'title', 'content')


class EntryStoreError(Exception):
    """저장소(DB) 작업 실패"""


class EntryStore:
    """로그인 사용자 한 명의 실적 목록 + CRUD"""

    def __init__(self, user):
        self.user = user
        self.entries = []
        self.refresh()

    @property
    def is_active(self):
        return self.user is not None and self.user.is_authenticated

    def queryset(self):
        return Entry.objects.owned_by(self.user)

    def refresh(self):
        """DB에서 목록을 다시 로드 (비로그인 사용자는 빈 목록)"""
        if not self.is_active:
            self.entries = []
            return self.entries

        try:
            self.entries = list(self.queryset().order_by('-date', '-created_at'))
        except DatabaseError as e:
            logger.error(f"실적 목록 로드 실패: user_id={self.user.pk}, error={e}", exc_info=True)
            raise EntryStoreError('실적 목록을 불러오지 못했습니다.') from e
        return self.entries

    def get(self, pk):
        """소유한 항목 1건 (없거나 남의 것이면 Entry.DoesNotExist)"""
        return self.queryset().get(pk=pk)

    def for_date(self, day):
        """해당 날짜의 항목만 (정확히 일치)"""
        return [entry for entry in self.entries if entry.date == day]

    def totals_by_type(self):
        """유형별 합계"""
        totals = {TYPE_SALES: Decimal('0'), TYPE_DELIVERY: Decimal('0')}
        for entry in self.entries:
            totals[entry.type] += entry.amount
        return totals

    # ============================================================
    # 변경 작업
    # ============================================================

    def create(self, **fields):
        """새 항목 생성 (제목이 비어 있으면 거부)"""
        self._ensure_active()
        if not str(fields.get('title') or '').strip():
            raise ValidationError({'title': '제목을 입력하세요'})

        entry = Entry(user=self.user, **self._clean_fields(fields))
        entry.full_clean()
        self._save(entry, action='생성')
        logger.info(f"실적 생성: user_id={self.user.pk}, entry_id={entry.pk}")
        self.refresh()
        return entry

    def update(self, pk, **fields):
        """소유한 항목 수정 (updated_at 자동 갱신)"""
        self._ensure_active()
        entry = self.get(pk)
        for name, value in self._clean_fields(fields).items():
            setattr(entry, name, value)
        entry.full_clean()
        self._save(entry, action='수정')
        logger.info(f"실적 수정: user_id={self.user.pk}, entry_id={entry.pk}")
        self.refresh()
        return entry

    def delete(self, pk):
        """소유한 항목 삭제 (복구 불가)"""
        self._ensure_active()
        entry = self.get(pk)
        try:
            with transaction.atomic():
                entry.delete()
        except DatabaseError as e:
            logger.error(f"실적 삭제 실패: user_id={self.user.pk}, entry_id={pk}, error={e}", exc_info=True)
            raise EntryStoreError('실적을 삭제하지 못했습니다.') from e
        logger.info(f"실적 삭제: user_id={self.user.pk}, entry_id={pk}")
        self.refresh()

    def bulk_create(self, entries):
        """
        검증된 Entry 여러 건을 한 트랜잭션으로 저장 (엑셀 업로드)

        소유자는 항상 이 저장소의 사용자로 지정됩니다.
        """
        self._ensure_active()
        entries = list(entries)
        if not entries:
            return []

        for entry in entries:
            entry.user = self.user

        try:
            with transaction.atomic():
                created = Entry.objects.bulk_create(entries)
        except DatabaseError as e:
            logger.error(f"실적 일괄 등록 실패: user_id={self.user.pk}, count={len(entries)}, error={e}", exc_info=True)
            raise EntryStoreError('실적을 일괄 등록하지 못했습니다.') from e
        logger.info(f"실적 일괄 등록: user_id={self.user.pk}, count={len(created)}")
        self.refresh()
        return created

    def _ensure_active(self):
        if not self.is_active:
            raise EntryStoreError('로그인이 필요합니다.')

    def _clean_fields(self, fields):
        unknown = set(fields) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValidationError(f"수정할 수 없는 필드입니다: {', '.join(sorted(unknown))}")
        cleaned = dict(fields)
        if cleaned.get('content') is None and 'content' in cleaned:
            cleaned['content'] = ''
        return cleaned

    def _save(self, entry, action):
        try:
            with transaction.atomic():
                entry.save()
        except DatabaseError as e:
            logger.error(f"실적 {action} 실패: user_id={self.user.pk}, error={e}", exc_info=True)
            raise EntryStoreError(f'실적을 {action}하지 못했습니다.') from e
