"""
프로젝트 공통 추상 모델

- TimeStampedModel: 생성/수정 시간 자동 추적
- OwnedQuerySet: 소유자 기준 조회 (행 단위 접근 제어)
- UserOwnedModel: 사용자 소유 + 타임스탬프
"""

from django.conf import settings
from django.db import models


class TimeStampedModel(models.Model):
    """생성/수정 시간 자동 추적"""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)  # 수정할 때마다 자동 갱신

    class Meta:
        abstract = True


class OwnedQuerySet(models.QuerySet):
    """
    소유자 기준 QuerySet

    모든 조회/수정/삭제는 owned_by()를 거쳐야 합니다.
    다른 사용자의 행은 존재하지 않는 것처럼 취급됩니다.

    사용 방법:
        Entry.objects.owned_by(request.user)
        Entry.objects.owned_by(request.user).filter(pk=pk).delete()
    """

    def owned_by(self, user):
        # 비로그인 사용자는 아무 행도 볼 수 없음
        if user is None or not user.is_authenticated:
            return self.none()
        return self.filter(user=user)


class UserOwnedModel(TimeStampedModel):
    """사용자 소유 리소스 (타임스탬프 포함)"""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='%(class)s_set',
        db_index=True
    )

    objects = OwnedQuerySet.as_manager()

    class Meta:
        abstract = True
