import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models

from apps.core.models import UserOwnedModel


# 유형 (세일즈 / 딜리버리)
TYPE_SALES = 'sales'
TYPE_DELIVERY = 'delivery'
TYPE_CHOICES = [
    (TYPE_SALES, 'Sales'),
    (TYPE_DELIVERY, 'Delivery'),
]
ENTRY_TYPES = [value for value, _ in TYPE_CHOICES]

# 카테고리 (고정 목록)
CATEGORY_TRAINING = 'Training'
CATEGORY_COACHING = 'Coaching'
CATEGORY_SPEAKING = 'Speaking'
CATEGORY_CHOICES = [
    (CATEGORY_TRAINING, 'Training'),
    (CATEGORY_COACHING, 'Coaching'),
    (CATEGORY_SPEAKING, 'Speaking'),
]
CATEGORIES = [value for value, _ in CATEGORY_CHOICES]

# 차트 색상
CATEGORY_COLORS = {
    CATEGORY_TRAINING: '#10B981',
    CATEGORY_COACHING: '#3B82F6',
    CATEGORY_SPEAKING: '#EF4444',
}


class Entry(UserOwnedModel):
    """실적 기록 (세일즈/딜리버리 1건)"""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    date = models.DateField(db_index=True, verbose_name='날짜')
    type = models.CharField(max_length=20, choices=TYPE_CHOICES, db_index=True, verbose_name='유형')
    category = models.CharField(max_length=20, choices=CATEGORY_CHOICES, db_index=True, verbose_name='카테고리')
    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))],
        verbose_name='금액'
    )
    title = models.CharField(max_length=200, verbose_name='제목')
    content = models.TextField(blank=True, verbose_name='내용')

    class Meta:
        db_table = 'entries'
        ordering = ['-date', '-created_at']
        verbose_name = '실적'
        verbose_name_plural = '실적 목록'
        indexes = [
            models.Index(fields=['user', '-date'], name='entries_user_date_idx'),
            models.Index(fields=['user', 'type', '-date'], name='entries_user_type_date_idx'),
        ]
        constraints = [
            models.CheckConstraint(condition=models.Q(amount__gte=0), name='entry_amount_non_negative'),
        ]

    def __str__(self):
        return f"[{self.get_type_display()}] {self.category} {self.amount:,.0f} ({self.date})"

    def clean(self):
        errors = {}
        if not (self.title or '').strip():
            errors['title'] = '제목을 입력하세요'
        if errors:
            raise ValidationError(errors)
