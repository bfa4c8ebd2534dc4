import uuid
from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Entry',
            fields=[
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('date', models.DateField(db_index=True, verbose_name='날짜')),
                ('type', models.CharField(choices=[('sales', 'Sales'), ('delivery', 'Delivery')], db_index=True, max_length=20, verbose_name='유형')),
                ('category', models.CharField(choices=[('Training', 'Training'), ('Coaching', 'Coaching'), ('Speaking', 'Speaking')], db_index=True, max_length=20, verbose_name='카테고리')),
                ('amount', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))], verbose_name='금액')),
                ('title', models.CharField(max_length=200, verbose_name='제목')),
                ('content', models.TextField(blank=True, verbose_name='내용')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='%(class)s_set', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': '실적',
                'verbose_name_plural': '실적 목록',
                'db_table': 'entries',
                'ordering': ['-date', '-created_at'],
                'indexes': [
                    models.Index(fields=['user', '-date'], name='entries_user_date_idx'),
                    models.Index(fields=['user', 'type', '-date'], name='entries_user_type_date_idx'),
                ],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('amount__gte', 0)), name='entry_amount_non_negative'),
                ],
            },
        ),
    ]
