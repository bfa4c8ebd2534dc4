from django.contrib import admin
from django.utils.html import format_html

from .models import Entry, TYPE_SALES


@admin.register(Entry)
class EntryAdmin(admin.ModelAdmin):
    """
    실적 관리
    """
    list_display = [
        'date',
        'get_type_display_colored',
        'category',
        'get_amount_display',
        'title',
        'user',
        'updated_at',
    ]

    date_hierarchy = 'date'

    list_filter = [
        'type',
        'category',
        'date',
    ]

    search_fields = ['title', 'content', 'user__username']
    readonly_fields = ['id', 'created_at', 'updated_at']
    list_select_related = ['user']

    @admin.display(description='유형', ordering='type')
    def get_type_display_colored(self, obj):
        if obj.type == TYPE_SALES:
            return format_html('<span style="color:#10B981; font-weight:bold;">{}</span>', 'Sales')
        return format_html('<span style="color:#3B82F6; font-weight:bold;">{}</span>', 'Delivery')

    @admin.display(description='금액', ordering='amount')
    def get_amount_display(self, obj):
        if obj.amount is None:
            return "-"
        return f"${obj.amount:,.2f}"
