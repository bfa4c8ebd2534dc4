from django.urls import path
from . import views

app_name = 'entries'

urlpatterns = [
    # 캘린더 (기본 페이지)
    path('', views.calendar_view, name='calendar'),
    path('entries/create/', views.entry_create, name='entry_create'),

    # 데이터 테이블
    path('data/', views.data_view, name='data'),
    path('data/<uuid:pk>/update/', views.entry_update, name='entry_update'),
    path('data/<uuid:pk>/delete/', views.entry_delete, name='entry_delete'),

    # excel
    path('data/template/', views.download_excel_template, name='download_template'),
    path('data/upload/', views.upload_entries_excel, name='upload_excel'),
    path('data/export/', views.entry_export_view, name='export'),
]
