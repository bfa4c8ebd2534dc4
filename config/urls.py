from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path('admin/', admin.site.urls),
    path('auth/', include('apps.accounts.urls')),
    path('dashboard/', include('apps.dashboard.urls')),
    # 캘린더(/)와 데이터 테이블(/data/)
    path('', include('apps.entries.urls')),
]
