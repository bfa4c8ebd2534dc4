from django.urls import path
from . import views

app_name = "accounts"

urlpatterns = [
    path("", views.SignInView.as_view(), name="auth"),
    path("signup/", views.signup, name="signup"),
    path("logout/", views.SignOutView.as_view(), name="logout"),
]
