# Django 기본
from django.shortcuts import render, redirect
from django.urls import reverse_lazy
from django.contrib import messages
from django.contrib.auth import login as auth_login

# Django 인증 관련
from django.contrib.auth.views import (
    LoginView as DjangoLoginView,
    LogoutView as DjangoLogoutView,
)

# 데이터베이스
from django.db import IntegrityError

# 기타
import logging

# 앱 내부
from .forms import SignInForm, SignUpForm

logger = logging.getLogger(__name__)


class SignInView(DjangoLoginView):
    """
    인증 게이트 (/auth/)
    - 이미 로그인한 사용자는 캘린더(/)로 이동
    - 로그인 성공 시 next 파라미터 또는 캘린더로 이동
    """
    template_name = "accounts/auth.html"
    authentication_form = SignInForm
    redirect_authenticated_user = True
    next_page = reverse_lazy("entries:calendar")

    def form_valid(self, form):
        response = super().form_valid(form)
        logger.info(f"로그인: {form.get_user().username}")
        return response


class SignOutView(DjangoLogoutView):
    """로그아웃 (POST 전용) → 로그인 페이지로"""
    next_page = reverse_lazy("accounts:auth")


def signup(request):
    """
    회원가입
    - 가입 즉시 로그인 처리
    """
    if request.user.is_authenticated:
        return redirect('entries:calendar')

    if request.method == "POST":
        form = SignUpForm(request.POST)
        if form.is_valid():
            try:
                user = form.save()
            except IntegrityError as e:
                logger.error(f"회원가입 실패 (중복 데이터): {e}")
                messages.error(request, "이미 사용 중인 정보입니다.")
            else:
                auth_login(request, user, backend='django.contrib.auth.backends.ModelBackend')
                logger.info(f"신규 회원가입: {user.username} (ID: {user.id})")
                messages.success(request, f"{user.username}님, 환영합니다! 가입이 완료되었습니다.")
                return redirect("entries:calendar")
        else:
            # 구체적인 에러 메시지는 템플릿에서 표시
            messages.error(request, "입력 정보를 확인해주세요.")
    else:
        form = SignUpForm()

    return render(request, "accounts/signup.html", {"form": form})
