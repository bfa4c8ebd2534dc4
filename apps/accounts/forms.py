from django import forms
from django.contrib.auth.forms import AuthenticationForm, UserCreationForm
from django.contrib.auth.models import User
from django.core.exceptions import ValidationError
import re


class SignInForm(AuthenticationForm):
    """로그인 폼 (부트스트랩 클래스 주입)"""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['username'].label = '아이디'
        self.fields['password'].label = '비밀번호'
        for field in self.fields.values():
            field.widget.attrs['class'] = 'form-control'


class SignUpForm(UserCreationForm):
    """
    회원가입 폼
    - 이메일 필드 추가 (필수)
    - 아이디/이메일 중복 검증
    """
    email = forms.EmailField(
        required=True,
        label='이메일',
        widget=forms.EmailInput(attrs={
            'class': 'form-control',
            'placeholder': 'example@email.com',
            'autocomplete': 'email'
        }),
    )

    class Meta:
        model = User
        fields = ('username', 'email', 'password1', 'password2')
        labels = {
            'username': '아이디',
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['username'].help_text = '4-20자의 영문, 숫자만 사용 가능합니다.'
        self.fields['password1'].label = '비밀번호'
        self.fields['password2'].label = '비밀번호 확인'
        for field in self.fields.values():
            field.widget.attrs.setdefault('class', 'form-control')

    def clean_username(self):
        """아이디 검증"""
        username = self.cleaned_data.get('username', '')

        if not 4 <= len(username) <= 20:
            raise ValidationError('아이디는 4-20자여야 합니다.')

        # 영문, 숫자만 허용
        if not re.match(r'^[a-zA-Z0-9]+$', username):
            raise ValidationError('아이디는 영문과 숫자만 사용 가능합니다.')

        if User.objects.filter(username=username).exists():
            raise ValidationError('이미 사용 중인 아이디입니다.')

        return username

    def clean_email(self):
        """이메일 중복 확인"""
        email = self.cleaned_data.get('email')

        if User.objects.filter(email__iexact=email).exists():
            raise ValidationError('이미 가입된 이메일 주소입니다.')

        return email

    def save(self, commit=True):
        """이메일 포함하여 사용자 저장"""
        user = super().save(commit=False)
        user.email = self.cleaned_data['email']

        if commit:
            user.save()
        return user
