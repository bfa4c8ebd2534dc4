from django import forms
from django.core.exceptions import ValidationError

from .models import Entry, TYPE_CHOICES, CATEGORY_CHOICES


class EntryForm(forms.ModelForm):
    """실적 입력/수정 폼 (캘린더 추가, 데이터 테이블 인라인 수정 공용)"""

    class Meta:
        model = Entry
        fields = ['date', 'type', 'category', 'amount', 'title', 'content']
        widgets = {
            'date': forms.DateInput(attrs={'type': 'date'}, format='%Y-%m-%d'),
            'amount': forms.NumberInput(attrs={'step': '0.01', 'min': '0'}),
            'title': forms.TextInput(attrs={'placeholder': '제목 (예: Sales - Training)'}),
            'content': forms.Textarea(attrs={'rows': 3, 'placeholder': '내용 (선택)'}),
        }
        labels = {
            'date': '날짜',
            'type': '유형',
            'category': '카테고리',
            'amount': '금액',
            'title': '제목',
            'content': '내용',
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['content'].required = False
        for field in self.fields.values():
            css = 'form-select' if isinstance(field.widget, forms.Select) else 'form-control'
            field.widget.attrs.setdefault('class', css)

    def clean_title(self):
        title = (self.cleaned_data.get('title') or '').strip()
        if not title:
            raise ValidationError('제목을 입력하세요.')
        return title

    def clean_content(self):
        return self.cleaned_data.get('content') or ''


class EntryFilterForm(forms.Form):
    """데이터 테이블 필터 (유형/카테고리/검색어)"""
    type = forms.ChoiceField(choices=[('', '전체 유형')] + TYPE_CHOICES, required=False)
    category = forms.ChoiceField(choices=[('', '전체 카테고리')] + CATEGORY_CHOICES, required=False)
    search = forms.CharField(max_length=100, required=False)

    def filter(self, entries):
        """store.entries 목록을 조건에 맞게 걸러냄"""
        if not self.is_valid():
            return list(entries)

        entry_type = self.cleaned_data.get('type')
        category = self.cleaned_data.get('category')
        search = (self.cleaned_data.get('search') or '').strip().lower()

        result = []
        for entry in entries:
            if entry_type and entry.type != entry_type:
                continue
            if category and entry.category != category:
                continue
            if search and search not in entry.title.lower() and search not in entry.content.lower():
                continue
            result.append(entry)
        return result


class ExcelUploadForm(forms.Form):
    excel_file = forms.FileField(
        label="엑셀 파일 선택",
        help_text=".xlsx 형식의 파일만 업로드 가능합니다."
    )

    def clean_excel_file(self):
        file = self.cleaned_data.get('excel_file')
        if file:
            # 확장자 검사
            if not file.name.lower().endswith('.xlsx'):
                raise ValidationError("에러: .xlsx 확장자 파일만 올릴 수 있습니다.")
        return file
