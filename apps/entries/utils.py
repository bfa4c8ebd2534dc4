import logging
import openpyxl
from io import BytesIO
from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from django.core.exceptions import ValidationError

from .models import Entry, CATEGORIES, TYPE_SALES, TYPE_DELIVERY

logger = logging.getLogger(__name__)

# 6열 양식
EXCEL_HEADERS = ['날짜', '유형(Sales/Delivery)', '카테고리', '금액', '제목', '내용']

DATE_FORMATS = ['%Y-%m-%d', '%Y/%m/%d', '%Y.%m.%d', '%Y-%m-%d %H:%M:%S', '%Y-%m-%d %H:%M']

TYPE_ALIASES = {
    'sales': TYPE_SALES,
    '세일즈': TYPE_SALES,
    '매출': TYPE_SALES,
    'delivery': TYPE_DELIVERY,
    '딜리버리': TYPE_DELIVERY,
}

XLSX_CONTENT_TYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'


def to_decimal(value):
    """
    값을 Decimal로 변환하고 소수점 2자리로 통일
    쉼표(1,000)는 제거, 변환 불가하면 None
    """
    if value is None or str(value).strip() == '':
        return None

    try:
        # 문자열로 변환 후 Decimal (부동소수점 오차 방지)
        decimal_value = Decimal(str(value).replace(',', '').strip())
        return decimal_value.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError, TypeError):
        return None


def to_date(value):
    """엑셀 셀 값 → date (datetime/date 객체 또는 문자열)"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    date_str = str(value or '').strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(date_str, fmt).date()
        except ValueError:
            continue
    return None


def to_entry_type(value):
    return TYPE_ALIASES.get(str(value or '').strip().lower())


def to_category(value):
    """대소문자 무시하고 고정 카테고리 목록과 매칭"""
    name = str(value or '').strip().lower()
    for category in CATEGORIES:
        if category.lower() == name:
            return category
    return None


def parse_entry_row(row, row_number):
    """
    엑셀 1행 → Entry 필드 dict

    반환: (fields, 에러메시지)
    """
    row = list(row) + [None] * (len(EXCEL_HEADERS) - len(row))
    raw_date, raw_type, raw_category, raw_amount, raw_title, raw_content = row[:6]

    entry_date = to_date(raw_date)
    if entry_date is None:
        return None, f"{row_number}행: 날짜 형식이 잘못되었습니다. ({raw_date})"

    entry_type = to_entry_type(raw_type)
    if entry_type is None:
        return None, f"{row_number}행: 유형은 Sales 또는 Delivery 여야 합니다. ({raw_type})"

    category = to_category(raw_category)
    if category is None:
        return None, f"{row_number}행: '{raw_category}' 카테고리를 찾을 수 없습니다."

    amount = to_decimal(raw_amount)
    if amount is None or amount < 0:
        return None, f"{row_number}행: 금액이 비어있거나 잘못되었습니다. ({raw_amount})"

    title = str(raw_title or '').strip()
    if not title:
        # 제목이 없으면 "Sales - Training" 형식으로 채움
        title = f"{entry_type.capitalize()} - {category}"

    return {
        'date': entry_date,
        'type': entry_type,
        'category': category,
        'amount': amount,
        'title': title,
        'content': str(raw_content or '').strip(),
    }, None


def process_entry_excel(excel_file, store):
    """
    엑셀 파일에서 실적을 읽어 저장소(EntryStore)로 일괄 등록

    - 모든 행을 먼저 검증한 뒤 store.bulk_create() (한 번의 트랜잭션)
    - DB 오류는 store가 EntryStoreError로 전달
    - 실패한 행은 error_details에 원본 데이터와 함께 기록
    """
    # 엑셀 파일 로드 (read_only 모드로 속도 향상)
    wb = openpyxl.load_workbook(excel_file, read_only=True, data_only=True)
    ws = wb.active

    success_list = []
    error_list = []
    error_details = []

    for i, row in enumerate(ws.iter_rows(min_row=2, values_only=True), start=2):
        # 빈 행 스킵
        if not any(cell not in (None, '') for cell in row):
            continue

        raw_data = dict(zip(EXCEL_HEADERS, list(row) + [''] * len(EXCEL_HEADERS)))
        fields, error_msg = parse_entry_row(row, i)

        if fields is not None:
            entry = Entry(user=store.user, **fields)
            try:
                entry.full_clean()
            except ValidationError as e:
                error_msg = f"{i}행: {'; '.join(e.messages)}"

        if error_msg:
            error_list.append(error_msg)
            error_details.append({
                'row_number': i,
                'raw_data': raw_data,
                'error': error_msg
            })
            continue

        success_list.append(entry)

    wb.close()

    store.bulk_create(success_list)

    logger.info(
        f"엑셀 업로드: user_id={store.user.pk}, 성공 {len(success_list)}건, 실패 {len(error_list)}건"
    )

    return {
        'success_count': len(success_list),
        'error_count': len(error_list),
        'errors': error_list,
        'error_details': error_details,
    }


def generate_entry_template():
    """사용자용 6열 엑셀 양식 생성"""
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "실적_양식"

    ws.append(EXCEL_HEADERS)

    # 가이드 데이터
    ws.append(['2024-01-15', 'Sales', 'Training', 2500, 'Sales - Training', '리더십 교육 계약'])
    ws.append(['2024-01-15', 'Delivery', 'Coaching', 1800, '', '제목이 비어 있으면 자동 입력'])
    ws.append(['2024-01-20', 'Sales', 'Speaking', 1200, 'Sales - Speaking', ''])

    output = BytesIO()
    wb.save(output)
    output.seek(0)
    return output


def export_entries_to_excel(entries):
    """
    실적 목록을 6열 엑셀로 내보내기
    (템플릿과 같은 형식이므로 다시 업로드 가능)
    """
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "실적_내보내기"

    ws.append(EXCEL_HEADERS)

    for entry in entries:
        ws.append([
            entry.date.strftime('%Y-%m-%d'),
            entry.get_type_display(),
            entry.category,
            # Decimal을 float으로 변환 (엑셀 호환)
            float(entry.amount),
            entry.title,
            entry.content or '',
        ])

    output = BytesIO()
    wb.save(output)
    output.seek(0)
    return output
