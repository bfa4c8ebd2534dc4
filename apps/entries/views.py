import logging

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.core.exceptions import ValidationError
from django.core.paginator import Paginator
from django.http import Http404, HttpResponse
from django.shortcuts import render, redirect
from django.urls import reverse
from django.utils import timezone
from django.views.decorators.http import require_POST

from .calendar_utils import (
    WEEKDAY_LABELS,
    format_day,
    month_grid,
    parse_day,
    shift_month,
    day_totals,
)
from .forms import EntryForm, EntryFilterForm, ExcelUploadForm
from .models import Entry, TYPE_SALES, TYPE_DELIVERY
from .store import EntryStore, EntryStoreError
from .utils import (
    XLSX_CONTENT_TYPE,
    export_entries_to_excel,
    generate_entry_template,
    process_entry_excel,
)

logger = logging.getLogger(__name__)


def _error_text(error):
    """ValidationError → 한 줄 메시지"""
    return ' '.join(error.messages)


def _calendar_url(day):
    return f"{reverse('entries:calendar')}?date={format_day(day)}"


# ============================================================
# Calendar
# ============================================================

@login_required
def calendar_view(request):
    """캘린더 (월 그리드 + 선택한 날짜의 실적 + 추가 폼)"""
    store = EntryStore(request.user)
    today = timezone.localdate()
    selected = parse_day(request.GET.get('date'), default=today)

    prev_year, prev_month = shift_month(selected.year, selected.month, -1)
    next_year, next_month = shift_month(selected.year, selected.month, 1)

    selected_entries = store.for_date(selected)
    form = EntryForm(initial={
        'date': selected,
        'type': TYPE_SALES,
    })

    context = {
        'store': store,
        'selected_date': selected,
        'selected_entries': selected_entries,
        'selected_totals': day_totals(selected_entries),
        'weeks': month_grid(selected.year, selected.month, store.entries, selected=selected, today=today),
        'weekday_labels': WEEKDAY_LABELS,
        'prev_month_date': format_day(selected.replace(year=prev_year, month=prev_month, day=1)),
        'next_month_date': format_day(selected.replace(year=next_year, month=next_month, day=1)),
        'today': today,
        'form': form,
    }
    return render(request, 'entries/calendar.html', context)


@login_required
@require_POST
def entry_create(request):
    """캘린더에서 실적 추가"""
    store = EntryStore(request.user)
    form = EntryForm(request.POST)
    fallback_day = parse_day(request.POST.get('date'), default=timezone.localdate())

    if not form.is_valid():
        messages.error(request, '입력 정보를 확인해주세요. ' + ' '.join(
            str(error) for errors in form.errors.values() for error in errors
        ))
        return redirect(_calendar_url(fallback_day))

    try:
        entry = store.create(**form.cleaned_data)
    except ValidationError as e:
        messages.error(request, f"실적을 추가하지 못했습니다: {_error_text(e)}")
        return redirect(_calendar_url(fallback_day))
    except EntryStoreError as e:
        messages.error(request, str(e))
        return redirect(_calendar_url(fallback_day))

    messages.success(request, f"'{entry.title}' 실적이 추가되었습니다.")
    return redirect(_calendar_url(entry.date))


# ============================================================
# Data table
# ============================================================

PAGE_SIZE = 20


def _page_containing(entries, pk):
    """pk 항목이 들어 있는 페이지 번호 (목록에 없으면 None)"""
    for index, entry in enumerate(entries):
        if entry.pk == pk:
            return index // PAGE_SIZE + 1
    return None


def _data_url(request):
    """현재 필터/페이지를 유지한 데이터 테이블 URL"""
    query_params = request.GET.copy()
    query_params.pop('edit', None)
    query = query_params.urlencode()
    return f"{reverse('entries:data')}?{query}" if query else reverse('entries:data')


def _render_data(request, store, editing_entry=None, edit_form=None):
    """
    데이터 테이블 렌더링

    수정 중인 항목이 있으면 그 항목이 들어 있는 페이지를 보여줍니다.
    """
    filter_form = EntryFilterForm(request.GET or None)
    entries = filter_form.filter(store.entries) if filter_form.is_bound else list(store.entries)

    page_number = request.GET.get('page')
    if editing_entry is not None:
        page_number = _page_containing(entries, editing_entry.pk) or page_number
    page_obj = Paginator(entries, PAGE_SIZE).get_page(page_number)

    totals = store.totals_by_type()

    query_params = request.GET.copy()
    query_params.pop('page', None)
    query_params.pop('edit', None)

    context = {
        'store': store,
        'page_obj': page_obj,
        'filter_form': filter_form if filter_form.is_bound else EntryFilterForm(),
        'editing_entry': editing_entry,
        'edit_form': edit_form,
        'stats': {
            'total_sales': totals[TYPE_SALES],
            'total_delivery': totals[TYPE_DELIVERY],
            'count': len(store.entries),
            'filtered_count': len(entries),
        },
        'querystring': query_params.urlencode(),
    }
    return render(request, 'entries/data.html', context)


@login_required
def data_view(request):
    """데이터 테이블 (필터 + 페이지네이션 + 인라인 수정)"""
    store = EntryStore(request.user)

    # 인라인 수정 대상 (?edit=<uuid>)
    editing_entry = None
    edit_form = None
    edit_id = request.GET.get('edit')
    if edit_id:
        try:
            editing_entry = store.get(edit_id)
        except (Entry.DoesNotExist, ValidationError, ValueError):
            messages.error(request, '수정할 실적을 찾을 수 없습니다.')
        else:
            edit_form = EntryForm(instance=editing_entry, prefix='edit')

    return _render_data(request, store, editing_entry, edit_form)


@login_required
@require_POST
def entry_update(request, pk):
    """
    인라인 수정 저장

    실패하면 입력값과 에러를 유지한 채 같은 행을 다시 수정 상태로 보여줍니다.
    """
    store = EntryStore(request.user)
    try:
        entry = store.get(pk)
    except Entry.DoesNotExist:
        raise Http404('실적을 찾을 수 없습니다.')

    form = EntryForm(request.POST, instance=entry, prefix='edit')
    if not form.is_valid():
        messages.error(request, '입력 정보를 확인해주세요.')
        return _render_data(request, store, editing_entry=entry, edit_form=form)

    try:
        store.update(pk, **form.cleaned_data)
    except ValidationError as e:
        messages.error(request, f"실적을 수정하지 못했습니다: {_error_text(e)}")
        return _render_data(request, store, editing_entry=entry, edit_form=form)
    except EntryStoreError as e:
        messages.error(request, str(e))
        return redirect(_data_url(request))

    messages.success(request, '실적이 수정되었습니다.')
    return redirect(_data_url(request))


@login_required
@require_POST
def entry_delete(request, pk):
    """실적 삭제 (복구 불가)"""
    store = EntryStore(request.user)
    try:
        store.delete(pk)
    except Entry.DoesNotExist:
        raise Http404('실적을 찾을 수 없습니다.')
    except EntryStoreError as e:
        messages.error(request, str(e))
        return redirect('entries:data')

    messages.success(request, '실적이 삭제되었습니다.')
    return redirect('entries:data')


# ============================================================
# Excel
# ============================================================

@login_required
def download_excel_template(request):
    """엑셀 업로드 양식 다운로드"""
    excel_file = generate_entry_template()

    response = HttpResponse(excel_file.read(), content_type=XLSX_CONTENT_TYPE)
    response['Content-Disposition'] = 'attachment; filename="entries_template.xlsx"'
    return response


@login_required
def entry_export_view(request):
    """현재 필터 조건의 실적을 엑셀로 내보내기"""
    store = EntryStore(request.user)
    filter_form = EntryFilterForm(request.GET or None)
    entries = filter_form.filter(store.entries) if filter_form.is_bound else store.entries

    excel_file = export_entries_to_excel(entries)
    timestamp = timezone.localtime().strftime('%Y%m%d_%H%M%S')

    filename = f"entries_{request.user.username}_{timestamp}.xlsx"
    response = HttpResponse(excel_file.read(), content_type=XLSX_CONTENT_TYPE)
    response['Content-Disposition'] = f'attachment; filename="{filename}"'
    return response


@login_required
def upload_entries_excel(request):
    """엑셀 일괄 등록"""
    result = None

    if request.method == 'POST':
        form = ExcelUploadForm(request.POST, request.FILES)
        if form.is_valid():
            store = EntryStore(request.user)
            try:
                result = process_entry_excel(form.cleaned_data['excel_file'], store)
            except EntryStoreError as e:
                # 파일은 정상, 저장 단계에서 실패 (store에서 이미 로그 기록)
                messages.error(request, f"업로드 실패: {e}")
            except Exception as e:
                # openpyxl이 손상된 파일에서 던지는 예외 종류가 다양함
                logger.error(f"엑셀 업로드 실패: user_id={request.user.pk}, error={e}", exc_info=True)
                messages.error(request, "업로드 실패: 엑셀 파일을 읽을 수 없습니다.")
            else:
                if result['success_count']:
                    messages.success(request, f"{result['success_count']}건의 실적이 등록되었습니다.")
                if result['error_count']:
                    messages.error(request, f"{result['error_count']}건은 등록하지 못했습니다.")
                    return render(request, 'entries/excel_upload.html', {'form': ExcelUploadForm(), 'result': result})
                return redirect('entries:data')
        else:
            messages.error(request, '입력 정보를 확인해주세요.')
    else:
        form = ExcelUploadForm()

    return render(request, 'entries/excel_upload.html', {'form': form, 'result': result})
