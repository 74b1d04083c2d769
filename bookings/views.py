import logging

from django.contrib import messages
from django.http import Http404, HttpResponse
from django.shortcuts import redirect, render
from django.urls import reverse
from django.utils import timezone
from django.views.decorators.http import require_POST

from . import wizard
from .calendar_grid import WEEKDAY_LABELS, build_month_grid, parse_month, resolve_view_month
from .catalog import SERVICES, TIME_SLOTS
from .forms import CardDetailsForm, ScheduleForm, ServiceDetailsForm
from .preview import previews
from .session import clear_wizard, load_wizard, save_wizard

logger = logging.getLogger(__name__)

FLOW_ANCHOR = 'flujo'

STEP_TEMPLATES = {
    wizard.SERVICE: 'bookings/step1_service.html',
    wizard.SCHEDULE: 'bookings/step2_schedule.html',
    wizard.PAYMENT: 'bookings/step3_payment.html',
}

STEP_TITLES = {
    wizard.SERVICE: 'Servicio',
    wizard.SCHEDULE: 'Fecha',
    wizard.PAYMENT: 'Pagar seña',
}


def redirect_to_flow(month=None):
    """Every transition lands back on the top of the flow."""
    url = reverse('bookings:reserva')
    if month is not None:
        url += f'?mes={month:%Y-%m}'
    return redirect(f'{url}#{FLOW_ANCHOR}')


def min_booking_date():
    return timezone.localdate()


def _wrong_step(request, state):
    messages.warning(request, 'Esa acción no corresponde al paso actual de tu reserva.')
    logger.debug(f"Action posted for another step (current step {state.step})")
    return redirect_to_flow()


def _render_step(request, state, form=None, status=200):
    service_details = state.service_details
    schedule_details = state.schedule_details
    context = {
        'title': f'Reserva · {STEP_TITLES[state.kind]}',
        'state': state,
        'step': state.step,
        'total_steps': 3,
        'steps': [(1, 'Servicio'), (2, 'Fecha'), (3, 'Pagar seña')],
        'service': service_details.service,
        'deposit': service_details.deposit,
        'design': service_details.design,
        'booking_date': schedule_details.date if schedule_details else None,
        'booking_time': schedule_details.time if schedule_details else None,
        'can_advance': wizard.can_advance(state),
        'flow_anchor': FLOW_ANCHOR,
    }

    if state.kind == wizard.SERVICE:
        if form is None:
            form = ServiceDetailsForm(initial={
                'service': state.details.service_id,
                'client_name': state.details.client_name,
                'phone': state.details.phone,
            })
        context['services'] = SERVICES

    elif state.kind == wizard.SCHEDULE:
        today = timezone.localdate()
        min_date = min_booking_date()
        view_month = resolve_view_month(
            requested=parse_month(request.GET.get('mes')),
            selected_date=state.details.date,
            min_date=min_date,
            today=today,
        )
        context['calendar'] = build_month_grid(
            view_month,
            today=today,
            selected_date=state.details.date,
            min_date=min_date,
        )
        context['weekday_labels'] = WEEKDAY_LABELS
        context['time_slots'] = TIME_SLOTS

    else:
        if form is None:
            form = CardDetailsForm(initial={
                'card_name': state.details.card_name,
                'card_number': state.details.card_number,
                'card_expiry': state.details.card_expiry,
                'card_cvc': state.details.card_cvc,
            })
        context['paid'] = state.details.paid

    context['form'] = form
    return render(request, STEP_TEMPLATES[state.kind], context, status=status)


def reserva(request):
    """Render the current step of the reservation."""
    state = load_wizard(request)
    return _render_step(request, state)


@require_POST
def reserva_service(request):
    """Step 1: save service, client details and design; advance when complete."""
    state = load_wizard(request)
    if state.kind != wizard.SERVICE:
        return _wrong_step(request, state)

    form = ServiceDetailsForm(request.POST, request.FILES)
    is_valid = form.is_valid()

    design = state.details.design
    upload = form.cleaned_data.get('design_file')
    if upload:
        previews.release(design)
        design = previews.create(upload)

    state = wizard.update_service(
        state,
        service_id=form.details.service_id,
        client_name=form.details.client_name,
        phone=form.details.phone,
        design=design,
    )
    save_wizard(request, state)

    if not is_valid:
        logger.debug(f"Step 1 incomplete: {form.errors.as_json()}")
        return _render_step(request, state, form=form)

    state = wizard.advance(state)
    save_wizard(request, state)
    logger.info(f"Step 1 completed: {state.service_details.service.id}")
    return redirect_to_flow()


@require_POST
def remove_design(request):
    """Drop the design reference and release its preview."""
    state = load_wizard(request)
    if state.kind != wizard.SERVICE:
        return _wrong_step(request, state)

    previews.release(state.details.design)
    state = wizard.update_service(state, design=None)
    save_wizard(request, state)
    return redirect_to_flow()


def design_preview(request, token):
    """Serve the design preview owned by this session."""
    design = load_wizard(request).service_details.design
    if design is None or design.token != token:
        raise Http404('Vista previa no disponible')

    entry = previews.open(token)
    if entry is None:
        raise Http404('Vista previa no disponible')

    content, content_type = entry
    return HttpResponse(content, content_type=content_type)


@require_POST
def reserva_schedule(request):
    """Step 2: pick a day or a time slot, or move on to payment."""
    state = load_wizard(request)
    if state.kind != wizard.SCHEDULE:
        return _wrong_step(request, state)

    action = request.POST.get('action')
    form = ScheduleForm(request.POST)
    if not form.is_valid():
        logger.debug(f"Ignoring invalid schedule input: {form.errors.as_json()}")
        return redirect_to_flow()

    if action == 'date':
        selected = form.cleaned_data.get('date')
        state = wizard.select_date(state, selected, min_date=min_booking_date())
        save_wizard(request, state)
        return redirect_to_flow()

    if action == 'time':
        state = wizard.select_time(state, form.cleaned_data.get('time'))
        save_wizard(request, state)
        # Keep the month the client was looking at
        return redirect_to_flow(month=parse_month(request.POST.get('mes')))

    if action == 'next':
        state = wizard.advance(state)
        save_wizard(request, state)
        if state.kind == wizard.PAYMENT:
            logger.info(f"Step 2 completed: {state.schedule.date} {state.schedule.time}")
        return redirect_to_flow()

    return redirect_to_flow()


@require_POST
def reserva_payment(request):
    """Step 3: card details and the simulated deposit payment."""
    state = load_wizard(request)
    if state.kind != wizard.PAYMENT:
        return _wrong_step(request, state)

    if state.details.paid:
        # Already confirmed; the button is disabled
        return redirect_to_flow()

    form = CardDetailsForm(request.POST)
    is_valid = form.is_valid()

    state = wizard.update_payment(
        state,
        card_name=form.details.card_name,
        card_number=form.details.card_number,
        card_expiry=form.details.card_expiry,
        card_cvc=form.details.card_cvc,
    )
    save_wizard(request, state)

    if not is_valid:
        return _render_step(request, state, form=form)

    state = wizard.pay(state)
    save_wizard(request, state)
    logger.info(
        f"Simulated deposit paid: {state.service.service.id} "
        f"{state.schedule.date} {state.schedule.time} ({state.service.deposit})"
    )
    return redirect_to_flow()


@require_POST
def reserva_back(request):
    state = load_wizard(request)
    save_wizard(request, wizard.go_back(state))
    return redirect_to_flow()


@require_POST
def reserva_reset(request):
    """Start over from any step."""
    state = load_wizard(request)
    previews.release(state.service_details.design)
    clear_wizard(request)
    logger.info(f"Wizard reset from step {state.step}")
    return redirect_to_flow()
