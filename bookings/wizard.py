"""
Reservation wizard: Servicio (1) -> Fecha (2) -> Pagar seña (3).

Each stage is its own immutable value carrying the details of the steps
already completed plus the draft of the current one, so payment data can
never exist while the client is still choosing a service. Transitions are
pure functions returning a new stage; a transition whose gating predicate
does not hold returns the stage unchanged.
"""
import datetime
import logging
import re
from dataclasses import dataclass, field, replace
from typing import ClassVar, Optional

from .catalog import DEFAULT_SERVICE_ID, TIME_SLOTS, get_service, is_known_service
from .preview import DesignPreview
from .utils.formatting import (
    as_date,
    count_digits,
    deposit_for,
    format_card_expiry,
    format_card_number,
    sanitize_cvc,
    sanitize_phone,
)

logger = logging.getLogger(__name__)

SERVICE = 'service'
SCHEDULE = 'schedule'
PAYMENT = 'payment'

MIN_NAME_LENGTH = 3
MIN_PHONE_DIGITS = 8
MIN_CARD_DIGITS = 12
MIN_CVC_LENGTH = 3

_EXPIRY_PATTERN = re.compile(r'\d{2}/\d{2}', re.ASCII)

_UNSET = object()


# ===== Per-step details =====

@dataclass(frozen=True)
class ServiceDetails:
    service_id: str = DEFAULT_SERVICE_ID
    client_name: str = ''
    phone: str = ''
    design: Optional[DesignPreview] = None

    @property
    def service(self):
        return get_service(self.service_id)

    @property
    def deposit(self):
        return deposit_for(self.service.price)


@dataclass(frozen=True)
class ScheduleDetails:
    date: Optional[datetime.date] = None
    time: Optional[str] = None


@dataclass(frozen=True)
class PaymentDetails:
    card_name: str = ''
    card_number: str = ''
    card_expiry: str = ''
    card_cvc: str = ''
    paid: bool = False


# ===== Stages =====

@dataclass(frozen=True)
class ServiceStage:
    details: ServiceDetails = field(default_factory=ServiceDetails)

    kind: ClassVar[str] = SERVICE
    step: ClassVar[int] = 1

    @property
    def service_details(self):
        return self.details

    @property
    def schedule_details(self):
        return None


@dataclass(frozen=True)
class ScheduleStage:
    service: ServiceDetails
    details: ScheduleDetails = field(default_factory=ScheduleDetails)

    kind: ClassVar[str] = SCHEDULE
    step: ClassVar[int] = 2

    @property
    def service_details(self):
        return self.service

    @property
    def schedule_details(self):
        return self.details


@dataclass(frozen=True)
class PaymentStage:
    service: ServiceDetails
    schedule: ScheduleDetails
    details: PaymentDetails = field(default_factory=PaymentDetails)

    kind: ClassVar[str] = PAYMENT
    step: ClassVar[int] = 3

    @property
    def service_details(self):
        return self.service

    @property
    def schedule_details(self):
        return self.schedule


def initial_state():
    return ServiceStage()


# ===== Gating predicates =====

def is_valid_client_name(name):
    return len((name or '').strip()) >= MIN_NAME_LENGTH


def is_valid_phone(phone):
    return len(phone or '') >= MIN_PHONE_DIGITS


def is_valid_card_name(name):
    return len((name or '').strip()) >= MIN_NAME_LENGTH


def is_valid_card_number(number):
    return count_digits(number) >= MIN_CARD_DIGITS


def is_valid_card_expiry(expiry):
    return _EXPIRY_PATTERN.fullmatch((expiry or '').strip()) is not None


def is_valid_card_cvc(cvc):
    return len((cvc or '').strip()) >= MIN_CVC_LENGTH


def can_leave_service(details):
    return (
        bool(details.service_id)
        and is_valid_client_name(details.client_name)
        and is_valid_phone(details.phone)
    )


def can_leave_schedule(details):
    return details.date is not None and details.time is not None


def can_pay(details):
    return (
        is_valid_card_name(details.card_name)
        and is_valid_card_number(details.card_number)
        and is_valid_card_expiry(details.card_expiry)
        and is_valid_card_cvc(details.card_cvc)
    )


def can_advance(state):
    """Whether the 'Siguiente' button of the current stage is enabled."""
    if state.kind == SERVICE:
        return can_leave_service(state.details)
    if state.kind == SCHEDULE:
        return can_leave_schedule(state.details)
    return False


# ===== Transitions =====

def advance(state):
    """Move one step forward when the current step is complete."""
    if not can_advance(state):
        logger.debug(f"Advance blocked on step {state.step}")
        return state
    if state.kind == SERVICE:
        return ScheduleStage(service=state.details)
    return PaymentStage(service=state.service, schedule=state.details)


def go_back(state):
    """Unconditionally return to the previous step, dropping the current draft."""
    if state.kind == SCHEDULE:
        return ServiceStage(details=state.service)
    if state.kind == PAYMENT:
        return ScheduleStage(service=state.service, details=state.schedule)
    return state


def pay(state):
    """Confirm the simulated deposit payment; a second call is a no-op."""
    if state.kind != PAYMENT or state.details.paid:
        return state
    if not can_pay(state.details):
        logger.debug("Payment blocked: card details incomplete")
        return state
    return replace(state, details=replace(state.details, paid=True))


def reset(state=None):
    return initial_state()


def update_service(state, service_id=None, client_name=None, phone=None, design=_UNSET):
    """Edit the step-1 draft. Unknown service ids fall back to the default."""
    if state.kind != SERVICE:
        return state
    details = state.details
    changes = {}
    if service_id is not None:
        changes['service_id'] = service_id if is_known_service(service_id) else DEFAULT_SERVICE_ID
    if client_name is not None:
        changes['client_name'] = client_name
    if phone is not None:
        changes['phone'] = sanitize_phone(phone)
    if design is not _UNSET:
        changes['design'] = design
    return replace(state, details=replace(details, **changes))


def select_date(state, date, min_date=None):
    """Pick a day on the calendar; choosing a different day clears the time."""
    if state.kind != SCHEDULE or date is None:
        return state
    date = as_date(date)
    if min_date is not None and date < as_date(min_date):
        logger.debug(f"Ignoring date before minimum: {date}")
        return state
    details = state.details
    if details.date == date:
        return state
    return replace(state, details=ScheduleDetails(date=date, time=None))


def select_time(state, slot):
    if state.kind != SCHEDULE or state.details.date is None:
        return state
    if slot not in TIME_SLOTS:
        logger.debug(f"Ignoring unknown time slot: {slot!r}")
        return state
    return replace(state, details=replace(state.details, time=slot))


def update_payment(state, card_name=None, card_number=None, card_expiry=None, card_cvc=None):
    """Edit the card draft, applying the input masks."""
    if state.kind != PAYMENT:
        return state
    changes = {}
    if card_name is not None:
        changes['card_name'] = card_name
    if card_number is not None:
        changes['card_number'] = format_card_number(card_number)
    if card_expiry is not None:
        changes['card_expiry'] = format_card_expiry(card_expiry)
    if card_cvc is not None:
        changes['card_cvc'] = sanitize_cvc(card_cvc)
    return replace(state, details=replace(state.details, **changes))


# ===== Session serialization =====

def _service_to_dict(details):
    return {
        'service_id': details.service_id,
        'client_name': details.client_name,
        'phone': details.phone,
        'design': details.design.to_dict() if details.design else None,
    }


def _service_from_dict(data):
    return ServiceDetails(
        service_id=data['service_id'],
        client_name=data['client_name'],
        phone=data['phone'],
        design=DesignPreview.from_dict(data.get('design')),
    )


def _schedule_to_dict(details):
    return {
        'date': details.date.isoformat() if details.date else None,
        'time': details.time,
    }


def _schedule_from_dict(data):
    date = data.get('date')
    return ScheduleDetails(
        date=datetime.date.fromisoformat(date) if date else None,
        time=data.get('time'),
    )


def _payment_to_dict(details):
    return {
        'card_name': details.card_name,
        'card_number': details.card_number,
        'card_expiry': details.card_expiry,
        'card_cvc': details.card_cvc,
        'paid': details.paid,
    }


def _payment_from_dict(data):
    return PaymentDetails(
        card_name=data['card_name'],
        card_number=data['card_number'],
        card_expiry=data['card_expiry'],
        card_cvc=data['card_cvc'],
        paid=bool(data['paid']),
    )


def to_dict(state):
    """JSON-serializable form of a stage, for the session."""
    if state.kind == SERVICE:
        return {'kind': SERVICE, 'service': _service_to_dict(state.details)}
    if state.kind == SCHEDULE:
        return {
            'kind': SCHEDULE,
            'service': _service_to_dict(state.service),
            'schedule': _schedule_to_dict(state.details),
        }
    return {
        'kind': PAYMENT,
        'service': _service_to_dict(state.service),
        'schedule': _schedule_to_dict(state.schedule),
        'payment': _payment_to_dict(state.details),
    }


def from_dict(data):
    """
    Rebuild a stage from its session form.
    Raises KeyError, TypeError or ValueError when the data is malformed.
    """
    kind = data['kind']
    if kind == SERVICE:
        return ServiceStage(details=_service_from_dict(data['service']))
    if kind == SCHEDULE:
        return ScheduleStage(
            service=_service_from_dict(data['service']),
            details=_schedule_from_dict(data['schedule']),
        )
    if kind == PAYMENT:
        return PaymentStage(
            service=_service_from_dict(data['service']),
            schedule=_schedule_from_dict(data['schedule']),
            details=_payment_from_dict(data['payment']),
        )
    raise ValueError(f'Unknown wizard stage: {kind!r}')
