# bookings/utils/formatting.py
"""
Input masks and display helpers shared by the reservation forms, the
calendar and the templates.
"""
import calendar
import datetime
import re
from decimal import Decimal, ROUND_HALF_UP

from django.conf import settings
from django.utils import numberformat

DEPOSIT_RATE = Decimal('0.10')

CARD_NUMBER_MAX_DIGITS = 19
CARD_EXPIRY_MAX_LENGTH = 5
CARD_CVC_MAX_DIGITS = 4

# es-UY grouping, independent of the installed locale data
THOUSAND_SEPARATOR = '.'
DECIMAL_SEPARATOR = ','

# Only ASCII digits count
_NON_DIGITS = re.compile(r'\D', re.ASCII)
_NON_EXPIRY_CHARS = re.compile(r'[^\d/]', re.ASCII)
_CARD_GROUP = re.compile(r'(\d{4})(?=\d)', re.ASCII)


# ===== Money =====

def deposit_for(price):
    """
    10% of the price rounded to a whole amount.
    Halves round up (1205 -> 121).
    """
    amount = (Decimal(price) * DEPOSIT_RATE).quantize(Decimal('1'), rounding=ROUND_HALF_UP)
    return int(amount)


def format_currency(amount):
    """Integer amount -> '$ 1.200' (dot grouping, no decimals)."""
    symbol = getattr(settings, 'NAILS_CURRENCY_SYMBOL', '$')
    number = numberformat.format(
        int(amount),
        DECIMAL_SEPARATOR,
        decimal_pos=0,
        grouping=3,
        thousand_sep=THOUSAND_SEPARATOR,
        force_grouping=True,
    )
    return f'{symbol} {number}'


# ===== Input masks =====

def sanitize_phone(value):
    """Keep only digits; no maximum length is enforced."""
    return _NON_DIGITS.sub('', value or '')


def format_card_number(value):
    raw = _NON_DIGITS.sub('', value or '')[:CARD_NUMBER_MAX_DIGITS]
    return _CARD_GROUP.sub(r'\1 ', raw)


def format_card_expiry(value):
    """
    MM/YY mask: drops anything but digits and '/', puts the slash after the
    second digit when missing and cuts the result to 5 characters.
    """
    expiry = _NON_EXPIRY_CHARS.sub('', value or '')
    if len(expiry) >= 2 and '/' not in expiry:
        expiry = f'{expiry[:2]}/{expiry[2:]}'
    return expiry[:CARD_EXPIRY_MAX_LENGTH]


def sanitize_cvc(value):
    return _NON_DIGITS.sub('', value or '')[:CARD_CVC_MAX_DIGITS]


def count_digits(value):
    return len(_NON_DIGITS.sub('', value or ''))


# ===== Dates =====

def as_date(value):
    """Reduce a datetime to its calendar day; dates pass through."""
    if isinstance(value, datetime.datetime):
        return value.date()
    return value


def is_same_day(a, b):
    if a is None or b is None:
        return False
    return as_date(a) == as_date(b)


def start_of_month(value):
    return as_date(value).replace(day=1)


def end_of_month(value):
    return as_date(value).replace(day=days_in_month(value))


def add_months(value, months):
    """First day of the month `months` away from `value`'s month."""
    value = as_date(value)
    index = value.year * 12 + (value.month - 1) + months
    return datetime.date(index // 12, index % 12 + 1, 1)


def days_in_month(value):
    value = as_date(value)
    return calendar.monthrange(value.year, value.month)[1]


def weekday_monday_first(value):
    # date.weekday() already counts Monday=0 .. Sunday=6
    return as_date(value).weekday()
