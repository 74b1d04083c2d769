import datetime

from django.test import SimpleTestCase, override_settings
from django.utils import translation

from bookings.catalog import SERVICES, get_service
from bookings.utils.formatting import (
    add_months,
    days_in_month,
    deposit_for,
    end_of_month,
    format_card_expiry,
    format_card_number,
    format_currency,
    is_same_day,
    sanitize_cvc,
    sanitize_phone,
    weekday_monday_first,
)


class DepositTests(SimpleTestCase):

    def test_catalog_deposits(self):
        expected = {'semip': 120, 'kapping': 160, 'softgel': 220, 'nailart': 260}
        for service in SERVICES:
            self.assertEqual(service.deposit, expected[service.id])
            self.assertEqual(deposit_for(service.price), round(service.price * 0.10))

    def test_halves_round_up(self):
        self.assertEqual(deposit_for(1205), 121)
        self.assertEqual(deposit_for(1204), 120)
        self.assertEqual(deposit_for(5), 1)

    def test_unknown_service_falls_back_to_first(self):
        self.assertEqual(get_service('nope').id, 'semip')
        self.assertEqual(get_service('softgel').price, 2200)


class CurrencyTests(SimpleTestCase):

    def test_grouping_without_decimals(self):
        self.assertEqual(format_currency(1200), '$ 1.200')
        self.assertEqual(format_currency(120), '$ 120')
        self.assertEqual(format_currency(1234567), '$ 1.234.567')

    def test_grouping_ignores_active_language(self):
        for language in ('en', 'es', 'fr'):
            with translation.override(language):
                self.assertEqual(format_currency(1200), '$ 1.200')

    @override_settings(NAILS_CURRENCY_SYMBOL='UYU')
    def test_symbol_from_settings(self):
        self.assertEqual(format_currency(2600), 'UYU 2.600')


class InputMaskTests(SimpleTestCase):

    def test_phone_keeps_digits_only(self):
        self.assertEqual(sanitize_phone('91 234-567'), '91234567')
        self.assertEqual(sanitize_phone('+598 (91) 234 567 890 12'), '5989123456789012')
        self.assertEqual(sanitize_phone(None), '')

    def test_card_number_groups_of_four(self):
        self.assertEqual(format_card_number('1234567890123456'), '1234 5678 9012 3456')
        self.assertEqual(format_card_number('1234-5678 90'), '1234 5678 90')
        self.assertEqual(format_card_number('1234'), '1234')

    def test_card_number_capped_at_19_digits(self):
        formatted = format_card_number('1' * 25)
        self.assertEqual(formatted.replace(' ', ''), '1' * 19)
        self.assertEqual(formatted, '1111 1111 1111 1111 111')

    def test_expiry_inserts_slash(self):
        self.assertEqual(format_card_expiry('12'), '12/')
        self.assertEqual(format_card_expiry('12/25'), '12/25')
        self.assertEqual(format_card_expiry('1a2/2b5'), '12/25')
        self.assertEqual(format_card_expiry('12/2599'), '12/25')
        self.assertEqual(format_card_expiry('1'), '1')

    def test_expiry_slash_added_after_second_digit(self):
        self.assertEqual(format_card_expiry('1225'), '12/25')
        self.assertEqual(format_card_expiry('122'), '12/2')
        self.assertEqual(format_card_expiry('12259'), '12/25')

    def test_cvc(self):
        self.assertEqual(sanitize_cvc('12a3'), '123')
        self.assertEqual(sanitize_cvc('123456'), '1234')

    def test_only_ascii_digits_are_kept(self):
        arabic_indic = '\u0669\u0661\u0662\u0663\u0664\u0665\u0666\u0667'
        self.assertEqual(sanitize_phone(arabic_indic), '')
        self.assertEqual(format_card_number(arabic_indic + '1234'), '1234')
        self.assertEqual(format_card_expiry('\u0661\u0662/25'), '/25')
        self.assertEqual(sanitize_cvc('\u0661\u0662\u0663'), '')


class DateHelperTests(SimpleTestCase):

    def test_add_months_across_years(self):
        self.assertEqual(add_months(datetime.date(2026, 12, 31), 1), datetime.date(2027, 1, 1))
        self.assertEqual(add_months(datetime.date(2026, 1, 15), -1), datetime.date(2025, 12, 1))

    def test_end_of_month(self):
        self.assertEqual(end_of_month(datetime.date(2028, 2, 10)), datetime.date(2028, 2, 29))
        self.assertEqual(end_of_month(datetime.date(2026, 4, 1)), datetime.date(2026, 4, 30))
        self.assertEqual(days_in_month(datetime.date(2027, 2, 14)), 28)
        self.assertEqual(days_in_month(datetime.datetime(2028, 2, 1, 9, 0)), 29)

    def test_same_day_ignores_time(self):
        self.assertTrue(is_same_day(datetime.datetime(2026, 10, 19, 23, 59), datetime.date(2026, 10, 19)))
        self.assertFalse(is_same_day(None, datetime.date(2026, 10, 19)))

    def test_monday_first_index(self):
        self.assertEqual(weekday_monday_first(datetime.date(2026, 10, 19)), 0)  # lunes
        self.assertEqual(weekday_monday_first(datetime.date(2026, 10, 25)), 6)  # domingo
