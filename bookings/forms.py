import logging

from django import forms
from django.conf import settings
from django.core.exceptions import ValidationError

from .catalog import DEFAULT_SERVICE_ID, SERVICES, TIME_SLOTS
from .utils.formatting import (
    format_card_expiry,
    format_card_number,
    format_currency,
    sanitize_cvc,
    sanitize_phone,
)
from . import wizard

logger = logging.getLogger(__name__)


def service_choices():
    return [
        (s.id, f'{s.name} — {format_currency(s.price)} · {s.duration_min} min')
        for s in SERVICES
    ]


class OptionalDesignField(forms.ImageField):
    """Design reference upload: anything unreadable or too large counts as no file."""

    def clean(self, data, initial=None):
        try:
            image = super().clean(data, initial)
        except ValidationError as e:
            logger.warning(f"Ignoring design upload: {'; '.join(e.messages)}")
            return None
        if not image:
            return None
        max_bytes = getattr(settings, 'NAILS_DESIGN_MAX_BYTES', 5 * 1024 * 1024)
        if image.size > max_bytes:
            logger.warning(f"Ignoring design upload over {max_bytes} bytes: {image.name}")
            return None
        return image


# ===== Step 1 =====

class ServiceDetailsForm(forms.Form):
    """Step 1: service, client details and design reference"""
    service = forms.ChoiceField(
        label='Seleccionar servicio',
        choices=service_choices,
        initial=DEFAULT_SERVICE_ID,
    )
    client_name = forms.CharField(
        label='Nombre completo',
        required=False,
        widget=forms.TextInput(attrs={'placeholder': 'Ej: Ana Rodríguez'}),
    )
    phone = forms.CharField(
        label='Teléfono',
        required=False,
        widget=forms.TextInput(attrs={
            'type': 'tel',
            'inputmode': 'numeric',
            'placeholder': '91234567',
        }),
    )
    design_file = OptionalDesignField(
        label='Subir imagen de diseño',
        required=False,
        widget=forms.ClearableFileInput(attrs={'accept': 'image/*'}),
    )

    def clean_phone(self):
        # Non-digits are dropped silently, never reported
        return sanitize_phone(self.cleaned_data.get('phone'))

    def clean(self):
        cleaned_data = super().clean()
        self.details = wizard.ServiceDetails(
            service_id=cleaned_data.get('service') or DEFAULT_SERVICE_ID,
            client_name=cleaned_data.get('client_name', ''),
            phone=cleaned_data.get('phone', ''),
        )

        if not wizard.is_valid_client_name(self.details.client_name):
            self.add_error('client_name', f'Ingresá tu nombre (mínimo {wizard.MIN_NAME_LENGTH} letras).')
        if not wizard.is_valid_phone(self.details.phone):
            self.add_error('phone', f'El teléfono debe tener al menos {wizard.MIN_PHONE_DIGITS} dígitos.')

        return cleaned_data


# ===== Step 2 =====

class ScheduleForm(forms.Form):
    """Step 2: calendar day or time slot"""
    date = forms.DateField(required=False, input_formats=['%Y-%m-%d'])
    time = forms.ChoiceField(
        required=False,
        choices=[('', '—')] + [(slot, slot) for slot in TIME_SLOTS],
    )


# ===== Step 3 =====

class CardDetailsForm(forms.Form):
    """Step 3: card used for the (simulated) deposit"""
    card_name = forms.CharField(
        label='Nombre en la tarjeta',
        required=False,
        widget=forms.TextInput(attrs={'placeholder': 'Ej: Anto Figueroa'}),
    )
    card_number = forms.CharField(
        label='Número',
        required=False,
        widget=forms.TextInput(attrs={'inputmode': 'numeric', 'placeholder': '1234 5678 9012 3456'}),
    )
    card_expiry = forms.CharField(
        label='Vencimiento',
        required=False,
        widget=forms.TextInput(attrs={'inputmode': 'numeric', 'placeholder': 'MM/AA'}),
    )
    card_cvc = forms.CharField(
        label='CVC',
        required=False,
        widget=forms.TextInput(attrs={'inputmode': 'numeric', 'placeholder': '123'}),
    )

    def clean_card_number(self):
        return format_card_number(self.cleaned_data.get('card_number'))

    def clean_card_expiry(self):
        return format_card_expiry(self.cleaned_data.get('card_expiry'))

    def clean_card_cvc(self):
        return sanitize_cvc(self.cleaned_data.get('card_cvc'))

    def clean(self):
        cleaned_data = super().clean()
        self.details = wizard.PaymentDetails(
            card_name=cleaned_data.get('card_name', ''),
            card_number=cleaned_data.get('card_number', ''),
            card_expiry=cleaned_data.get('card_expiry', ''),
            card_cvc=cleaned_data.get('card_cvc', ''),
        )

        if not wizard.is_valid_card_name(self.details.card_name):
            self.add_error('card_name', 'Ingresá el nombre como figura en la tarjeta.')
        if not wizard.is_valid_card_number(self.details.card_number):
            self.add_error('card_number', f'El número debe tener al menos {wizard.MIN_CARD_DIGITS} dígitos.')
        if not wizard.is_valid_card_expiry(self.details.card_expiry):
            self.add_error('card_expiry', 'Usá el formato MM/AA.')
        if not wizard.is_valid_card_cvc(self.details.card_cvc):
            self.add_error('card_cvc', f'El CVC debe tener al menos {wizard.MIN_CVC_LENGTH} dígitos.')

        return cleaned_data
