from django.conf import settings
from django.shortcuts import render

from bookings.catalog import SERVICES

from .links import COURSES_MESSAGE, whatsapp_link

COURSES = [
    {'name': 'Nivel Inicial', 'description': 'Bases, preparación, esmaltado y cuidado.'},
    {'name': 'Nail Art', 'description': 'Diseños, líneas finas, efectos y tendencias.'},
    {'name': 'Perfeccionamiento', 'description': 'Velocidad, prolijidad y técnica avanzada.'},
]


def home(request):
    """Landing page: services, courses and contact."""
    studio_name = getattr(settings, 'STUDIO_NAME', 'Nails Anto Figueroa')
    context = {
        'title': studio_name,
        'studio_name': studio_name,
        'description': 'Nail Art premium. Reservá tu turno o conocé nuestros cursos.',
        'services': SERVICES,
        'courses': COURSES,
        'courses_whatsapp_url': whatsapp_link(
            getattr(settings, 'NAILS_WHATSAPP_NUMBER', '5989000000'),
            COURSES_MESSAGE,
        ),
    }
    return render(request, 'website/home.html', context)
