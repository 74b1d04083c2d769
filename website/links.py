from urllib.parse import quote

COURSES_MESSAGE = 'Hola! me gustaría saber más de los cursos Nail Art'


def whatsapp_link(number, text):
    """wa.me deep link with a prefilled, percent-encoded message"""
    digits = ''.join(ch for ch in str(number) if ch.isdigit())
    return f'https://wa.me/{digits}?text={quote(text, safe="")}'
