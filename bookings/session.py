"""
Session helpers for the reservation wizard.

The wizard is stored as a single dict in request.session['reserva'];
use these helpers instead of touching the session key directly.
"""
import logging

from . import wizard

logger = logging.getLogger(__name__)

SESSION_KEY = 'reserva'


def load_wizard(request):
    data = request.session.get(SESSION_KEY)
    if not data:
        return wizard.initial_state()
    try:
        return wizard.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        logger.warning(f"Discarding unreadable wizard state: {e}")
        clear_wizard(request)
        return wizard.initial_state()


def save_wizard(request, state):
    request.session[SESSION_KEY] = wizard.to_dict(state)
    request.session.modified = True


def clear_wizard(request):
    request.session.pop(SESSION_KEY, None)
    request.session.modified = True
