"""Fixed service catalog and the bookable start times of the studio."""
from dataclasses import dataclass

from .utils.formatting import deposit_for


@dataclass(frozen=True)
class Service:
    id: str
    name: str
    price: int
    duration_min: int

    @property
    def deposit(self):
        """Deposit (10%) charged up front."""
        return deposit_for(self.price)

    def __str__(self):
        return f'{self.name} ({self.duration_min} min)'


SERVICES = (
    Service(id='semip', name='Semipermanente', price=1200, duration_min=60),
    Service(id='kapping', name='Kapping', price=1600, duration_min=75),
    Service(id='softgel', name='Soft Gel', price=2200, duration_min=90),
    Service(id='nailart', name='Nail Art (detalle)', price=2600, duration_min=105),
)

DEFAULT_SERVICE_ID = SERVICES[0].id

# Static demo slots: no capacity or collision logic behind them
TIME_SLOTS = ('10:00', '13:00', '15:30', '18:00')


def get_service(service_id):
    """Look up a service by id, falling back to the first catalog entry."""
    for service in SERVICES:
        if service.id == service_id:
            return service
    return SERVICES[0]


def is_known_service(service_id):
    return any(service.id == service_id for service in SERVICES)
