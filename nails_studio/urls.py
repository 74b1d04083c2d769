from django.urls import path, include

urlpatterns = [
    path('', include('website.urls')),
    path('reserva/', include('bookings.urls')),
]
