from django.urls import path
from . import views

app_name = 'bookings'

urlpatterns = [
    # 3-step reservation
    path('', views.reserva, name='reserva'),
    path('servicio/', views.reserva_service, name='reserva_service'),  # Step 1
    path('fecha/', views.reserva_schedule, name='reserva_schedule'),  # Step 2
    path('pago/', views.reserva_payment, name='reserva_payment'),  # Step 3
    path('atras/', views.reserva_back, name='reserva_back'),
    path('reiniciar/', views.reserva_reset, name='reserva_reset'),

    # Design reference
    path('diseno/quitar/', views.remove_design, name='remove_design'),
    path('diseno/<str:token>/', views.design_preview, name='design_preview'),
]
