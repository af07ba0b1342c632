"""Appointment URLs.

Prefix: /api/appointments/
Routes:
    POST   /           - book (public)
    GET    /           - list with filters (admin)
    GET    /<id>/      - detail (admin)
    PATCH  /<id>/      - status / admin_notes (admin)
    DELETE /<id>/      - (admin)
"""

from django.urls import path

from .views import AppointmentDetailView, AppointmentListCreateView

app_name = 'appointments'

urlpatterns = [
	path('', AppointmentListCreateView.as_view(), name='list'),
	path('<int:pk>/', AppointmentDetailView.as_view(), name='detail'),
]
