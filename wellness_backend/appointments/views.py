"""Appointment views.

POST /api/appointments/ is the public booking endpoint used by the wizard;
all other routes are for the back office.
"""

import logging

from django.db.models import Q

from rest_framework import generics, status
from rest_framework.response import Response

from wellness_backend.core.permissions import IsClinicAdmin
from wellness_backend.core.utils import parse_date, parse_int
from wellness_backend.uploads import storage

from .booking import notify_admins_of_booking, send_booking_confirmation
from .models import Appointment
from .permissions import AppointmentPermission
from .serializers import (
	AppointmentBookingSerializer,
	AppointmentSerializer,
	AppointmentUpdateSerializer,
)

logger = logging.getLogger(__name__)


def _appointment_queryset():
	return Appointment.objects.using('default').select_related('service', 'practitioner', 'program')


class AppointmentListCreateView(generics.ListCreateAPIView):
	"""
	GET  (admin) filters: status, service_id, practitioner_id, search,
	     date_start + date_end (inclusive, on appointment_date)
	POST (public) books an appointment from the booking form
	"""
	permission_classes = [AppointmentPermission]

	def get_serializer_class(self):
		if self.request.method == 'POST':
			return AppointmentBookingSerializer
		return AppointmentSerializer

	def get_queryset(self):
		params = self.request.query_params
		qs = _appointment_queryset()

		if params.get('status'):
			qs = qs.filter(status=params['status'].upper())
		service_id = parse_int(params.get('service_id'))
		if service_id is not None:
			qs = qs.filter(service_id=service_id)
		practitioner_id = parse_int(params.get('practitioner_id'))
		if practitioner_id is not None:
			qs = qs.filter(practitioner_id=practitioner_id)

		search = (params.get('search') or '').strip()
		if search:
			qs = qs.filter(Q(patient_name__icontains=search) | Q(patient_mobile__icontains=search))

		date_start = parse_date(params.get('date_start'))
		date_end = parse_date(params.get('date_end'))
		if date_start and date_end:
			qs = qs.filter(appointment_date__range=(date_start, date_end))

		return qs

	def create(self, request, *args, **kwargs):
		write_serializer = self.get_serializer(data=request.data)
		write_serializer.is_valid(raise_exception=True)
		appointment = write_serializer.save()

		notify_admins_of_booking(appointment)
		send_booking_confirmation(appointment)

		read_serializer = AppointmentSerializer(appointment, context={'request': request})
		return Response(
			{'message': 'Appointment booked successfully', 'appointment': read_serializer.data},
			status=status.HTTP_201_CREATED,
		)


class AppointmentDetailView(generics.RetrieveUpdateDestroyAPIView):
	permission_classes = [IsClinicAdmin]
	not_found_message = 'Appointment not found'

	def get_queryset(self):
		return _appointment_queryset()

	def get_serializer_class(self):
		if self.request.method in ('PUT', 'PATCH'):
			return AppointmentUpdateSerializer
		return AppointmentSerializer

	def update(self, request, *args, **kwargs):
		appointment = self.get_object()
		old_status = appointment.status
		write_serializer = AppointmentUpdateSerializer(appointment, data=request.data, partial=True)
		write_serializer.is_valid(raise_exception=True)
		updated = write_serializer.save()

		if updated.status != old_status:
			logger.info(
				'Appointment %s status %s -> %s by user_id=%s',
				updated.pk, old_status, updated.status, request.user.pk,
			)
		read_serializer = AppointmentSerializer(updated, context={'request': request})
		return Response(read_serializer.data, status=status.HTTP_200_OK)

	def destroy(self, request, *args, **kwargs):
		appointment = self.get_object()
		report_path = appointment.medical_report
		pk = appointment.pk
		appointment.delete()
		if report_path:
			storage.delete_upload(report_path)
		logger.info('Appointment %s deleted by user_id=%s', pk, request.user.pk)
		return Response({'message': 'Appointment deleted successfully'}, status=status.HTTP_200_OK)
