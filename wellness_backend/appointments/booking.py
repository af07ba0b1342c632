"""Follow-up work after a booking is stored.

Both steps are best effort: a failure is logged and the booking stands.
"""

import logging

from django.conf import settings

from wellness_backend.core.mail import mail_enabled, send_templated_mail
from wellness_backend.notifications.models import Notification
from wellness_backend.notifications.utils import notify_all_admins

from . import rules

logger = logging.getLogger(__name__)


def describe_schedule(appointment) -> str:
	if appointment.residential_month and appointment.residential_year:
		month = rules.MONTH_NAMES[appointment.residential_month - 1]
		return f'{month} {appointment.residential_year}'
	dates = appointment.session_dates
	return ', '.join(dates) if dates else appointment.appointment_date.isoformat()


def notify_admins_of_booking(appointment) -> int:
	program_name = appointment.program.name if appointment.program else 'a program'
	try:
		return notify_all_admins(
			'New appointment booked',
			f'{appointment.patient_name} booked {program_name} ({describe_schedule(appointment)}).',
			type=Notification.TYPE_APPOINTMENT,
			related_id=appointment.pk,
			related_type='appointment',
		)
	except Exception:
		logger.exception('Failed to notify admins about appointment %s', appointment.pk)
		return 0


def send_booking_confirmation(appointment) -> bool:
	if not appointment.patient_email:
		return False
	if not mail_enabled():
		logger.info('Email not configured; skipping confirmation for appointment %s', appointment.pk)
		return False

	residential = None
	if appointment.residential_month and appointment.residential_year:
		residential = describe_schedule(appointment)
	context = {
		'appointment': appointment,
		'service_name': appointment.service.title if appointment.service else None,
		'program_name': appointment.program.name if appointment.program else None,
		'practitioner_name': appointment.practitioner.display_name if appointment.practitioner else None,
		'sessions': appointment.sessions,
		'residential': residential,
		'clinic': settings.CLINIC_INFO,
	}
	try:
		send_templated_mail(
			'Your Detox Wellness appointment is confirmed',
			'appointments/booking_confirmation.txt',
			context,
			[appointment.patient_email],
		)
	except Exception:
		logger.exception('Failed to send confirmation for appointment %s', appointment.pk)
		return False
	return True
