"""Appointment bookings.

An appointment is created by the public booking form with status CONFIRMED.
``sessions`` keeps the ordered {date, time} pairs the patient picked;
residential bookings carry a month and year instead.
"""

from django.db import models

from . import rules


class Appointment(models.Model):
	"""A patient's booking of a program with a practitioner.

	``appointment_date`` is the first session's date, the first day of the
	residential month, or the booking date when neither applies.
	"""
	STATUS_PENDING = 'PENDING'
	STATUS_CONFIRMED = 'CONFIRMED'
	STATUS_COMPLETED = 'COMPLETED'
	STATUS_CANCELLED = 'CANCELLED'

	STATUS_CHOICES = (
		(STATUS_PENDING, 'Pending'),
		(STATUS_CONFIRMED, 'Confirmed'),
		(STATUS_COMPLETED, 'Completed'),
		(STATUS_CANCELLED, 'Cancelled'),
	)

	CONSULTATION_ONLINE = rules.CONSULTATION_ONLINE
	CONSULTATION_OFFLINE = rules.CONSULTATION_OFFLINE

	CONSULTATION_CHOICES = (
		(CONSULTATION_ONLINE, 'Online'),
		(CONSULTATION_OFFLINE, 'Offline'),
	)

	appointment_date = models.DateField(db_index=True)
	consultation_type = models.CharField(max_length=10, choices=CONSULTATION_CHOICES)
	status = models.CharField(max_length=12, choices=STATUS_CHOICES, default=STATUS_CONFIRMED, db_index=True)

	patient_name = models.CharField(max_length=150)
	patient_age = models.PositiveSmallIntegerField()
	patient_gender = models.CharField(max_length=20)
	patient_mobile = models.CharField(max_length=20, db_index=True)
	patient_email = models.EmailField(blank=True, null=True)

	service = models.ForeignKey(
		'catalog.Service',
		null=True,
		on_delete=models.SET_NULL,
		related_name='appointments',
	)
	practitioner = models.ForeignKey(
		'catalog.Practitioner',
		null=True,
		on_delete=models.SET_NULL,
		related_name='appointments',
	)
	program = models.ForeignKey(
		'catalog.Program',
		null=True,
		on_delete=models.SET_NULL,
		related_name='appointments',
	)

	sessions = models.JSONField(default=list, blank=True)
	residential_month = models.PositiveSmallIntegerField(null=True, blank=True)
	residential_year = models.PositiveSmallIntegerField(null=True, blank=True)
	medical_report = models.CharField(max_length=255, blank=True, default='')
	admin_notes = models.TextField(blank=True, default='')

	created_at = models.DateTimeField(auto_now_add=True)
	updated_at = models.DateTimeField(auto_now=True)

	class Meta:
		ordering = ['-appointment_date', '-created_at', '-id']

	def __str__(self) -> str:
		return f"Appointment #{self.pk} {self.patient_name} on {self.appointment_date}"

	@property
	def session_slots(self) -> list[rules.SessionSlot]:
		return rules.decode_sessions(self.sessions)

	@property
	def session_dates(self) -> list[str]:
		return [slot.date.isoformat() for slot in self.session_slots if slot.date]
