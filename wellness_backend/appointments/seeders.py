import random
from datetime import date, timedelta

from django.db import transaction
from django.utils import timezone

from wellness_backend.catalog.models import Practitioner, Program

from . import rules
from .models import Appointment

RANDOM_SEED = 42

PATIENTS = [
	('Kavya Nair', 31, 'Female', '+91 90000 10001', 'kavya.nair@example.com'),
	('Rohan Gupta', 45, 'Male', '+91 90000 10002', 'rohan.gupta@example.com'),
	('Isha Verma', 27, 'Female', '+91 90000 10003', None),
	('Sameer Khan', 52, 'Male', '+91 90000 10004', 'sameer.khan@example.com'),
	('Neha Joshi', 38, 'Female', '+91 90000 10005', 'neha.joshi@example.com'),
	('Aditya Rao', 60, 'Male', '+91 90000 10006', None),
]


def seed_appointments(flush: bool = False, count: int = 12) -> dict:
	"""Sample bookings across every program type and status."""
	random.seed(RANDOM_SEED)
	stats: dict[str, int] = {}

	with transaction.atomic():
		if flush:
			Appointment.objects.all().delete()

		programs = list(Program.objects.select_related('service').all())
		practitioners = list(Practitioner.objects.filter(status=Practitioner.STATUS_ACTIVE))
		if not programs or not practitioners:
			stats['appointments'] = 0
			return stats

		today = timezone.localdate()
		created = 0
		for index in range(count):
			program = programs[index % len(programs)]
			name, age, gender, mobile, email = PATIENTS[index % len(PATIENTS)]
			start = today + timedelta(days=random.randint(-21, 21))
			plan = program.plan
			sessions, month, year, appointment_date = _schedule(plan, start)

			Appointment.objects.create(
				appointment_date=appointment_date,
				consultation_type=random.choice(rules.CONSULTATION_TYPES),
				status=_status_for(appointment_date, today),
				patient_name=name,
				patient_age=age,
				patient_gender=gender,
				patient_mobile=mobile,
				patient_email=email,
				service=program.service,
				practitioner=random.choice(practitioners),
				program=program,
				sessions=sessions,
				residential_month=month,
				residential_year=year,
			)
			created += 1
		stats['appointments'] = created

	return stats


def _schedule(plan, start: date):
	if not plan.needs_sessions:
		first = (start.replace(day=1) + timedelta(days=32)).replace(day=1)
		return [], first.month, first.year, first

	slots = []
	current = start
	for _ in range(plan.session_count):
		slots.append(rules.SessionSlot(date=current, time=random.choice(rules.TIME_SLOTS)).to_dict())
		current = current + timedelta(days=random.randint(rules.SESSION_GAP_MIN_DAYS, rules.SESSION_GAP_MAX_DAYS))
	return slots, None, None, start


def _status_for(appointment_date: date, today: date) -> str:
	if appointment_date < today:
		return random.choice([Appointment.STATUS_COMPLETED, Appointment.STATUS_COMPLETED, Appointment.STATUS_CANCELLED])
	return random.choice([Appointment.STATUS_CONFIRMED, Appointment.STATUS_CONFIRMED, Appointment.STATUS_PENDING])
