"""Booking rules shared by the booking wizard and the booking endpoint.

Nothing in here touches the ORM: the same functions validate the wizard's
in-memory records and the server's incoming multipart payload.

Program plans are a tagged variant dispatched on the program's ``type``:

- ``BasicPlan``:       exactly one {date, time} session
- ``ExtendedPlan(n)``: n sequential sessions, each k>0 dated inside
                       [date(k-1) + 7 days, date(k-1) + 14 days]
- ``ResidentialPlan``: no sessions; a month (1-12) and a year from the
                       five-year window starting at the current year

Validation never raises; it returns ``{field: message}`` dicts whose keys use
the booking payload's field names (``sessions.<k>.date`` for per-session
problems).
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Iterable, Optional, Union

from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import validate_email


PROGRAM_BASIC = 'BASIC'
PROGRAM_EXTENDED = 'EXTENDED'
PROGRAM_RESIDENTIAL = 'RESIDENTIAL'
PROGRAM_TYPES = (PROGRAM_BASIC, PROGRAM_EXTENDED, PROGRAM_RESIDENTIAL)

CATEGORY_MIND = 'MIND'
CATEGORY_BODY = 'BODY'
CATEGORIES = (CATEGORY_MIND, CATEGORY_BODY)

CONSULTATION_ONLINE = 'ONLINE'
CONSULTATION_OFFLINE = 'OFFLINE'
CONSULTATION_TYPES = (CONSULTATION_ONLINE, CONSULTATION_OFFLINE)

TIME_SLOTS = (
	'09:30 AM',
	'10:30 AM',
	'11:30 AM',
	'02:30 PM',
	'03:30 PM',
	'04:30 PM',
)

SESSION_GAP_MIN_DAYS = 7
SESSION_GAP_MAX_DAYS = 14
RESIDENTIAL_YEAR_SPAN = 5

MIN_NAME_LENGTH = 2
MIN_AGE = 1
MAX_AGE = 120
MIN_MOBILE_DIGITS = 10
MAX_MOBILE_DIGITS = 15

REPORT_KINDS = {
	'application/pdf': 'PDF',
	'image/jpeg': 'JPEG',
	'image/jpg': 'JPEG',
	'image/png': 'PNG',
}
REPORT_EXTENSIONS = {
	'.pdf': 'PDF',
	'.jpg': 'JPEG',
	'.jpeg': 'JPEG',
	'.png': 'PNG',
}
MAX_REPORT_BYTES = 10 * 1024 * 1024

MONTH_NAMES = (
	'January', 'February', 'March', 'April', 'May', 'June',
	'July', 'August', 'September', 'October', 'November', 'December',
)

_PHONE_CHARS = re.compile(r'^\+?[\d\s().-]+$')


class UnknownProgramType(ValueError):
	"""Raised by ``plan_for`` for a program type outside PROGRAM_TYPES."""


# -----------------------------------------------------------------------------
# Program plans
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class BasicPlan:
	kind = PROGRAM_BASIC

	@property
	def session_count(self) -> int:
		return 1

	@property
	def needs_sessions(self) -> bool:
		return True


@dataclass(frozen=True)
class ExtendedPlan:
	session_count: int
	kind = PROGRAM_EXTENDED

	def __post_init__(self):
		if self.session_count < 2:
			raise ValueError('An extended program needs at least 2 sessions.')

	@property
	def needs_sessions(self) -> bool:
		return True


@dataclass(frozen=True)
class ResidentialPlan:
	kind = PROGRAM_RESIDENTIAL

	@property
	def session_count(self) -> int:
		return 0

	@property
	def needs_sessions(self) -> bool:
		return False


ProgramPlan = Union[BasicPlan, ExtendedPlan, ResidentialPlan]


def plan_for(program_type: str, session_count: Optional[int] = None) -> ProgramPlan:
	"""Build the plan for a program's type tag.

	``session_count`` only matters for EXTENDED programs.
	"""
	tag = (program_type or '').strip().upper()
	if tag == PROGRAM_BASIC:
		return BasicPlan()
	if tag == PROGRAM_EXTENDED:
		if session_count is None:
			raise ValueError('An extended program needs a session count.')
		return ExtendedPlan(int(session_count))
	if tag == PROGRAM_RESIDENTIAL:
		return ResidentialPlan()
	raise UnknownProgramType(f'Unknown program type: {program_type!r}')


# -----------------------------------------------------------------------------
# Sessions
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class SessionSlot:
	"""One sitting: a calendar date and a time-slot label. Either may be unset."""
	date: Optional[date] = None
	time: Optional[str] = None

	@property
	def is_complete(self) -> bool:
		return self.date is not None and bool(self.time)

	def to_dict(self) -> dict[str, Any]:
		return {
			'date': self.date.isoformat() if self.date else None,
			'time': self.time,
		}


@dataclass(frozen=True)
class DateWindow:
	"""Selectable dates for one session.

	``locked`` means no date can be picked yet (the previous session has
	none). ``earliest``/``latest`` of None mean unbounded.
	"""
	earliest: Optional[date] = None
	latest: Optional[date] = None
	locked: bool = False

	def contains(self, candidate: date) -> bool:
		if self.locked:
			return False
		if self.earliest is not None and candidate < self.earliest:
			return False
		if self.latest is not None and candidate > self.latest:
			return False
		return True


def session_window(previous: date) -> tuple[date, date]:
	"""Inclusive [previous + 7 days, previous + 14 days]."""
	# previous + 7 itself is bookable; a picker that blocks it shifts the window by a day
	return (
		previous + timedelta(days=SESSION_GAP_MIN_DAYS),
		previous + timedelta(days=SESSION_GAP_MAX_DAYS),
	)


def date_window(sessions: list[SessionSlot], index: int) -> DateWindow:
	"""Date-picker constraint for ``sessions[index]``."""
	if index <= 0:
		return DateWindow()
	previous = sessions[index - 1].date if index - 1 < len(sessions) else None
	if previous is None:
		return DateWindow(locked=True)
	earliest, latest = session_window(previous)
	return DateWindow(earliest=earliest, latest=latest)


def is_date_selectable(sessions: list[SessionSlot], index: int, candidate: date) -> bool:
	return date_window(sessions, index).contains(candidate)


def residential_years(today: date) -> list[int]:
	"""The offered years: this year and the four after it."""
	return list(range(today.year, today.year + RESIDENTIAL_YEAR_SPAN))


def parse_session_date(value) -> Optional[date]:
	"""Accepts a date, 'YYYY-MM-DD' or an ISO datetime string."""
	if value is None or value == '':
		return None
	if isinstance(value, date):
		return value
	return date.fromisoformat(str(value)[:10])


def encode_sessions(sessions: Iterable[SessionSlot]) -> str:
	"""JSON array of {date, time} used for the multipart ``sessions`` field."""
	return json.dumps([slot.to_dict() for slot in sessions])


def decode_sessions(raw) -> list[SessionSlot]:
	"""Inverse of ``encode_sessions``; also accepts an already-decoded list.

	Raises ValueError for anything that is not a list of {date, time} objects.
	"""
	if raw is None or raw == '':
		return []
	items = json.loads(raw) if isinstance(raw, (str, bytes)) else raw
	if not isinstance(items, list):
		raise ValueError('sessions must be a JSON array.')
	slots = []
	for item in items:
		if not isinstance(item, dict):
			raise ValueError('Each session must be an object with date and time.')
		time_label = item.get('time')
		slots.append(SessionSlot(
			date=parse_session_date(item.get('date')),
			time=str(time_label) if time_label else None,
		))
	return slots


# -----------------------------------------------------------------------------
# Step validation
# -----------------------------------------------------------------------------


def validate_schedule(
	plan: ProgramPlan,
	sessions: list[SessionSlot],
	residential_month: Optional[int],
	residential_year: Optional[int],
	*,
	today: date,
) -> dict[str, str]:
	errors: dict[str, str] = {}

	if not plan.needs_sessions:
		if residential_month is None:
			errors['residentialMonth'] = 'Please select a month.'
		elif not 1 <= residential_month <= 12:
			errors['residentialMonth'] = 'Month must be between 1 and 12.'

		years = residential_years(today)
		if residential_year is None:
			errors['residentialYear'] = 'Please select a year.'
		elif residential_year not in years:
			errors['residentialYear'] = f'Year must be between {years[0]} and {years[-1]}.'
		return errors

	expected = plan.session_count
	if len(sessions) != expected:
		noun = 'session' if expected == 1 else 'sessions'
		errors['sessions'] = f'Exactly {expected} {noun} required.'

	for index, slot in enumerate(sessions[:expected]):
		prefix = f'sessions.{index}'
		if slot.date is None:
			errors[f'{prefix}.date'] = f'Please select a date for session {index + 1}.'
		elif index > 0 and sessions[index - 1].date is not None:
			window = date_window(sessions, index)
			if not window.contains(slot.date):
				errors[f'{prefix}.date'] = (
					f'Session {index + 1} must be between '
					f'{window.earliest.isoformat()} and {window.latest.isoformat()}.'
				)
		if not slot.time:
			errors[f'{prefix}.time'] = f'Please select a time slot for session {index + 1}.'
		elif slot.time not in TIME_SLOTS:
			errors[f'{prefix}.time'] = f'Invalid time slot: {slot.time}.'

	return errors


def parse_age(value) -> Optional[int]:
	if value is None or value == '':
		return None
	if isinstance(value, bool):
		return None
	try:
		return int(str(value).strip())
	except (TypeError, ValueError):
		return None


def mobile_digits(value: str) -> int:
	return sum(1 for ch in value if ch.isdigit())


def report_kind(filename: Optional[str], content_type: Optional[str]) -> Optional[str]:
	"""'PDF', 'JPEG' or 'PNG' for an accepted medical report, else None."""
	if content_type:
		kind = REPORT_KINDS.get(content_type.split(';')[0].strip().lower())
		if kind:
			return kind
	if filename:
		lowered = filename.lower()
		for extension, kind in REPORT_EXTENSIONS.items():
			if lowered.endswith(extension):
				return kind
	return None


def validate_personal_details(
	*,
	patient_name: Optional[str],
	patient_age,
	patient_gender: Optional[str],
	patient_mobile: Optional[str],
	patient_email: Optional[str] = None,
	report_name: Optional[str] = None,
	report_content_type: Optional[str] = None,
	report_size: Optional[int] = None,
	has_report: bool = False,
) -> dict[str, str]:
	errors: dict[str, str] = {}

	name = (patient_name or '').strip()
	if len(name) < MIN_NAME_LENGTH:
		errors['patientName'] = 'Name must be at least 2 characters.'

	age = parse_age(patient_age)
	if age is None:
		errors['patientAge'] = 'Please enter a valid age.'
	elif not MIN_AGE <= age <= MAX_AGE:
		errors['patientAge'] = 'Age must be between 1 and 120.'

	if not (patient_gender or '').strip():
		errors['patientGender'] = 'Please select a gender.'

	mobile = (patient_mobile or '').strip()
	if not mobile:
		errors['patientMobile'] = 'Mobile number is required.'
	elif not _PHONE_CHARS.match(mobile):
		errors['patientMobile'] = 'Please enter a valid phone number.'
	elif mobile_digits(mobile) < MIN_MOBILE_DIGITS:
		errors['patientMobile'] = 'Mobile number must have at least 10 digits.'
	elif mobile_digits(mobile) > MAX_MOBILE_DIGITS:
		errors['patientMobile'] = 'Please enter a valid phone number.'

	email = (patient_email or '').strip()
	if email:
		try:
			validate_email(email)
		except DjangoValidationError:
			errors['patientEmail'] = 'Please enter a valid email address.'

	if has_report:
		if report_kind(report_name, report_content_type) is None:
			errors['medicalReport'] = 'Medical report must be a PDF, JPEG or PNG file.'
		elif report_size is not None and report_size > MAX_REPORT_BYTES:
			errors['medicalReport'] = 'Medical report must be 10MB or smaller.'

	return errors
