"""Patient booking wizard.

A finite-state machine over four data-entry steps and one terminal step:

	SERVICE_SELECTION -> PROGRAM_SELECTION -> SCHEDULING -> PERSONAL_DETAILS -> SUBMITTED

Each step owns a record of its fields. ``advance()`` validates only the
fields of the step being exited and moves forward when they pass;
``retreat()`` always moves back and never clears data. Validation returns
per-field messages and never raises.

``submit(transport)`` sends one multipart booking request. On success all
field state is discarded and the wizard ends in SUBMITTED; on failure it
stays in PERSONAL_DETAILS with every field intact and a single dismissible
``submit_error``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import date
from enum import Enum
from typing import Any, Callable, Optional

from . import rules
from .rules import ProgramPlan, SessionSlot

logger = logging.getLogger(__name__)


GENERIC_SUBMIT_ERROR = 'Something went wrong. Please try again.'


class Step(Enum):
	SERVICE_SELECTION = 1
	PROGRAM_SELECTION = 2
	SCHEDULING = 3
	PERSONAL_DETAILS = 4
	SUBMITTED = 5


_ORDER = [
	Step.SERVICE_SELECTION,
	Step.PROGRAM_SELECTION,
	Step.SCHEDULING,
	Step.PERSONAL_DETAILS,
	Step.SUBMITTED,
]


# -----------------------------------------------------------------------------
# Catalog snapshot
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class CatalogService:
	id: str
	title: str
	category: str


@dataclass(frozen=True)
class CatalogPractitioner:
	id: str
	name: str


@dataclass(frozen=True)
class CatalogProgram:
	id: str
	name: str
	plan: ProgramPlan
	price: Optional[str] = None


@dataclass
class WizardCatalog:
	"""What the patient can pick from, as loaded from the public API."""
	services: list[CatalogService] = field(default_factory=list)
	practitioners: list[CatalogPractitioner] = field(default_factory=list)
	programs: list[CatalogProgram] = field(default_factory=list)

	@classmethod
	def from_payload(cls, *, services, practitioners, programs) -> 'WizardCatalog':
		"""Build from the JSON lists of /api/services/, /api/practitioners/ and /api/programs/.

		Programs with an unknown type are skipped.
		"""
		program_items = []
		for item in programs:
			try:
				plan = rules.plan_for(item.get('type'), item.get('session_count'))
			except ValueError:
				logger.warning('Skipping program %s with type %r', item.get('id'), item.get('type'))
				continue
			price = item.get('price')
			program_items.append(CatalogProgram(
				id=str(item['id']),
				name=item.get('name', ''),
				plan=plan,
				price=str(price) if price is not None else None,
			))
		return cls(
			services=[
				CatalogService(id=str(s['id']), title=s.get('title', ''), category=s.get('category', ''))
				for s in services
			],
			practitioners=[
				CatalogPractitioner(id=str(p['id']), name=p.get('name', ''))
				for p in practitioners
			],
			programs=program_items,
		)

	def service(self, service_id) -> Optional[CatalogService]:
		return next((s for s in self.services if s.id == str(service_id)), None)

	def practitioner(self, practitioner_id) -> Optional[CatalogPractitioner]:
		return next((p for p in self.practitioners if p.id == str(practitioner_id)), None)

	def program(self, program_id) -> Optional[CatalogProgram]:
		return next((p for p in self.programs if p.id == str(program_id)), None)

	def services_in(self, category: Optional[str]) -> list[CatalogService]:
		return [s for s in self.services if s.category == category]


# -----------------------------------------------------------------------------
# Step records
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class Attachment:
	"""An optional medical report. Absent reports are ``None`` on the record."""
	filename: str
	content: bytes
	content_type: str

	@property
	def size(self) -> int:
		return len(self.content)


@dataclass(frozen=True)
class ServiceSelection:
	category: Optional[str] = None
	consultation_type: Optional[str] = None
	service_id: Optional[str] = None
	practitioner_id: Optional[str] = None


@dataclass(frozen=True)
class ProgramSelection:
	program_id: Optional[str] = None


@dataclass(frozen=True)
class Scheduling:
	sessions: tuple[SessionSlot, ...] = ()
	residential_month: Optional[int] = None
	residential_year: Optional[int] = None


@dataclass(frozen=True)
class PersonalDetails:
	patient_name: Optional[str] = None
	patient_age: Optional[int] = None
	patient_gender: Optional[str] = None
	patient_mobile: Optional[str] = None
	patient_email: Optional[str] = None
	medical_report: Optional[Attachment] = None


@dataclass(frozen=True)
class StepResult:
	errors: dict[str, str] = field(default_factory=dict)

	@property
	def ok(self) -> bool:
		return not self.errors


@dataclass(frozen=True)
class BookingPayload:
	"""Multipart form fields plus the optional ``medicalReport`` file."""
	fields: dict[str, str]
	files: dict[str, tuple[str, bytes, str]]


@dataclass(frozen=True)
class SubmitOutcome:
	ok: bool
	status_code: Optional[int] = None
	message: Optional[str] = None
	data: Optional[dict[str, Any]] = None


Transport = Callable[[BookingPayload], SubmitOutcome]


# -----------------------------------------------------------------------------
# Wizard
# -----------------------------------------------------------------------------


class BookingWizard:
	"""Booking state machine. See module docstring."""

	def __init__(self, catalog: WizardCatalog, *, today: Optional[date] = None):
		self.catalog = catalog
		self._today = today
		self.last_result: Optional[dict[str, Any]] = None
		self.reset()

	def reset(self) -> None:
		self.step = Step.SERVICE_SELECTION
		self.service_selection = ServiceSelection()
		self.program_selection = ProgramSelection()
		self.scheduling = Scheduling()
		self.personal_details = PersonalDetails()
		self.submit_error: Optional[str] = None

	@property
	def today(self) -> date:
		return self._today or date.today()

	@property
	def program(self) -> Optional[CatalogProgram]:
		return self.catalog.program(self.program_selection.program_id)

	@property
	def plan(self) -> Optional[ProgramPlan]:
		program = self.program
		return program.plan if program else None

	@property
	def available_services(self) -> list[CatalogService]:
		return self.catalog.services_in(self.service_selection.category)

	@property
	def residential_years(self) -> list[int]:
		return rules.residential_years(self.today)

	# ---- field setters -------------------------------------------------------

	def select_category(self, category: Optional[str]) -> None:
		self.service_selection = replace(self.service_selection, category=category)

	def select_consultation_type(self, consultation_type: Optional[str]) -> None:
		self.service_selection = replace(self.service_selection, consultation_type=consultation_type)

	def select_service(self, service_id) -> None:
		value = str(service_id) if service_id is not None else None
		self.service_selection = replace(self.service_selection, service_id=value)

	def select_practitioner(self, practitioner_id) -> None:
		value = str(practitioner_id) if practitioner_id is not None else None
		self.service_selection = replace(self.service_selection, practitioner_id=value)

	def select_program(self, program_id) -> None:
		"""Select a program and size the session list to its plan."""
		value = str(program_id) if program_id is not None else None
		self.program_selection = ProgramSelection(program_id=value)
		plan = self.plan
		if plan is None:
			return
		count = plan.session_count
		sessions = list(self.scheduling.sessions[:count])
		sessions.extend(SessionSlot() for _ in range(count - len(sessions)))
		self.scheduling = replace(self.scheduling, sessions=tuple(sessions))

	def date_window(self, index: int) -> rules.DateWindow:
		return rules.date_window(list(self.scheduling.sessions), index)

	def set_session_date(self, index: int, value: Optional[date]) -> StepResult:
		"""Set the date of session ``index``; disabled dates are reported, not stored."""
		error = self._check_session_index(index)
		if error:
			return error
		if value is not None and not self.date_window(index).contains(value):
			window = self.date_window(index)
			if window.locked:
				message = f'Select a date for session {index} first.'
			else:
				message = (
					f'Session {index + 1} must be between '
					f'{window.earliest.isoformat()} and {window.latest.isoformat()}.'
				)
			return StepResult({f'sessions.{index}.date': message})
		self._replace_session(index, date=value)
		return StepResult()

	def set_session_time(self, index: int, label: Optional[str]) -> StepResult:
		error = self._check_session_index(index)
		if error:
			return error
		if label is not None and label not in rules.TIME_SLOTS:
			return StepResult({f'sessions.{index}.time': f'Invalid time slot: {label}.'})
		self._replace_session(index, time=label)
		return StepResult()

	def set_residential(self, month: Optional[int], year: Optional[int]) -> None:
		self.scheduling = replace(self.scheduling, residential_month=month, residential_year=year)

	def set_personal_details(self, **values) -> None:
		"""Update any of PersonalDetails' fields, e.g. ``patient_name='Asha'``."""
		self.personal_details = replace(self.personal_details, **values)

	def attach_medical_report(self, attachment: Optional[Attachment]) -> None:
		self.personal_details = replace(self.personal_details, medical_report=attachment)

	def _check_session_index(self, index: int) -> Optional[StepResult]:
		if self.plan is None or not self.plan.needs_sessions:
			return StepResult({'sessions': 'The selected program has no session dates.'})
		if not 0 <= index < len(self.scheduling.sessions):
			return StepResult({'sessions': f'Session {index + 1} does not exist.'})
		return None

	def _replace_session(self, index: int, **changes) -> None:
		sessions = list(self.scheduling.sessions)
		sessions[index] = replace(sessions[index], **changes)
		self.scheduling = replace(self.scheduling, sessions=tuple(sessions))

	# ---- validation ----------------------------------------------------------

	def validate(self, step: Optional[Step] = None) -> StepResult:
		step = step or self.step
		if step is Step.SERVICE_SELECTION:
			return StepResult(self._validate_service_selection())
		if step is Step.PROGRAM_SELECTION:
			return StepResult(self._validate_program_selection())
		if step is Step.SCHEDULING:
			return StepResult(self._validate_scheduling())
		if step is Step.PERSONAL_DETAILS:
			return StepResult(self._validate_personal_details())
		return StepResult()

	def can_advance(self) -> StepResult:
		if self.step in (Step.PERSONAL_DETAILS, Step.SUBMITTED):
			return StepResult({'step': 'Submit the booking to finish.'})
		return self.validate(self.step)

	def _validate_service_selection(self) -> dict[str, str]:
		data = self.service_selection
		errors = {}
		if data.category not in rules.CATEGORIES:
			errors['category'] = 'Please select a category.'
		if data.consultation_type not in rules.CONSULTATION_TYPES:
			errors['consultationType'] = 'Please select a consultation type.'
		service = self.catalog.service(data.service_id) if data.service_id else None
		if service is None:
			errors['serviceId'] = 'Please select a service.'
		elif 'category' not in errors and service.category != data.category:
			errors['serviceId'] = 'The selected service is not in this category.'
		if not data.practitioner_id or self.catalog.practitioner(data.practitioner_id) is None:
			errors['practitionerId'] = 'Please select a specialist.'
		return errors

	def _validate_program_selection(self) -> dict[str, str]:
		if not self.program_selection.program_id or self.program is None:
			return {'programId': 'Please select a program.'}
		return {}

	def _validate_scheduling(self) -> dict[str, str]:
		plan = self.plan
		if plan is None:
			return {'programId': 'Please select a program.'}
		data = self.scheduling
		return rules.validate_schedule(
			plan,
			list(data.sessions),
			data.residential_month,
			data.residential_year,
			today=self.today,
		)

	def _validate_personal_details(self) -> dict[str, str]:
		data = self.personal_details
		report = data.medical_report
		return rules.validate_personal_details(
			patient_name=data.patient_name,
			patient_age=data.patient_age,
			patient_gender=data.patient_gender,
			patient_mobile=data.patient_mobile,
			patient_email=data.patient_email,
			has_report=report is not None,
			report_name=report.filename if report else None,
			report_content_type=report.content_type if report else None,
			report_size=report.size if report else None,
		)

	# ---- navigation ----------------------------------------------------------

	def advance(self) -> StepResult:
		"""Move to the next data-entry step if the current one is valid."""
		result = self.can_advance()
		if result.ok:
			self.step = _ORDER[_ORDER.index(self.step) + 1]
		return result

	def retreat(self) -> Step:
		"""Move one step back; a no-op on the first and the terminal step."""
		if self.step not in (Step.SERVICE_SELECTION, Step.SUBMITTED):
			self.step = _ORDER[_ORDER.index(self.step) - 1]
		return self.step

	# ---- submit --------------------------------------------------------------

	def build_payload(self) -> BookingPayload:
		"""Assemble the multipart booking request from the step records."""
		selection = self.service_selection
		schedule = self.scheduling
		details = self.personal_details
		residential = self.plan is not None and not self.plan.needs_sessions

		fields = {
			'consultationType': selection.consultation_type or '',
			'patientName': (details.patient_name or '').strip(),
			'patientAge': str(details.patient_age) if details.patient_age is not None else '',
			'patientGender': details.patient_gender or '',
			'patientMobile': (details.patient_mobile or '').strip(),
			'serviceId': selection.service_id or '',
			'practitionerId': selection.practitioner_id or '',
			'programId': self.program_selection.program_id or '',
			'sessions': rules.encode_sessions([] if residential else schedule.sessions),
		}
		if details.patient_email:
			fields['patientEmail'] = details.patient_email.strip()
		if residential:
			fields['residentialMonth'] = str(schedule.residential_month)
			fields['residentialYear'] = str(schedule.residential_year)

		files = {}
		report = details.medical_report
		if report is not None:
			files['medicalReport'] = (report.filename, report.content, report.content_type)
		return BookingPayload(fields=fields, files=files)

	def submit(self, transport: Transport) -> StepResult:
		"""Send the booking. Only valid from PERSONAL_DETAILS.

		Earlier steps are re-checked as well, since their fields may have
		been edited after they were exited.
		"""
		if self.step is not Step.PERSONAL_DETAILS:
			return StepResult({'step': 'The booking can only be submitted from the personal details step.'})

		errors: dict[str, str] = {}
		for step in _ORDER[:4]:
			errors.update(self.validate(step).errors)
		if errors:
			return StepResult(errors)

		self.submit_error = None
		outcome = transport(self.build_payload())

		if outcome.ok:
			logger.info('Booking submitted (status=%s)', outcome.status_code)
			self.reset()
			self.last_result = outcome.data
			self.step = Step.SUBMITTED
			return StepResult()

		logger.warning('Booking submit failed (status=%s): %s', outcome.status_code, outcome.message)
		if outcome.message and outcome.status_code is not None and 400 <= outcome.status_code < 500:
			self.submit_error = outcome.message
		else:
			self.submit_error = GENERIC_SUBMIT_ERROR
		return StepResult({'submit': self.submit_error})

	def dismiss_error(self) -> None:
		self.submit_error = None
