"""Tests for the booking rules shared by the wizard and the booking API.

Pure functions only, no database.
"""

from datetime import date

from django.test import SimpleTestCase

from wellness_backend.appointments import rules
from wellness_backend.appointments.rules import (
	BasicPlan,
	ExtendedPlan,
	ResidentialPlan,
	SessionSlot,
)

TODAY = date(2025, 1, 1)


class ProgramPlanTest(SimpleTestCase):

	# ========== PLAN DISPATCH TESTS ==========

	def test_plan_for_dispatches_on_type_tag(self):
		self.assertEqual(rules.plan_for('BASIC'), BasicPlan())
		self.assertEqual(rules.plan_for('EXTENDED', 3), ExtendedPlan(session_count=3))
		self.assertEqual(rules.plan_for('RESIDENTIAL'), ResidentialPlan())

	def test_session_counts_per_plan(self):
		self.assertEqual(rules.plan_for('BASIC').session_count, 1)
		self.assertEqual(rules.plan_for('EXTENDED', 4).session_count, 4)
		self.assertEqual(rules.plan_for('RESIDENTIAL').session_count, 0)

	def test_only_residential_skips_session_dates(self):
		self.assertTrue(rules.plan_for('BASIC').needs_sessions)
		self.assertTrue(rules.plan_for('EXTENDED', 2).needs_sessions)
		self.assertFalse(rules.plan_for('RESIDENTIAL').needs_sessions)

	def test_unknown_type_raises(self):
		with self.assertRaises(rules.UnknownProgramType):
			rules.plan_for('Detox Deluxe')

	def test_extended_plan_needs_two_sessions(self):
		with self.assertRaises(ValueError):
			rules.plan_for('EXTENDED', 1)


class SessionWindowTest(SimpleTestCase):

	# ========== DATE WINDOW TESTS ==========

	def test_window_is_one_to_two_weeks_after_previous(self):
		earliest, latest = rules.session_window(date(2025, 1, 1))
		self.assertEqual(earliest, date(2025, 1, 8))
		self.assertEqual(latest, date(2025, 1, 15))

	def test_first_session_is_unbounded(self):
		window = rules.date_window([SessionSlot()], 0)
		self.assertFalse(window.locked)
		self.assertTrue(window.contains(date(2030, 6, 1)))

	def test_later_session_locked_until_previous_has_date(self):
		sessions = [SessionSlot(), SessionSlot()]
		window = rules.date_window(sessions, 1)
		self.assertTrue(window.locked)
		self.assertFalse(window.contains(date(2025, 1, 10)))

	def test_date_picker_example(self):
		sessions = [SessionSlot(date=date(2025, 1, 1)), SessionSlot(), SessionSlot()]
		self.assertTrue(rules.is_date_selectable(sessions, 1, date(2025, 1, 8)))
		self.assertTrue(rules.is_date_selectable(sessions, 1, date(2025, 1, 15)))
		self.assertFalse(rules.is_date_selectable(sessions, 1, date(2025, 1, 7)))
		self.assertFalse(rules.is_date_selectable(sessions, 1, date(2025, 1, 20)))

	def test_residential_years_is_five_year_window(self):
		self.assertEqual(rules.residential_years(TODAY), [2025, 2026, 2027, 2028, 2029])


class ValidateScheduleTest(SimpleTestCase):

	# ========== BASIC ==========

	def test_basic_accepts_exactly_one_complete_session(self):
		sessions = [SessionSlot(date=date(2025, 2, 1), time='09:30 AM')]
		self.assertEqual(rules.validate_schedule(BasicPlan(), sessions, None, None, today=TODAY), {})

	def test_basic_rejects_missing_time(self):
		sessions = [SessionSlot(date=date(2025, 2, 1))]
		errors = rules.validate_schedule(BasicPlan(), sessions, None, None, today=TODAY)
		self.assertIn('sessions.0.time', errors)

	def test_basic_rejects_two_sessions(self):
		sessions = [
			SessionSlot(date=date(2025, 2, 1), time='09:30 AM'),
			SessionSlot(date=date(2025, 2, 9), time='09:30 AM'),
		]
		errors = rules.validate_schedule(BasicPlan(), sessions, None, None, today=TODAY)
		self.assertEqual(errors['sessions'], 'Exactly 1 session required.')

	def test_unknown_time_label_rejected(self):
		sessions = [SessionSlot(date=date(2025, 2, 1), time='07:00 AM')]
		errors = rules.validate_schedule(BasicPlan(), sessions, None, None, today=TODAY)
		self.assertEqual(errors['sessions.0.time'], 'Invalid time slot: 07:00 AM.')

	# ========== EXTENDED ==========

	def test_extended_accepts_sessions_inside_windows(self):
		sessions = [
			SessionSlot(date=date(2025, 1, 1), time='09:30 AM'),
			SessionSlot(date=date(2025, 1, 8), time='10:30 AM'),
			SessionSlot(date=date(2025, 1, 22), time='02:30 PM'),
		]
		errors = rules.validate_schedule(ExtendedPlan(3), sessions, None, None, today=TODAY)
		self.assertEqual(errors, {})

	def test_extended_rejects_date_outside_window(self):
		sessions = [
			SessionSlot(date=date(2025, 1, 1), time='09:30 AM'),
			SessionSlot(date=date(2025, 1, 20), time='10:30 AM'),
			SessionSlot(date=date(2025, 2, 1), time='02:30 PM'),
		]
		errors = rules.validate_schedule(ExtendedPlan(3), sessions, None, None, today=TODAY)
		self.assertEqual(errors['sessions.1.date'], 'Session 2 must be between 2025-01-08 and 2025-01-15.')

	def test_extended_rejects_incomplete_sessions(self):
		sessions = [
			SessionSlot(date=date(2025, 1, 1), time='09:30 AM'),
			SessionSlot(date=date(2025, 1, 9)),
			SessionSlot(),
		]
		errors = rules.validate_schedule(ExtendedPlan(3), sessions, None, None, today=TODAY)
		self.assertIn('sessions.1.time', errors)
		self.assertIn('sessions.2.date', errors)
		self.assertIn('sessions.2.time', errors)

	def test_extended_rejects_wrong_count(self):
		sessions = [SessionSlot(date=date(2025, 1, 1), time='09:30 AM')]
		errors = rules.validate_schedule(ExtendedPlan(3), sessions, None, None, today=TODAY)
		self.assertEqual(errors['sessions'], 'Exactly 3 sessions required.')

	# ========== RESIDENTIAL ==========

	def test_residential_requires_month_and_year(self):
		errors = rules.validate_schedule(ResidentialPlan(), [], None, None, today=TODAY)
		self.assertIn('residentialMonth', errors)
		self.assertIn('residentialYear', errors)

	def test_residential_accepts_month_and_offered_year(self):
		self.assertEqual(rules.validate_schedule(ResidentialPlan(), [], 6, 2029, today=TODAY), {})

	def test_residential_rejects_out_of_range_values(self):
		errors = rules.validate_schedule(ResidentialPlan(), [], 13, 2030, today=TODAY)
		self.assertEqual(errors['residentialMonth'], 'Month must be between 1 and 12.')
		self.assertEqual(errors['residentialYear'], 'Year must be between 2025 and 2029.')


class PersonalDetailsTest(SimpleTestCase):

	def _validate(self, **overrides):
		values = {
			'patient_name': 'Asha Rao',
			'patient_age': 34,
			'patient_gender': 'Female',
			'patient_mobile': '+91 98765 43210',
		}
		values.update(overrides)
		return rules.validate_personal_details(**values)

	def test_valid_details(self):
		self.assertEqual(self._validate(), {})

	def test_age_bounds(self):
		self.assertIn('patientAge', self._validate(patient_age=0))
		self.assertIn('patientAge', self._validate(patient_age=121))
		self.assertEqual(self._validate(patient_age=1), {})
		self.assertEqual(self._validate(patient_age=120), {})
		self.assertEqual(self._validate(patient_age='abc')['patientAge'], 'Please enter a valid age.')

	def test_short_name_rejected(self):
		self.assertIn('patientName', self._validate(patient_name=' A '))

	def test_gender_required(self):
		self.assertIn('patientGender', self._validate(patient_gender=''))

	def test_mobile_needs_ten_digits(self):
		self.assertIn('patientMobile', self._validate(patient_mobile='12345'))
		self.assertIn('patientMobile', self._validate(patient_mobile='98765abcde'))
		self.assertEqual(self._validate(patient_mobile='9876543210'), {})

	def test_email_optional_but_checked(self):
		self.assertEqual(self._validate(patient_email=''), {})
		self.assertIn('patientEmail', self._validate(patient_email='not-an-email'))

	def test_report_type_checked(self):
		errors = self._validate(has_report=True, report_name='notes.txt', report_content_type='text/plain', report_size=10)
		self.assertIn('medicalReport', errors)
		ok = self._validate(has_report=True, report_name='scan.pdf', report_content_type='application/pdf', report_size=10)
		self.assertEqual(ok, {})

	def test_report_kind_falls_back_to_extension(self):
		self.assertEqual(rules.report_kind('scan.PNG', ''), 'PNG')
		self.assertEqual(rules.report_kind('scan.jpeg', None), 'JPEG')
		self.assertIsNone(rules.report_kind('scan.gif', 'image/gif'))


class SessionCodecTest(SimpleTestCase):

	def test_encoded_sessions_decode_in_order(self):
		sessions = [
			SessionSlot(date=date(2025, 1, 1), time='09:30 AM'),
			SessionSlot(date=date(2025, 1, 10), time='04:30 PM'),
		]
		self.assertEqual(rules.decode_sessions(rules.encode_sessions(sessions)), sessions)

	def test_decode_rejects_non_list(self):
		with self.assertRaises(ValueError):
			rules.decode_sessions('{"date": "2025-01-01"}')
		with self.assertRaises(ValueError):
			rules.decode_sessions('[1, 2]')

	def test_decode_empty(self):
		self.assertEqual(rules.decode_sessions(''), [])
		self.assertEqual(rules.decode_sessions('[]'), [])
