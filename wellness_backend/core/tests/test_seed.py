"""Tests for the seed management command."""

from io import StringIO

from django.core.management import call_command
from django.test import TestCase

from wellness_backend.appointments.models import Appointment
from wellness_backend.catalog.models import Practitioner, Program, Service, Testimonial
from wellness_backend.core.models import Role, User
from wellness_backend.inquiries.models import ContactInquiry
from wellness_backend.notifications.models import Notification


class SeedCommandTest(TestCase):
    databases = {"default"}

    def _seed(self, *args):
        out = StringIO()
        call_command("seed", *args, stdout=out, stderr=StringIO())
        return out.getvalue()

    def test_seed_populates_every_app(self):
        output = self._seed()
        self.assertIn("Seeding finished", output)

        self.assertEqual(set(Role.objects.values_list("name", flat=True)), {"admin", "super_admin"})
        owner = User.objects.get(email="admin@detoxwellness.in")
        self.assertTrue(owner.is_superuser)
        self.assertTrue(owner.is_clinic_admin)

        self.assertEqual(Service.objects.count(), 4)
        self.assertEqual(Practitioner.objects.count(), 3)
        self.assertEqual(
            set(Program.objects.values_list("type", flat=True)),
            {Program.TYPE_BASIC, Program.TYPE_EXTENDED, Program.TYPE_RESIDENTIAL},
        )
        self.assertEqual(Testimonial.objects.count(), 4)
        self.assertEqual(Appointment.objects.count(), 12)
        self.assertEqual(ContactInquiry.objects.count(), 4)
        self.assertEqual(Notification.objects.count(), 2)

    def test_seeded_sessions_follow_booking_rules(self):
        self._seed()
        for appointment in Appointment.objects.select_related("program"):
            slots = appointment.session_slots
            if appointment.program.type == Program.TYPE_RESIDENTIAL:
                self.assertEqual(slots, [])
                self.assertIsNotNone(appointment.residential_month)
                continue
            self.assertEqual(len(slots), appointment.program.session_count)
            self.assertEqual(slots[0].date, appointment.appointment_date)
            for previous, current in zip(slots, slots[1:]):
                gap = (current.date - previous.date).days
                self.assertTrue(7 <= gap <= 14)

    def test_seed_twice_does_not_duplicate_catalog(self):
        self._seed()
        self._seed()
        self.assertEqual(Service.objects.count(), 4)
        self.assertEqual(Testimonial.objects.count(), 4)
        self.assertEqual(ContactInquiry.objects.count(), 4)
        self.assertEqual(Notification.objects.count(), 2)

    def test_flush_keeps_superusers(self):
        self._seed()
        self._seed("--flush")
        self.assertEqual(Appointment.objects.count(), 12)
        self.assertEqual(User.objects.filter(email="admin@detoxwellness.in").count(), 1)
