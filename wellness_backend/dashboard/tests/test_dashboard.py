"""Tests for the admin dashboard KPIs.

Tests cover:
- get_date_ranges week/month boundaries
- today's appointments, weekly revenue (COMPLETED only), distinct patients,
  active specialists, pending/completed counts
- popular services and recent appointments
- GET /api/admin/dashboard/stats/ (RBAC, float revenue)
"""

from datetime import date, timedelta
from decimal import Decimal

from django.test import SimpleTestCase, TestCase
from django.utils import timezone

from rest_framework import status
from rest_framework.test import APIClient

from wellness_backend.appointments.models import Appointment
from wellness_backend.catalog.models import Practitioner, Program, Service
from wellness_backend.core.models import Role, User
from wellness_backend.dashboard import kpis


class DateRangeTest(SimpleTestCase):
    def test_week_starts_on_monday(self):
        ranges = kpis.get_date_ranges(date(2025, 3, 13))  # Thursday
        self.assertEqual(ranges["today"], (date(2025, 3, 13), date(2025, 3, 13)))
        self.assertEqual(ranges["week"], (date(2025, 3, 10), date(2025, 3, 16)))

    def test_month_end(self):
        self.assertEqual(kpis.get_date_ranges(date(2024, 2, 10))["month"], (date(2024, 2, 1), date(2024, 2, 29)))
        self.assertEqual(kpis.get_date_ranges(date(2025, 12, 31))["month"], (date(2025, 12, 1), date(2025, 12, 31)))


class DashboardKpiTest(TestCase):
    databases = {"default"}

    def setUp(self):
        self.today = date(2025, 3, 13)  # Thursday

        self.detox = Service.objects.using("default").create(
            title="Full Body Detox",
            slug="full-body-detox",
            description="d",
            category=Service.CATEGORY_BODY,
        )
        self.mind = Service.objects.using("default").create(
            title="Mindfulness",
            slug="mindfulness",
            description="d",
            category=Service.CATEGORY_MIND,
        )
        self.practitioner = Practitioner.objects.using("default").create(
            name="Ananya Rao",
            slug="ananya-rao",
            specialization="Ayurveda",
            email="ananya@example.com",
        )
        Practitioner.objects.using("default").create(
            name="Blocked Doc",
            slug="blocked-doc",
            specialization="Yoga",
            email="blocked@example.com",
            status=Practitioner.STATUS_BLOCKED,
        )
        self.program = Program.objects.using("default").create(
            name="Single Session",
            slug="single-session",
            description="d",
            type=Program.TYPE_BASIC,
            session_count=1,
            price=Decimal("2500.00"),
            service=self.detox,
        )

    def _appointment(self, appointment_date, status=Appointment.STATUS_CONFIRMED, email="jane@example.com", **extra):
        data = {
            "appointment_date": appointment_date,
            "consultation_type": Appointment.CONSULTATION_OFFLINE,
            "status": status,
            "patient_name": "Jane Doe",
            "patient_age": 34,
            "patient_gender": "Female",
            "patient_mobile": "9876543210",
            "patient_email": email,
            "service": self.detox,
            "practitioner": self.practitioner,
            "program": self.program,
        }
        data.update(extra)
        return Appointment.objects.using("default").create(**data)

    # ========== COUNT TESTS ==========

    def test_today_appointments(self):
        self._appointment(self.today)
        self._appointment(self.today, status=Appointment.STATUS_CANCELLED)
        self._appointment(self.today + timedelta(days=1))
        stats = kpis.get_dashboard_stats(self.today)
        self.assertEqual(stats["today_appointments"], 2)

    def test_weekly_revenue_counts_completed_only(self):
        self._appointment(date(2025, 3, 10), status=Appointment.STATUS_COMPLETED)  # Monday
        self._appointment(date(2025, 3, 16), status=Appointment.STATUS_COMPLETED)  # Sunday
        self._appointment(date(2025, 3, 12), status=Appointment.STATUS_CONFIRMED)
        self._appointment(date(2025, 3, 9), status=Appointment.STATUS_COMPLETED)  # last week
        stats = kpis.get_dashboard_stats(self.today)
        self.assertEqual(stats["weekly_revenue"], Decimal("5000.00"))

    def test_weekly_revenue_is_zero_without_completed(self):
        self.assertEqual(kpis.get_dashboard_stats(self.today)["weekly_revenue"], Decimal("0"))

    def test_total_patients_counts_distinct_emails(self):
        self._appointment(self.today, email="jane@example.com")
        self._appointment(self.today, email="jane@example.com")
        self._appointment(self.today, email="ravi@example.com")
        self._appointment(self.today, email=None)
        self._appointment(self.today, email="")
        self.assertEqual(kpis.get_dashboard_stats(self.today)["total_patients"], 2)

    def test_active_specialists(self):
        self.assertEqual(kpis.get_dashboard_stats(self.today)["active_specialists"], 1)

    def test_status_counts(self):
        self._appointment(self.today, status=Appointment.STATUS_PENDING)
        self._appointment(date(2025, 3, 1), status=Appointment.STATUS_COMPLETED)
        self._appointment(date(2025, 2, 28), status=Appointment.STATUS_COMPLETED)
        stats = kpis.get_dashboard_stats(self.today)
        self.assertEqual(stats["pending_appointments"], 1)
        self.assertEqual(stats["completed_appointments"], 1)

    # ========== LIST TESTS ==========

    def test_popular_services(self):
        self._appointment(self.today)
        self._appointment(self.today)
        self._appointment(self.today, service=self.mind)
        self._appointment(self.today, service=None)
        popular = kpis.get_dashboard_stats(self.today)["popular_services"]
        self.assertEqual(
            popular,
            [
                {"service_id": self.detox.id, "service_name": "Full Body Detox", "appointment_count": 2},
                {"service_id": self.mind.id, "service_name": "Mindfulness", "appointment_count": 1},
            ],
        )

    def test_recent_appointments_newest_first(self):
        first = self._appointment(self.today)
        second = self._appointment(self.today - timedelta(days=3), program=None)
        recent = kpis.get_recent_appointments()
        self.assertEqual([row["id"] for row in recent], [second.id, first.id])
        self.assertEqual(recent[0]["program"], None)
        self.assertEqual(recent[1]["service"], "Full Body Detox")
        self.assertEqual(recent[1]["appointment_date"], "2025-03-13")

    def test_recent_appointments_limit(self):
        for _ in range(12):
            self._appointment(self.today)
        self.assertEqual(len(kpis.get_recent_appointments()), 10)


class DashboardApiTest(TestCase):
    databases = {"default"}

    def setUp(self):
        self.role_admin, _ = Role.objects.using("default").get_or_create(
            name="admin",
            defaults={"label": "Admin"},
        )
        self.admin = User.objects.db_manager("default").create_user(
            email="admin_dash@example.com",
            password="SecurePass123!",
            name="Admin",
            role=self.role_admin,
        )
        self.no_role = User.objects.db_manager("default").create_user(
            email="norole_dash@example.com",
            password="SecurePass123!",
            name="No Role",
        )

        service = Service.objects.using("default").create(
            title="Full Body Detox",
            slug="full-body-detox",
            description="d",
            category=Service.CATEGORY_BODY,
        )
        program = Program.objects.using("default").create(
            name="Single Session",
            slug="single-session",
            description="d",
            type=Program.TYPE_BASIC,
            session_count=1,
            price=Decimal("1999.50"),
            service=service,
        )
        Appointment.objects.using("default").create(
            appointment_date=timezone.localdate(),
            consultation_type=Appointment.CONSULTATION_ONLINE,
            status=Appointment.STATUS_COMPLETED,
            patient_name="Jane Doe",
            patient_age=34,
            patient_gender="Female",
            patient_mobile="9876543210",
            service=service,
            program=program,
        )

        self.client = APIClient()
        self.client.defaults["HTTP_HOST"] = "localhost"

    def test_requires_token(self):
        response = self.client.get("/api/admin/dashboard/stats/")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_requires_admin_role(self):
        self.client.force_authenticate(user=self.no_role)
        response = self.client.get("/api/admin/dashboard/stats/")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_stats(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.get("/api/admin/dashboard/stats/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        body = response.json()
        self.assertEqual(body["today_appointments"], 1)
        self.assertEqual(body["weekly_revenue"], 1999.5)
        self.assertEqual(body["completed_appointments"], 1)
        self.assertEqual(body["total_patients"], 0)
        self.assertEqual(len(body["recent_appointments"]), 1)
        self.assertEqual(body["popular_services"][0]["service_name"], "Full Body Detox")
