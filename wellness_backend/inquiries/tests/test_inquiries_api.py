"""Tests for the contact form and inquiry management.

Tests cover:
- POST /api/contact/ (validation, emails, admin notifications)
- GET /api/contact/info/
- Admin list filters, detail (PENDING -> READ), status, reply, delete, stats
- RBAC on the admin routes
"""

from datetime import timedelta
from unittest.mock import patch

from django.core import mail
from django.test import TestCase, override_settings
from django.utils import timezone

from rest_framework import status
from rest_framework.test import APIClient

from wellness_backend.core.models import Role, User
from wellness_backend.inquiries.models import ContactInquiry
from wellness_backend.notifications.models import Notification


class InquiryApiTestBase(TestCase):
    databases = {"default"}

    def setUp(self):
        self.role_admin, _ = Role.objects.using("default").get_or_create(
            name="admin",
            defaults={"label": "Admin"},
        )
        self.admin = User.objects.db_manager("default").create_user(
            email="admin_inq@example.com",
            password="SecurePass123!",
            name="Priya Admin",
            role=self.role_admin,
        )
        self.no_role = User.objects.db_manager("default").create_user(
            email="norole_inq@example.com",
            password="SecurePass123!",
            name="No Role",
        )

        self.client = APIClient()
        self.client.defaults["HTTP_HOST"] = "localhost"

    def _inquiry(self, **overrides):
        data = {
            "name": "Jane Doe",
            "email": "jane@example.com",
            "subject": "Pricing",
            "message": "How much is the retreat?",
        }
        data.update(overrides)
        return ContactInquiry.objects.using("default").create(**data)


class ContactFormTest(InquiryApiTestBase):
    # ========== CREATE TESTS ==========

    def test_create_inquiry(self):
        response = self.client.post(
            "/api/contact/",
            {
                "name": "Jane O'Brien",
                "email": "jane@example.com",
                "phone": "+91 98765 43210",
                "subject": "Retreat",
                "message": "Is there space in March?",
                "type": "consultation",
                "preferred_contact": "phone",
            },
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(
            response.data["message"],
            "Thank you for your inquiry. We will get back to you within 24 hours.",
        )
        self.assertEqual(response.data["inquiry"]["type"], "CONSULTATION")
        self.assertEqual(response.data["inquiry"]["status"], "PENDING")

        inquiry = ContactInquiry.objects.using("default").get(id=response.data["inquiry"]["id"])
        self.assertEqual(inquiry.preferred_contact, ContactInquiry.CONTACT_PHONE)

    def test_create_defaults_type_and_contact(self):
        response = self.client.post(
            "/api/contact/",
            {"name": "Jane", "email": "jane@example.com", "message": "Hello"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        inquiry = ContactInquiry.objects.using("default").get(id=response.data["inquiry"]["id"])
        self.assertEqual(inquiry.type, ContactInquiry.TYPE_GENERAL)
        self.assertEqual(inquiry.preferred_contact, ContactInquiry.CONTACT_EMAIL)

    def test_create_sends_auto_reply(self):
        self.client.post(
            "/api/contact/",
            {"name": "Jane O'Brien", "email": "jane@example.com", "message": "Hello"},
            format="json",
        )
        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].to, ["jane@example.com"])
        self.assertIn("Dear Jane O'Brien", mail.outbox[0].body)

    @override_settings(ADMIN_EMAIL="frontdesk@example.com")
    def test_create_alerts_admin_mailbox(self):
        self.client.post(
            "/api/contact/",
            {"name": "Jane", "email": "jane@example.com", "subject": "Refund", "message": "Hello"},
            format="json",
        )
        recipients = [message.to for message in mail.outbox]
        self.assertIn(["frontdesk@example.com"], recipients)
        self.assertIn(["jane@example.com"], recipients)
        admin_mail = next(message for message in mail.outbox if message.to == ["frontdesk@example.com"])
        self.assertEqual(admin_mail.subject, "New contact inquiry: Refund")

    def test_create_notifies_admins(self):
        response = self.client.post(
            "/api/contact/",
            {"name": "Jane", "email": "jane@example.com", "message": "Hello", "type": "complaint"},
            format="json",
        )
        notification = Notification.objects.using("default").get(user=self.admin)
        self.assertEqual(notification.related_type, "inquiry")
        self.assertEqual(notification.related_id, str(response.data["inquiry"]["id"]))
        self.assertIn("complaint", notification.message)
        self.assertFalse(Notification.objects.using("default").filter(user=self.no_role).exists())

    def test_create_survives_mail_failure(self):
        with patch("wellness_backend.core.mail.send_mail", side_effect=OSError("smtp down")):
            response = self.client.post(
                "/api/contact/",
                {"name": "Jane", "email": "jane@example.com", "message": "Hello"},
                format="json",
            )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

    # ========== VALIDATION TESTS ==========

    def test_missing_name(self):
        response = self.client.post(
            "/api/contact/",
            {"email": "jane@example.com", "message": "Hello"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "Name is required")

    def test_invalid_email(self):
        response = self.client.post(
            "/api/contact/",
            {"name": "Jane", "email": "not-an-email", "message": "Hello"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "Please provide a valid email address")

    def test_invalid_type(self):
        response = self.client.post(
            "/api/contact/",
            {"name": "Jane", "email": "jane@example.com", "message": "Hello", "type": "sales"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "Invalid inquiry type")

    # ========== INFO TESTS ==========

    def test_contact_info(self):
        response = self.client.get("/api/contact/info/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn("phone", response.data)
        self.assertIn("hours", response.data)


class InquiryAdminTest(InquiryApiTestBase):
    # ========== RBAC TESTS ==========

    def test_list_requires_token(self):
        response = self.client.get("/api/contact/admin/inquiries/")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_list_requires_admin_role(self):
        self.client.force_authenticate(user=self.no_role)
        response = self.client.get("/api/contact/admin/inquiries/")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    # ========== LIST TESTS ==========

    def test_list_filters(self):
        pending = self._inquiry()
        self._inquiry(name="Ravi", email="ravi@example.com", status=ContactInquiry.STATUS_RESOLVED)
        complaint = self._inquiry(name="Meera", email="meera@example.com", type=ContactInquiry.TYPE_COMPLAINT)

        self.client.force_authenticate(user=self.admin)

        response = self.client.get("/api/contact/admin/inquiries/")
        self.assertEqual(response.data["total_count"], 3)
        self.assertFalse(response.data["has_more"])

        response = self.client.get("/api/contact/admin/inquiries/", {"status": "pending"})
        self.assertEqual({row["id"] for row in response.data["inquiries"]}, {pending.id, complaint.id})

        response = self.client.get("/api/contact/admin/inquiries/", {"type": "COMPLAINT"})
        self.assertEqual([row["id"] for row in response.data["inquiries"]], [complaint.id])

        response = self.client.get("/api/contact/admin/inquiries/", {"search": "ravi"})
        self.assertEqual(response.data["total_count"], 1)

    def test_list_date_range(self):
        old = self._inquiry()
        ContactInquiry.objects.using("default").filter(id=old.id).update(
            created_at=timezone.now() - timedelta(days=30),
        )
        recent = self._inquiry(name="Recent")
        today = timezone.localdate()

        self.client.force_authenticate(user=self.admin)
        response = self.client.get(
            "/api/contact/admin/inquiries/",
            {"date_start": (today - timedelta(days=1)).isoformat(), "date_end": today.isoformat()},
        )
        self.assertEqual([row["id"] for row in response.data["inquiries"]], [recent.id])

    def test_list_pagination(self):
        for index in range(3):
            self._inquiry(name=f"Person {index}")
        self.client.force_authenticate(user=self.admin)
        response = self.client.get("/api/contact/admin/inquiries/", {"limit": 2})
        self.assertEqual(len(response.data["inquiries"]), 2)
        self.assertTrue(response.data["has_more"])

    # ========== DETAIL TESTS ==========

    def test_detail_marks_pending_as_read(self):
        inquiry = self._inquiry()
        self.client.force_authenticate(user=self.admin)
        response = self.client.get(f"/api/contact/admin/inquiries/{inquiry.id}/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["status"], "READ")
        inquiry.refresh_from_db()
        self.assertEqual(inquiry.status, ContactInquiry.STATUS_READ)

    def test_detail_keeps_other_statuses(self):
        inquiry = self._inquiry(status=ContactInquiry.STATUS_IN_PROGRESS)
        self.client.force_authenticate(user=self.admin)
        response = self.client.get(f"/api/contact/admin/inquiries/{inquiry.id}/")
        self.assertEqual(response.data["status"], "IN_PROGRESS")

    def test_detail_missing_is_404(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.get("/api/contact/admin/inquiries/999999/")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["error"], "Inquiry not found")

    def test_delete(self):
        inquiry = self._inquiry()
        self.client.force_authenticate(user=self.admin)
        response = self.client.delete(f"/api/contact/admin/inquiries/{inquiry.id}/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["message"], "Inquiry deleted successfully")
        self.assertFalse(ContactInquiry.objects.using("default").filter(id=inquiry.id).exists())

    # ========== STATUS TESTS ==========

    def test_update_status(self):
        inquiry = self._inquiry()
        self.client.force_authenticate(user=self.admin)
        response = self.client.put(
            f"/api/contact/admin/inquiries/{inquiry.id}/status/",
            {"status": "IN_PROGRESS", "admin_notes": "Called back"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        inquiry.refresh_from_db()
        self.assertEqual(inquiry.status, ContactInquiry.STATUS_IN_PROGRESS)
        self.assertEqual(inquiry.admin_notes, "Called back")

    def test_update_status_invalid(self):
        inquiry = self._inquiry()
        self.client.force_authenticate(user=self.admin)
        response = self.client.put(
            f"/api/contact/admin/inquiries/{inquiry.id}/status/",
            {"status": "ARCHIVED"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "Invalid status")

    # ========== REPLY TESTS ==========

    def test_reply_sends_email_and_resolves(self):
        inquiry = self._inquiry(admin_notes="First call")
        self.client.force_authenticate(user=self.admin)
        response = self.client.post(
            f"/api/contact/admin/inquiries/{inquiry.id}/reply/",
            {"message": "The retreat is 45,000 INR."},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data["email_sent"])
        self.assertEqual(response.data["inquiry"]["replied_by"]["id"], self.admin.id)

        inquiry.refresh_from_db()
        self.assertEqual(inquiry.status, ContactInquiry.STATUS_RESOLVED)
        self.assertIsNotNone(inquiry.replied_at)
        self.assertTrue(inquiry.admin_notes.startswith("First call"))
        self.assertIn("The retreat is 45,000 INR.", inquiry.admin_notes)

        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].subject, "Re: Pricing")
        self.assertIn("Priya Admin", mail.outbox[0].body)

    def test_reply_without_email(self):
        inquiry = self._inquiry()
        self.client.force_authenticate(user=self.admin)
        response = self.client.post(
            f"/api/contact/admin/inquiries/{inquiry.id}/reply/",
            {"message": "Noted.", "send_email": False},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(response.data["email_sent"])
        self.assertEqual(len(mail.outbox), 0)

    def test_reply_mail_failure_is_500_but_saved(self):
        inquiry = self._inquiry()
        self.client.force_authenticate(user=self.admin)
        with patch(
            "wellness_backend.inquiries.views.send_inquiry_reply",
            side_effect=OSError("smtp down"),
        ):
            response = self.client.post(
                f"/api/contact/admin/inquiries/{inquiry.id}/reply/",
                {"message": "Hello"},
                format="json",
            )
        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data["error"], "Reply saved but failed to send email")
        inquiry.refresh_from_db()
        self.assertEqual(inquiry.status, ContactInquiry.STATUS_RESOLVED)

    @override_settings(
        EMAIL_BACKEND="django.core.mail.backends.smtp.EmailBackend",
        EMAIL_HOST_USER="",
    )
    def test_reply_with_mail_unconfigured_is_saved_only(self):
        inquiry = self._inquiry()
        self.client.force_authenticate(user=self.admin)
        response = self.client.post(
            f"/api/contact/admin/inquiries/{inquiry.id}/reply/",
            {"message": "Hello"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(response.data["email_sent"])
        self.assertEqual(response.data["message"], "Reply saved successfully")

    def test_reply_requires_message(self):
        inquiry = self._inquiry()
        self.client.force_authenticate(user=self.admin)
        response = self.client.post(f"/api/contact/admin/inquiries/{inquiry.id}/reply/", {}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "Reply message is required")

    # ========== STATS TESTS ==========

    def test_stats(self):
        self._inquiry()
        self._inquiry(type=ContactInquiry.TYPE_COMPLAINT, status=ContactInquiry.STATUS_CLOSED)
        old = self._inquiry()
        ContactInquiry.objects.using("default").filter(id=old.id).update(
            created_at=timezone.now() - timedelta(days=40),
        )

        self.client.force_authenticate(user=self.admin)
        response = self.client.get("/api/contact/admin/stats/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["total_inquiries"], 3)
        self.assertEqual(response.data["pending_inquiries"], 2)
        self.assertEqual(response.data["today_inquiries"], 2)
        self.assertEqual(response.data["month_inquiries"], 2)
        self.assertEqual(response.data["inquiries_by_type"], {"GENERAL": 2, "COMPLAINT": 1})
        self.assertEqual(response.data["inquiries_by_status"], {"PENDING": 2, "CLOSED": 1})
