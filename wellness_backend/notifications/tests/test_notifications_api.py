"""Tests for in-app notifications.

Tests cover:
- Listing own notifications with unread_only / limit / offset
- Marking one or all as read, deleting, clearing read ones
- Access to another user's notification is 403
- Admin broadcast (POST /system/) and stats
- notify_all_admins only reaches active admins
"""

from django.test import TestCase

from rest_framework import status
from rest_framework.test import APIClient

from wellness_backend.core.models import Role, User
from wellness_backend.notifications.models import Notification
from wellness_backend.notifications.utils import create_notification, notify_all_admins


class NotificationApiTest(TestCase):
    databases = {"default"}

    def setUp(self):
        self.role_admin, _ = Role.objects.using("default").get_or_create(
            name="admin",
            defaults={"label": "Admin"},
        )
        self.admin = User.objects.db_manager("default").create_user(
            email="admin_notif@example.com",
            password="SecurePass123!",
            name="Admin",
            role=self.role_admin,
        )
        self.staff = User.objects.db_manager("default").create_user(
            email="staff_notif@example.com",
            password="SecurePass123!",
            name="Staff",
        )

        self.unread = create_notification(self.admin, "New booking", "Someone booked")
        self.read = create_notification(self.admin, "Old news", "Already seen")
        self.read.read = True
        self.read.save()
        self.foreign = create_notification(self.staff, "Private", "Not for admin")

        self.client = APIClient()
        self.client.defaults["HTTP_HOST"] = "localhost"

    # ========== LIST TESTS ==========

    def test_list_requires_authentication(self):
        response = self.client.get("/api/notifications/")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_list_returns_only_own_notifications(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.get("/api/notifications/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        ids = {row["id"] for row in response.data["notifications"]}
        self.assertEqual(ids, {self.unread.id, self.read.id})
        self.assertEqual(response.data["unread_count"], 1)
        self.assertEqual(response.data["total_count"], 2)
        self.assertFalse(response.data["has_more"])

    def test_list_unread_only(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.get("/api/notifications/", {"unread_only": "true"})
        self.assertEqual([row["id"] for row in response.data["notifications"]], [self.unread.id])

    def test_list_pagination(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.get("/api/notifications/", {"limit": 1, "offset": 0})
        self.assertEqual(len(response.data["notifications"]), 1)
        self.assertTrue(response.data["has_more"])

    def test_unread_count(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.get("/api/notifications/unread-count/")
        self.assertEqual(response.data, {"unread_count": 1})

    # ========== UPDATE TESTS ==========

    def test_mark_read(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.put(f"/api/notifications/{self.unread.id}/read/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.unread.refresh_from_db()
        self.assertTrue(self.unread.read)
        self.assertIsNotNone(self.unread.read_at)

    def test_mark_read_of_other_users_notification_is_403(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.put(f"/api/notifications/{self.foreign.id}/read/")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data["error"], "Access denied")

    def test_mark_read_missing_is_404(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.put("/api/notifications/999999/read/")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["error"], "Notification not found")

    def test_mark_all_read(self):
        create_notification(self.admin, "Another", "Unread too")
        self.client.force_authenticate(user=self.admin)
        response = self.client.put("/api/notifications/mark-all-read/")
        self.assertEqual(response.data["updated_count"], 2)
        self.assertFalse(Notification.objects.using("default").filter(user=self.admin, read=False).exists())
        self.foreign.refresh_from_db()
        self.assertFalse(self.foreign.read)

    # ========== DELETE TESTS ==========

    def test_delete(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.delete(f"/api/notifications/{self.unread.id}/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(Notification.objects.using("default").filter(id=self.unread.id).exists())

    def test_delete_other_users_notification_is_403(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.delete(f"/api/notifications/{self.foreign.id}/")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertTrue(Notification.objects.using("default").filter(id=self.foreign.id).exists())

    def test_clear_read(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.delete("/api/notifications/clear-read/")
        self.assertEqual(response.data["deleted_count"], 1)
        self.assertFalse(Notification.objects.using("default").filter(id=self.read.id).exists())
        self.assertTrue(Notification.objects.using("default").filter(id=self.unread.id).exists())

    # ========== SYSTEM BROADCAST TESTS ==========

    def test_system_requires_admin(self):
        self.client.force_authenticate(user=self.staff)
        response = self.client.post(
            "/api/notifications/system/",
            {"title": "Hi", "message": "All", "send_to_all": True},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_system_send_to_all(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.post(
            "/api/notifications/system/",
            {"title": "Maintenance", "message": "Tonight", "type": "WARNING", "send_to_all": True},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["notification_count"], 2)
        self.assertTrue(
            Notification.objects.using("default").filter(
                user=self.staff,
                title="Maintenance",
                type=Notification.TYPE_WARNING,
                related_type="SYSTEM",
            ).exists()
        )

    def test_system_targeted(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.post(
            "/api/notifications/system/",
            {"title": "For you", "message": "Only staff", "target_user_ids": [self.staff.id]},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["notification_count"], 1)

    def test_system_without_recipients_is_400(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.post(
            "/api/notifications/system/",
            {"title": "Nobody", "message": "Lost"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "Either target_user_ids or send_to_all must be specified")

    # ========== STATS TESTS ==========

    def test_stats(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.get("/api/notifications/admin/stats/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["total_notifications"], 3)
        self.assertEqual(response.data["unread_notifications"], 2)
        self.assertEqual(response.data["notifications_by_type"], {"INFO": 3})
        self.assertEqual(response.data["admin_recipients"], 1)


class NotifyAllAdminsTest(TestCase):
    databases = {"default"}

    def test_only_active_admins_are_notified(self):
        role_admin, _ = Role.objects.using("default").get_or_create(name="admin", defaults={"label": "Admin"})
        role_super, _ = Role.objects.using("default").get_or_create(
            name="super_admin",
            defaults={"label": "Super Admin"},
        )
        admin = User.objects.db_manager("default").create_user(
            email="a@example.com", password="x12345", role=role_admin,
        )
        boss = User.objects.db_manager("default").create_user(
            email="b@example.com", password="x12345", role=role_super,
        )
        User.objects.db_manager("default").create_user(
            email="c@example.com", password="x12345", role=role_admin, is_active=False,
        )
        User.objects.db_manager("default").create_user(email="d@example.com", password="x12345")

        count = notify_all_admins("New inquiry", "From Jane", related_id=7, related_type="inquiry")

        self.assertEqual(count, 2)
        rows = Notification.objects.using("default").all()
        self.assertEqual({row.user_id for row in rows}, {admin.id, boss.id})
        self.assertTrue(all(row.related_id == "7" for row in rows))
