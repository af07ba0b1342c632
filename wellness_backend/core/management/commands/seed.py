"""
Detox Wellness seed command: reproducible sample data.

Usage:
    python manage.py seed           # seed every app
    python manage.py seed --flush   # delete sample data first, then rebuild

Superusers are never deleted.
"""

from django.core.management.base import BaseCommand
from django.db import transaction

from wellness_backend.appointments.seeders import seed_appointments
from wellness_backend.catalog.seeders import seed_catalog
from wellness_backend.core.seeders import seed_core
from wellness_backend.inquiries.seeders import seed_inquiries
from wellness_backend.notifications.seeders import seed_notifications


class Command(BaseCommand):
    help = "Seed database with sample data for Detox Wellness"

    def add_arguments(self, parser):
        parser.add_argument(
            "--flush",
            action="store_true",
            help="Delete existing sample data before seeding (superusers are kept).",
        )

    def handle(self, *args, **options):
        flush = options.get("flush", False)

        steps = [
            ("Core (Roles, Users)", seed_core),
            ("Catalog (Services, Practitioners, Programs, Testimonials)", seed_catalog),
            ("Appointments", seed_appointments),
            ("Contact inquiries", seed_inquiries),
            ("Notifications", seed_notifications),
        ]

        self.stdout.write("=" * 80)
        self.stdout.write("  Detox Wellness seed")
        self.stdout.write("=" * 80)

        try:
            with transaction.atomic():
                stats = {}
                for index, (label, seeder) in enumerate(steps, start=1):
                    self.stdout.write(f"\n[{index}/{len(steps)}] Seeding {label}...")
                    section = seeder(flush=flush)
                    stats.update(section)
                    self._print_stats(section)

                self.stdout.write("\n" + "=" * 80)
                self.stdout.write(self.style.SUCCESS("  Seeding finished"))
                self.stdout.write("=" * 80)
                self._print_summary(stats)

        except Exception as e:
            self.stderr.write(f"\nSeeding failed: {e}")
            raise

    def _print_stats(self, stats):
        for key, value in stats.items():
            self.stdout.write(f"  - {key}: {value}")

    def _print_summary(self, stats):
        self.stdout.write("\nRecords created:")
        for key, value in sorted(stats.items()):
            self.stdout.write(f"  - {key}: {value}")
