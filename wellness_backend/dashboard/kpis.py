"""
KPI calculations for the admin dashboard.

Each function runs its own queries; the figures are not read in one
transaction and are not cached.
"""
from datetime import date, timedelta
from decimal import Decimal
from typing import Any

from django.db.models import Count, Sum
from django.utils import timezone

from wellness_backend.appointments.models import Appointment
from wellness_backend.catalog.models import Practitioner, Service


def get_date_ranges(today: date | None = None) -> dict[str, tuple[date, date]]:
    """Inclusive date ranges in the current timezone."""
    today = today or timezone.localdate()

    # This week (Monday to Sunday)
    week_start = today - timedelta(days=today.weekday())
    week_end = week_start + timedelta(days=6)

    # This month
    month_start = today.replace(day=1)
    next_month = (month_start + timedelta(days=32)).replace(day=1)
    month_end = next_month - timedelta(days=1)

    return {
        'today': (today, today),
        'week': (week_start, week_end),
        'month': (month_start, month_end),
    }


def get_today_appointments(ranges) -> int:
    start, end = ranges['today']
    return Appointment.objects.using('default').filter(appointment_date__range=(start, end)).count()


def get_weekly_revenue(ranges) -> Decimal:
    """Program prices of this week's COMPLETED appointments."""
    start, end = ranges['week']
    total = Appointment.objects.using('default').filter(
        status=Appointment.STATUS_COMPLETED,
        appointment_date__range=(start, end),
    ).aggregate(total=Sum('program__price'))['total']
    return total or Decimal('0')


def get_total_patients() -> int:
    """Distinct patient emails; bookings without an email are not counted."""
    return (
        Appointment.objects.using('default')
        .exclude(patient_email__isnull=True)
        .exclude(patient_email='')
        .values('patient_email')
        .distinct()
        .count()
    )


def get_active_specialists() -> int:
    return Practitioner.objects.using('default').filter(status=Practitioner.STATUS_ACTIVE).count()


def get_status_counts(ranges) -> dict[str, int]:
    qs = Appointment.objects.using('default')
    month_start, month_end = ranges['month']
    return {
        'pending_appointments': qs.filter(status=Appointment.STATUS_PENDING).count(),
        'completed_appointments': qs.filter(
            status=Appointment.STATUS_COMPLETED,
            appointment_date__range=(month_start, month_end),
        ).count(),
    }


def get_popular_services(limit: int = 5) -> list[dict[str, Any]]:
    rows = (
        Appointment.objects.using('default')
        .exclude(service__isnull=True)
        .values('service_id')
        .annotate(appointment_count=Count('id'))
        .order_by('-appointment_count', 'service_id')[:limit]
    )
    rows = list(rows)
    titles = dict(
        Service.objects.using('default')
        .filter(pk__in=[row['service_id'] for row in rows])
        .values_list('pk', 'title')
    )
    return [
        {
            'service_id': row['service_id'],
            'service_name': titles.get(row['service_id'], 'Unknown'),
            'appointment_count': row['appointment_count'],
        }
        for row in rows
    ]


def get_recent_appointments(limit: int = 10) -> list[dict[str, Any]]:
    qs = (
        Appointment.objects.using('default')
        .select_related('service', 'program', 'practitioner')
        .order_by('-created_at', '-id')[:limit]
    )
    return [
        {
            'id': appt.pk,
            'patient_name': appt.patient_name,
            'appointment_date': appt.appointment_date.isoformat(),
            'status': appt.status,
            'service': appt.service.title if appt.service else None,
            'program': appt.program.name if appt.program else None,
            'practitioner': appt.practitioner.display_name if appt.practitioner else None,
        }
        for appt in qs
    ]


def get_dashboard_stats(today: date | None = None) -> dict[str, Any]:
    ranges = get_date_ranges(today)
    stats = {
        'today_appointments': get_today_appointments(ranges),
        'weekly_revenue': get_weekly_revenue(ranges),
        'total_patients': get_total_patients(),
        'active_specialists': get_active_specialists(),
    }
    stats.update(get_status_counts(ranges))
    stats['popular_services'] = get_popular_services()
    stats['recent_appointments'] = get_recent_appointments()
    return stats
