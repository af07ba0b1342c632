from django.db import transaction

from .models import ContactInquiry

INQUIRIES = [
    ("Deepa Menon", "deepa.menon@example.com", "+91 90000 20001", "Programme details",
     "Could you share the schedule for the residential retreat?", ContactInquiry.TYPE_GENERAL,
     ContactInquiry.STATUS_PENDING),
    ("Farhan Ali", "farhan.ali@example.com", "", "Rescheduling",
     "I need to move my second session by a few days.", ContactInquiry.TYPE_APPOINTMENT,
     ContactInquiry.STATUS_READ),
    ("Lakshmi Pillai", "lakshmi.pillai@example.com", "+91 90000 20003", "Online consultation",
     "Is an online consultation possible before I book?", ContactInquiry.TYPE_CONSULTATION,
     ContactInquiry.STATUS_RESOLVED),
    ("Gaurav Shah", "gaurav.shah@example.com", "", "Waiting time",
     "I waited 40 minutes past my slot last week.", ContactInquiry.TYPE_COMPLAINT,
     ContactInquiry.STATUS_IN_PROGRESS),
]


def seed_inquiries(flush: bool = False) -> dict:
    with transaction.atomic():
        if flush:
            ContactInquiry.objects.all().delete()

        created = 0
        for name, email, phone, subject, message, inquiry_type, status in INQUIRIES:
            _, was_created = ContactInquiry.objects.get_or_create(
                email=email,
                subject=subject,
                defaults={
                    "name": name,
                    "phone": phone,
                    "message": message,
                    "type": inquiry_type,
                    "preferred_contact": ContactInquiry.CONTACT_PHONE if phone else ContactInquiry.CONTACT_EMAIL,
                    "status": status,
                },
            )
            created += int(was_created)

    return {"inquiries": created}
