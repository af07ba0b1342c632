from decimal import Decimal

from django.db import transaction

from wellness_backend.core.utils import unique_slug

from .models import Practitioner, Program, Service, Testimonial

SERVICES = [
    {
        "title": "Mindful Detox Therapy",
        "category": Service.CATEGORY_MIND,
        "description": "Guided meditation and counselling to clear mental clutter.",
        "price": Decimal("2500.00"),
        "duration": 1,
        "featured": True,
        "benefits": ["Reduced stress", "Better sleep", "Improved focus"],
        "prerequisites": ["Comfortable clothing"],
    },
    {
        "title": "Stress Release Counselling",
        "category": Service.CATEGORY_MIND,
        "description": "One-to-one sessions to understand and manage stress triggers.",
        "price": Decimal("1800.00"),
        "duration": 1,
        "featured": False,
        "benefits": ["Coping strategies", "Emotional balance"],
        "prerequisites": [],
    },
    {
        "title": "Full Body Detox",
        "category": Service.CATEGORY_BODY,
        "description": "Ayurvedic cleansing with diet, massage and herbal therapy.",
        "price": Decimal("4500.00"),
        "duration": 7,
        "featured": True,
        "benefits": ["Improved digestion", "More energy", "Clearer skin"],
        "prerequisites": ["Doctor consultation", "Light diet the day before"],
    },
    {
        "title": "Panchakarma Cleanse",
        "category": Service.CATEGORY_BODY,
        "description": "Traditional five-step purification programme.",
        "price": Decimal("12000.00"),
        "duration": 14,
        "featured": False,
        "benefits": ["Deep cleansing", "Rejuvenation"],
        "prerequisites": ["Medical history review"],
    },
]

PRACTITIONERS = [
    {
        "name": "Ananya Rao",
        "title": "Dr",
        "specialization": "Ayurvedic Medicine",
        "qualifications": "BAMS, MD (Ayurveda)",
        "experience_in_years": 12,
        "languages": ["English", "Hindi", "Kannada"],
        "certifications": ["Panchakarma Specialist"],
        "expertise": ["Detoxification", "Digestive health"],
        "email": "ananya.rao@detoxwellness.in",
        "phone": "+91 98450 11111",
        "consultation_fee": Decimal("800.00"),
        "services": ["Full Body Detox", "Panchakarma Cleanse"],
    },
    {
        "name": "Vikram Mehta",
        "title": "Dr",
        "specialization": "Clinical Psychology",
        "qualifications": "PhD Psychology",
        "experience_in_years": 9,
        "languages": ["English", "Hindi"],
        "certifications": ["CBT Practitioner"],
        "expertise": ["Stress management", "Mindfulness"],
        "email": "vikram.mehta@detoxwellness.in",
        "phone": "+91 98450 22222",
        "consultation_fee": Decimal("1000.00"),
        "services": ["Mindful Detox Therapy", "Stress Release Counselling"],
    },
    {
        "name": "Meera Iyer",
        "title": "Ms",
        "specialization": "Yoga Therapy",
        "qualifications": "MSc Yoga Therapy",
        "experience_in_years": 6,
        "languages": ["English", "Tamil"],
        "certifications": ["RYT 500"],
        "expertise": ["Breathwork", "Therapeutic yoga"],
        "email": "meera.iyer@detoxwellness.in",
        "phone": "+91 98450 33333",
        "consultation_fee": Decimal("600.00"),
        "services": ["Mindful Detox Therapy", "Full Body Detox"],
    },
]

PROGRAMS = [
    {
        "name": "Single Detox Session",
        "type": Program.TYPE_BASIC,
        "session_count": 1,
        "duration": "1 session",
        "price": Decimal("2500.00"),
        "service": "Mindful Detox Therapy",
        "featured": True,
        "inclusions": ["Consultation", "Guided session"],
    },
    {
        "name": "Four Week Reset",
        "type": Program.TYPE_EXTENDED,
        "session_count": 4,
        "duration": "4 to 8 weeks",
        "price": Decimal("9000.00"),
        "service": "Full Body Detox",
        "featured": True,
        "inclusions": ["4 sessions", "Diet plan", "Progress review"],
    },
    {
        "name": "Residential Retreat",
        "type": Program.TYPE_RESIDENTIAL,
        "session_count": 0,
        "duration": "21 days",
        "price": Decimal("85000.00"),
        "service": "Panchakarma Cleanse",
        "featured": False,
        "inclusions": ["Accommodation", "All meals", "Daily therapy"],
    },
]

TESTIMONIALS = [
    ("Rahul S.", 34, "Bengaluru", 5, "Full Body Detox", "I feel lighter and more energetic than I have in years."),
    ("Priya K.", 41, "Mumbai", 5, "Mindful Detox Therapy", "The sessions helped me sleep properly again."),
    ("Arjun N.", 29, "Chennai", 4, "Stress Release Counselling", "Practical advice that I still use every day."),
    ("Sneha P.", 52, "Pune", 4, "Panchakarma Cleanse", "A calm place and a very caring team."),
]


def seed_catalog(flush: bool = False) -> dict:
    stats: dict[str, int] = {}

    with transaction.atomic():
        if flush:
            Testimonial.objects.all().delete()
            Program.objects.all().delete()
            Practitioner.objects.all().delete()
            Service.objects.all().delete()

        services = {}
        for data in SERVICES:
            defaults = dict(data, slug=unique_slug(Service, data["title"]))
            service, _ = Service.objects.get_or_create(title=data["title"], defaults=defaults)
            services[service.title] = service
        stats["catalog_services"] = len(services)

        practitioners = []
        for data in PRACTITIONERS:
            data = dict(data)
            service_titles = data.pop("services")
            data["slug"] = unique_slug(Practitioner, data["name"])
            practitioner, created = Practitioner.objects.get_or_create(email=data["email"], defaults=data)
            if created:
                practitioner.services.set([services[title] for title in service_titles])
            practitioners.append(practitioner)
        stats["catalog_practitioners"] = len(practitioners)

        programs = []
        for data in PROGRAMS:
            data = dict(data)
            data["service"] = services[data["service"]]
            data["slug"] = unique_slug(Program, data["name"])
            data.setdefault("description", f"{data['name']} at Detox Wellness.")
            program, _ = Program.objects.get_or_create(name=data["name"], defaults=data)
            programs.append(program)
        stats["catalog_programs"] = len(programs)

        created_testimonials = 0
        for patient_name, age, location, rating, service_title, content in TESTIMONIALS:
            _, created = Testimonial.objects.get_or_create(
                patient_name=patient_name,
                content=content,
                defaults={
                    "age": age,
                    "location": location,
                    "rating": rating,
                    "service": services[service_title],
                    "featured": rating == 5,
                },
            )
            created_testimonials += int(created)
        stats["catalog_testimonials"] = created_testimonials

    return stats
