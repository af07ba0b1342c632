"""Clinic catalog: services, practitioners, programs and testimonials.

Image fields store the public path returned by ``uploads.storage`` (for
example ``/uploads/services/1712-48213-spa.jpg``), not a FileField.
"""

from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from wellness_backend.appointments import rules


class Service(models.Model):
    """A treatment offered by the clinic, in one of two categories."""

    CATEGORY_MIND = rules.CATEGORY_MIND
    CATEGORY_BODY = rules.CATEGORY_BODY
    CATEGORY_CHOICES = (
        (CATEGORY_MIND, 'Mind'),
        (CATEGORY_BODY, 'Body'),
    )

    STATUS_ACTIVE = 'ACTIVE'
    STATUS_INACTIVE = 'INACTIVE'
    STATUS_CHOICES = (
        (STATUS_ACTIVE, 'Active'),
        (STATUS_INACTIVE, 'Inactive'),
    )

    title = models.CharField(max_length=200)
    slug = models.SlugField(max_length=220, unique=True)
    description = models.TextField()
    category = models.CharField(max_length=10, choices=CATEGORY_CHOICES, db_index=True)
    price = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    duration = models.PositiveIntegerField(null=True, blank=True, help_text='Duration in days')
    featured = models.BooleanField(default=False)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=STATUS_ACTIVE, db_index=True)
    image = models.CharField(max_length=255, blank=True, default='')
    benefits = models.JSONField(default=list, blank=True)
    prerequisites = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-featured', '-created_at', '-id']

    def __str__(self) -> str:
        return self.title


class Practitioner(models.Model):
    """A clinician patients can pick when booking."""

    STATUS_ACTIVE = 'ACTIVE'
    STATUS_BLOCKED = 'BLOCKED'
    STATUS_CHOICES = (
        (STATUS_ACTIVE, 'Active'),
        (STATUS_BLOCKED, 'Blocked'),
    )

    name = models.CharField(max_length=150)
    slug = models.SlugField(max_length=170, unique=True)
    title = models.CharField(max_length=20, default='Dr', help_text='Dr, Mr, Ms, ...')
    specialization = models.CharField(max_length=200)
    qualifications = models.CharField(max_length=255, blank=True, default='')
    experience_in_years = models.PositiveIntegerField(default=0)
    languages = models.JSONField(default=list, blank=True)
    certifications = models.JSONField(default=list, blank=True)
    expertise = models.JSONField(default=list, blank=True)
    email = models.EmailField(unique=True)
    phone = models.CharField(max_length=30, blank=True, default='')
    bio = models.TextField(blank=True, default='')
    consultation_fee = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    photo = models.CharField(max_length=255, blank=True, default='')
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=STATUS_ACTIVE, db_index=True)
    services = models.ManyToManyField(Service, related_name='practitioners', blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['name', 'id']

    def __str__(self) -> str:
        return self.display_name

    @property
    def display_name(self) -> str:
        return f'{self.title}. {self.name}' if self.title else self.name


class Program(models.Model):
    """A priced treatment package; its ``type`` decides how it is booked.

    - BASIC: one session
    - EXTENDED: ``session_count`` sessions, a week or two apart
    - RESIDENTIAL: booked by month and year
    """

    TYPE_BASIC = rules.PROGRAM_BASIC
    TYPE_EXTENDED = rules.PROGRAM_EXTENDED
    TYPE_RESIDENTIAL = rules.PROGRAM_RESIDENTIAL
    TYPE_CHOICES = (
        (TYPE_BASIC, 'Basic'),
        (TYPE_EXTENDED, 'Extended'),
        (TYPE_RESIDENTIAL, 'Residential'),
    )

    STATUS_ACTIVE = 'ACTIVE'
    STATUS_INACTIVE = 'INACTIVE'
    STATUS_CHOICES = (
        (STATUS_ACTIVE, 'Active'),
        (STATUS_INACTIVE, 'Inactive'),
    )

    name = models.CharField(max_length=200)
    slug = models.SlugField(max_length=220, unique=True)
    description = models.TextField()
    type = models.CharField(max_length=12, choices=TYPE_CHOICES, db_index=True)
    session_count = models.PositiveIntegerField(default=1)
    duration = models.CharField(max_length=100, blank=True, default='')
    price = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    max_participants = models.PositiveIntegerField(null=True, blank=True)
    service = models.ForeignKey(
        Service,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name='programs',
    )
    featured = models.BooleanField(default=False)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=STATUS_ACTIVE, db_index=True)
    image = models.CharField(max_length=255, blank=True, default='')
    inclusions = models.JSONField(default=list, blank=True)
    schedule = models.JSONField(default=dict, blank=True)
    requirements = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-featured', '-created_at', '-id']

    def __str__(self) -> str:
        return self.name

    def clean(self):
        super().clean()
        if self.type == self.TYPE_EXTENDED and (self.session_count or 0) < 2:
            raise ValidationError({'session_count': 'An extended program needs at least 2 sessions.'})

    @property
    def plan(self) -> rules.ProgramPlan:
        return rules.plan_for(self.type, self.session_count)


class Testimonial(models.Model):
    STATUS_ACTIVE = 'ACTIVE'
    STATUS_INACTIVE = 'INACTIVE'
    STATUS_CHOICES = (
        (STATUS_ACTIVE, 'Active'),
        (STATUS_INACTIVE, 'Inactive'),
    )

    patient_name = models.CharField(max_length=150)
    age = models.PositiveIntegerField(null=True, blank=True)
    location = models.CharField(max_length=150, blank=True, default='')
    content = models.TextField()
    rating = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(5)])
    service = models.ForeignKey(
        Service,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name='testimonials',
    )
    program = models.ForeignKey(
        Program,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name='testimonials',
    )
    featured = models.BooleanField(default=False)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=STATUS_ACTIVE, db_index=True)
    photo = models.CharField(max_length=255, blank=True, default='')
    treatment_date = models.DateField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-featured', '-rating', '-created_at', '-id']

    def __str__(self) -> str:
        return f'{self.patient_name} ({self.rating}/5)'
