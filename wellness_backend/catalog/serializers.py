"""Serializers for the catalog app.

Read serializers nest the related records the public site renders; write
serializers accept JSON or multipart (admin forms with image uploads).
"""

from django.conf import settings

from rest_framework import serializers

from wellness_backend.appointments import rules
from wellness_backend.core.fields import FlexibleJSONField, FlexibleListField
from wellness_backend.core.utils import unique_slug
from wellness_backend.uploads import storage

from .models import Practitioner, Program, Service, Testimonial


# -----------------------------------------------------------------------------
# Nested (compact) serializers
# -----------------------------------------------------------------------------


class ServiceBriefSerializer(serializers.ModelSerializer):
    class Meta:
        model = Service
        fields = ['id', 'title', 'slug', 'category']
        read_only_fields = fields


class PractitionerBriefSerializer(serializers.ModelSerializer):
    class Meta:
        model = Practitioner
        fields = ['id', 'name', 'slug', 'title', 'specialization', 'experience_in_years', 'photo']
        read_only_fields = fields


class ProgramBriefSerializer(serializers.ModelSerializer):
    class Meta:
        model = Program
        fields = ['id', 'name', 'slug', 'type', 'session_count', 'duration', 'price', 'featured']
        read_only_fields = fields


# -----------------------------------------------------------------------------
# Write base
# -----------------------------------------------------------------------------


class CatalogWriteSerializer(serializers.ModelSerializer):
    """Slug generation and stored-image handling shared by catalog writes.

    Subclasses set:
    - slug_source: model field the slug is derived from (None: no slug)
    - image_field: name of both the upload field and the model path field
    - image_directory: upload sub-directory
    - image_max_bytes_setting: settings name of the size limit
    """

    slug_source = None
    image_field = None
    image_directory = 'images'
    image_max_bytes_setting = 'CATALOG_IMAGE_MAX_BYTES'

    def validate(self, attrs):
        upload = attrs.get(self.image_field) if self.image_field else None
        if upload is not None:
            storage.validate_upload(
                upload,
                allowed_types=storage.IMAGE_TYPES,
                max_bytes=getattr(settings, self.image_max_bytes_setting),
                field=self.image_field,
            )
        return attrs

    def _store_image(self, validated_data):
        if not self.image_field:
            return None
        upload = validated_data.pop(self.image_field, None)
        if upload is None:
            return None
        stored = storage.save_upload(upload, self.image_directory)
        validated_data[self.image_field] = stored.path
        return stored

    def create(self, validated_data):
        if self.slug_source:
            validated_data['slug'] = unique_slug(self.Meta.model, validated_data[self.slug_source])
        stored = self._store_image(validated_data)
        try:
            return super().create(validated_data)
        except Exception:
            if stored is not None:
                storage.delete_upload(stored.path)
            raise

    def update(self, instance, validated_data):
        if self.slug_source and self.slug_source in validated_data:
            if validated_data[self.slug_source] != getattr(instance, self.slug_source):
                validated_data['slug'] = unique_slug(
                    self.Meta.model,
                    validated_data[self.slug_source],
                    instance=instance,
                )
        old_path = getattr(instance, self.image_field) if self.image_field else None
        stored = self._store_image(validated_data)
        try:
            instance = super().update(instance, validated_data)
        except Exception:
            if stored is not None:
                storage.delete_upload(stored.path)
            raise
        if stored is not None and old_path:
            storage.delete_upload(old_path)
        return instance


# -----------------------------------------------------------------------------
# Service
# -----------------------------------------------------------------------------


class ServiceSerializer(serializers.ModelSerializer):
    """Read serializer with the service's active practitioners."""

    practitioners = serializers.SerializerMethodField()

    class Meta:
        model = Service
        fields = [
            'id',
            'title',
            'slug',
            'description',
            'category',
            'price',
            'duration',
            'featured',
            'status',
            'image',
            'benefits',
            'prerequisites',
            'practitioners',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_practitioners(self, obj):
        active = [p for p in obj.practitioners.all() if p.status == Practitioner.STATUS_ACTIVE]
        return PractitionerBriefSerializer(active, many=True).data


class ServiceDetailSerializer(ServiceSerializer):
    programs = serializers.SerializerMethodField()

    class Meta(ServiceSerializer.Meta):
        fields = ServiceSerializer.Meta.fields + ['programs']
        read_only_fields = fields

    def get_programs(self, obj):
        active = [p for p in obj.programs.all() if p.status == Program.STATUS_ACTIVE]
        return ProgramBriefSerializer(active, many=True).data


class ServiceWriteSerializer(CatalogWriteSerializer):
    slug_source = 'title'
    image_field = 'image'
    image_directory = 'services'

    image = serializers.FileField(write_only=True, required=False)
    benefits = FlexibleListField()
    prerequisites = FlexibleListField()

    class Meta:
        model = Service
        fields = [
            'title',
            'description',
            'category',
            'price',
            'duration',
            'featured',
            'status',
            'image',
            'benefits',
            'prerequisites',
        ]


# -----------------------------------------------------------------------------
# Practitioner
# -----------------------------------------------------------------------------


class PractitionerSerializer(serializers.ModelSerializer):
    services = ServiceBriefSerializer(many=True, read_only=True)
    display_name = serializers.CharField(read_only=True)

    class Meta:
        model = Practitioner
        fields = [
            'id',
            'name',
            'slug',
            'title',
            'display_name',
            'specialization',
            'qualifications',
            'experience_in_years',
            'languages',
            'certifications',
            'expertise',
            'email',
            'phone',
            'bio',
            'consultation_fee',
            'photo',
            'status',
            'services',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class PractitionerWriteSerializer(CatalogWriteSerializer):
    slug_source = 'name'
    image_field = 'photo'
    image_directory = 'practitioners'
    image_max_bytes_setting = 'PRACTITIONER_PHOTO_MAX_BYTES'

    photo = serializers.FileField(write_only=True, required=False)
    languages = FlexibleListField()
    certifications = FlexibleListField()
    expertise = FlexibleListField()
    services = FlexibleListField(child=serializers.IntegerField())

    class Meta:
        model = Practitioner
        fields = [
            'name',
            'title',
            'specialization',
            'qualifications',
            'experience_in_years',
            'languages',
            'certifications',
            'expertise',
            'email',
            'phone',
            'bio',
            'consultation_fee',
            'photo',
            'status',
            'services',
        ]

    def validate_services(self, value):
        ids = set(value)
        found = list(Service.objects.using('default').filter(pk__in=ids))
        if len(found) != len(ids):
            raise serializers.ValidationError('Invalid service ID')
        return found


# -----------------------------------------------------------------------------
# Program
# -----------------------------------------------------------------------------


class ProgramSerializer(serializers.ModelSerializer):
    service = ServiceBriefSerializer(read_only=True)
    enrollment_count = serializers.SerializerMethodField()

    class Meta:
        model = Program
        fields = [
            'id',
            'name',
            'slug',
            'description',
            'type',
            'session_count',
            'duration',
            'price',
            'max_participants',
            'service',
            'featured',
            'status',
            'image',
            'inclusions',
            'schedule',
            'requirements',
            'enrollment_count',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_enrollment_count(self, obj):
        annotated = getattr(obj, 'enrollment_count', None)
        if annotated is not None:
            return annotated
        return obj.appointments.count()


class RecentAppointmentSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    patient_name = serializers.CharField()
    appointment_date = serializers.DateField()
    status = serializers.CharField()


class ProgramDetailSerializer(ProgramSerializer):
    recent_appointments = serializers.SerializerMethodField()

    class Meta(ProgramSerializer.Meta):
        fields = ProgramSerializer.Meta.fields + ['recent_appointments']
        read_only_fields = fields

    def get_recent_appointments(self, obj):
        recent = obj.appointments.order_by('-created_at', '-id')[:5]
        return RecentAppointmentSerializer(recent, many=True).data


class ProgramWriteSerializer(CatalogWriteSerializer):
    slug_source = 'name'
    image_field = 'image'
    image_directory = 'programs'

    image = serializers.FileField(write_only=True, required=False)
    service = serializers.PrimaryKeyRelatedField(
        queryset=Service.objects.using('default').all(),
        error_messages={
            'does_not_exist': 'Invalid service ID',
            'incorrect_type': 'Invalid service ID',
            'required': 'Service is required.',
        },
    )
    inclusions = FlexibleListField()
    requirements = FlexibleListField()
    schedule = FlexibleJSONField(required=False)

    class Meta:
        model = Program
        fields = [
            'name',
            'description',
            'type',
            'session_count',
            'duration',
            'price',
            'max_participants',
            'service',
            'featured',
            'status',
            'image',
            'inclusions',
            'schedule',
            'requirements',
        ]

    def validate_schedule(self, value):
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise serializers.ValidationError('Schedule must be a JSON object.')
        return value

    def validate(self, attrs):
        attrs = super().validate(attrs)
        program_type = attrs.get('type', getattr(self.instance, 'type', None))
        if program_type == Program.TYPE_BASIC:
            attrs['session_count'] = 1
        elif program_type == Program.TYPE_RESIDENTIAL:
            attrs['session_count'] = 0
        elif program_type == Program.TYPE_EXTENDED:
            count = attrs.get('session_count', getattr(self.instance, 'session_count', None))
            try:
                rules.plan_for(program_type, count)
            except ValueError:
                raise serializers.ValidationError(
                    {'session_count': ['An extended program needs at least 2 sessions.']}
                )
        return attrs


# -----------------------------------------------------------------------------
# Testimonial
# -----------------------------------------------------------------------------


class ProgramNameSerializer(serializers.ModelSerializer):
    class Meta:
        model = Program
        fields = ['id', 'name', 'slug']
        read_only_fields = fields


class TestimonialSerializer(serializers.ModelSerializer):
    service = ServiceBriefSerializer(read_only=True)
    program = ProgramNameSerializer(read_only=True)

    class Meta:
        model = Testimonial
        fields = [
            'id',
            'patient_name',
            'age',
            'location',
            'content',
            'rating',
            'service',
            'program',
            'featured',
            'status',
            'photo',
            'treatment_date',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class TestimonialWriteSerializer(CatalogWriteSerializer):
    image_field = 'photo'
    image_directory = 'testimonials'
    image_max_bytes_setting = 'TESTIMONIAL_PHOTO_MAX_BYTES'

    photo = serializers.FileField(write_only=True, required=False)
    rating = serializers.IntegerField(
        error_messages={
            'min_value': 'Rating must be between 1 and 5',
            'max_value': 'Rating must be between 1 and 5',
        },
        min_value=1,
        max_value=5,
    )
    service = serializers.PrimaryKeyRelatedField(
        queryset=Service.objects.using('default').all(),
        required=False,
        allow_null=True,
        error_messages={'does_not_exist': 'Invalid service ID', 'incorrect_type': 'Invalid service ID'},
    )
    program = serializers.PrimaryKeyRelatedField(
        queryset=Program.objects.using('default').all(),
        required=False,
        allow_null=True,
        error_messages={'does_not_exist': 'Invalid program ID', 'incorrect_type': 'Invalid program ID'},
    )

    class Meta:
        model = Testimonial
        fields = [
            'patient_name',
            'age',
            'location',
            'content',
            'rating',
            'service',
            'program',
            'featured',
            'status',
            'photo',
            'treatment_date',
        ]
