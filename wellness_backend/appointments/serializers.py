"""Serializers for the appointments app.

``AppointmentBookingSerializer`` takes the public booking form with the
camelCase field names the booking client posts and applies the same rules
the wizard does (``rules.py``). The remaining serializers use snake_case.
"""

import logging
from datetime import date

from django.db import transaction
from django.utils import timezone

from rest_framework import serializers

from wellness_backend.catalog.models import Practitioner, Program, Service
from wellness_backend.core.fields import FlexibleJSONField
from wellness_backend.uploads import storage

from . import rules
from .models import Appointment

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Read
# -----------------------------------------------------------------------------


class AppointmentServiceSerializer(serializers.ModelSerializer):
	class Meta:
		model = Service
		fields = ['id', 'title', 'slug', 'category']
		read_only_fields = fields


class AppointmentPractitionerSerializer(serializers.ModelSerializer):
	class Meta:
		model = Practitioner
		fields = ['id', 'name', 'title', 'specialization']
		read_only_fields = fields


class AppointmentProgramSerializer(serializers.ModelSerializer):
	class Meta:
		model = Program
		fields = ['id', 'name', 'type', 'session_count', 'price']
		read_only_fields = fields


class AppointmentSerializer(serializers.ModelSerializer):
	service = AppointmentServiceSerializer(read_only=True)
	practitioner = AppointmentPractitionerSerializer(read_only=True)
	program = AppointmentProgramSerializer(read_only=True)
	session_dates = serializers.ListField(child=serializers.CharField(), read_only=True)

	class Meta:
		model = Appointment
		fields = [
			'id',
			'appointment_date',
			'consultation_type',
			'status',
			'patient_name',
			'patient_age',
			'patient_gender',
			'patient_mobile',
			'patient_email',
			'service',
			'practitioner',
			'program',
			'sessions',
			'session_dates',
			'residential_month',
			'residential_year',
			'medical_report',
			'admin_notes',
			'created_at',
			'updated_at',
		]
		read_only_fields = fields


class AppointmentUpdateSerializer(serializers.ModelSerializer):
	"""Admin PATCH: status and notes only."""

	class Meta:
		model = Appointment
		fields = ['status', 'admin_notes']


# -----------------------------------------------------------------------------
# Public booking
# -----------------------------------------------------------------------------


def _invalid(message):
	return {'does_not_exist': message, 'incorrect_type': message, 'required': message, 'null': message}


class AppointmentBookingSerializer(serializers.Serializer):
	consultationType = serializers.ChoiceField(
		choices=rules.CONSULTATION_TYPES,
		error_messages={
			'invalid_choice': 'Consultation type must be ONLINE or OFFLINE.',
			'required': 'Please select a consultation type.',
		},
	)
	serviceId = serializers.PrimaryKeyRelatedField(
		queryset=Service.objects.using('default').all(),
		error_messages=_invalid('Invalid service ID'),
	)
	practitionerId = serializers.PrimaryKeyRelatedField(
		queryset=Practitioner.objects.using('default').filter(status=Practitioner.STATUS_ACTIVE),
		error_messages=_invalid('Invalid practitioner ID'),
	)
	programId = serializers.PrimaryKeyRelatedField(
		queryset=Program.objects.using('default').all(),
		error_messages=_invalid('Invalid program ID'),
	)
	patientName = serializers.CharField(required=False, allow_blank=True)
	patientAge = serializers.CharField(required=False, allow_blank=True)
	patientGender = serializers.CharField(required=False, allow_blank=True)
	patientMobile = serializers.CharField(required=False, allow_blank=True)
	patientEmail = serializers.CharField(required=False, allow_blank=True, allow_null=True)
	sessions = FlexibleJSONField(required=False, allow_null=True)
	residentialMonth = serializers.IntegerField(required=False, allow_null=True)
	residentialYear = serializers.IntegerField(required=False, allow_null=True)
	medicalReport = serializers.FileField(required=False, allow_null=True)

	def validate(self, attrs):
		program = attrs['programId']
		try:
			plan = program.plan
		except ValueError:
			# unknown type tag or an EXTENDED program saved with too few sessions
			raise serializers.ValidationError({'programId': ['This program cannot be booked online.']})

		try:
			sessions = rules.decode_sessions(attrs.get('sessions'))
		except (TypeError, ValueError):
			raise serializers.ValidationError(
				{'sessions': ['Sessions must be a JSON array of {date, time} objects.']}
			)

		errors = rules.validate_schedule(
			plan,
			sessions,
			attrs.get('residentialMonth'),
			attrs.get('residentialYear'),
			today=timezone.localdate(),
		)

		report = attrs.get('medicalReport')
		errors.update(rules.validate_personal_details(
			patient_name=attrs.get('patientName'),
			patient_age=attrs.get('patientAge'),
			patient_gender=attrs.get('patientGender'),
			patient_mobile=attrs.get('patientMobile'),
			patient_email=attrs.get('patientEmail'),
			report_name=getattr(report, 'name', None),
			report_content_type=getattr(report, 'content_type', None),
			report_size=getattr(report, 'size', None),
			has_report=report is not None,
		))
		if errors:
			raise serializers.ValidationError({key: [message] for key, message in errors.items()})

		attrs['plan'] = plan
		attrs['session_slots'] = sessions
		return attrs

	def create(self, validated_data):
		plan = validated_data['plan']
		residential = not plan.needs_sessions
		slots = [] if residential else validated_data['session_slots']

		if residential:
			appointment_date = date(validated_data['residentialYear'], validated_data['residentialMonth'], 1)
		elif slots and slots[0].date:
			appointment_date = slots[0].date
		else:
			appointment_date = timezone.localdate()

		report_path = ''
		report = validated_data.get('medicalReport')
		if report is not None:
			report_path = storage.save_upload(report, 'documents', optimize=False).path

		try:
			with transaction.atomic(using='default'):
				appointment = Appointment.objects.using('default').create(
					appointment_date=appointment_date,
					consultation_type=validated_data['consultationType'],
					status=Appointment.STATUS_CONFIRMED,
					patient_name=validated_data['patientName'].strip(),
					patient_age=rules.parse_age(validated_data['patientAge']),
					patient_gender=validated_data['patientGender'].strip(),
					patient_mobile=validated_data['patientMobile'].strip(),
					patient_email=(validated_data.get('patientEmail') or '').strip() or None,
					service=validated_data['serviceId'],
					practitioner=validated_data['practitionerId'],
					program=validated_data['programId'],
					sessions=[slot.to_dict() for slot in slots],
					residential_month=validated_data.get('residentialMonth') if residential else None,
					residential_year=validated_data.get('residentialYear') if residential else None,
					medical_report=report_path,
				)
		except Exception:
			if report_path:
				storage.delete_upload(report_path)
			raise

		logger.info('Appointment %s booked for program_id=%s', appointment.pk, appointment.program_id)
		return appointment
