from django.contrib import admin

from .models import Appointment


@admin.register(Appointment)
class AppointmentAdmin(admin.ModelAdmin):
	list_display = ('id', 'patient_name', 'appointment_date', 'program', 'practitioner', 'status')
	list_filter = ('status', 'consultation_type', 'appointment_date')
	search_fields = ('patient_name', 'patient_mobile', 'patient_email')
	date_hierarchy = 'appointment_date'
	raw_id_fields = ('service', 'practitioner', 'program')
