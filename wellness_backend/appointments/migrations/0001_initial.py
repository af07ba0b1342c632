import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

	initial = True

	dependencies = [
		("catalog", "0001_initial"),
	]

	operations = [
		migrations.CreateModel(
			name="Appointment",
			fields=[
				("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
				("appointment_date", models.DateField(db_index=True)),
				("consultation_type", models.CharField(choices=[("ONLINE", "Online"), ("OFFLINE", "Offline")], max_length=10)),
				("status", models.CharField(choices=[("PENDING", "Pending"), ("CONFIRMED", "Confirmed"), ("COMPLETED", "Completed"), ("CANCELLED", "Cancelled")], db_index=True, default="CONFIRMED", max_length=12)),
				("patient_name", models.CharField(max_length=150)),
				("patient_age", models.PositiveSmallIntegerField()),
				("patient_gender", models.CharField(max_length=20)),
				("patient_mobile", models.CharField(db_index=True, max_length=20)),
				("patient_email", models.EmailField(blank=True, max_length=254, null=True)),
				("sessions", models.JSONField(blank=True, default=list)),
				("residential_month", models.PositiveSmallIntegerField(blank=True, null=True)),
				("residential_year", models.PositiveSmallIntegerField(blank=True, null=True)),
				("medical_report", models.CharField(blank=True, default="", max_length=255)),
				("admin_notes", models.TextField(blank=True, default="")),
				("created_at", models.DateTimeField(auto_now_add=True)),
				("updated_at", models.DateTimeField(auto_now=True)),
				("practitioner", models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="appointments", to="catalog.practitioner")),
				("program", models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="appointments", to="catalog.program")),
				("service", models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="appointments", to="catalog.service")),
			],
			options={
				"ordering": ["-appointment_date", "-created_at", "-id"],
			},
		),
	]
