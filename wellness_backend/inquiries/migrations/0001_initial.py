import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

	initial = True

	dependencies = [
		migrations.swappable_dependency(settings.AUTH_USER_MODEL),
	]

	operations = [
		migrations.CreateModel(
			name="ContactInquiry",
			fields=[
				("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
				("name", models.CharField(max_length=150)),
				("email", models.EmailField(max_length=254)),
				("phone", models.CharField(blank=True, default="", max_length=30)),
				("subject", models.CharField(blank=True, default="", max_length=200)),
				("message", models.TextField()),
				("type", models.CharField(choices=[("GENERAL", "General"), ("APPOINTMENT", "Appointment"), ("CONSULTATION", "Consultation"), ("COMPLAINT", "Complaint")], db_index=True, default="GENERAL", max_length=12)),
				("preferred_contact", models.CharField(choices=[("EMAIL", "Email"), ("PHONE", "Phone")], default="EMAIL", max_length=5)),
				("status", models.CharField(choices=[("PENDING", "Pending"), ("READ", "Read"), ("IN_PROGRESS", "In progress"), ("RESOLVED", "Resolved"), ("CLOSED", "Closed")], db_index=True, default="PENDING", max_length=12)),
				("admin_notes", models.TextField(blank=True, default="")),
				("replied_at", models.DateTimeField(blank=True, null=True)),
				("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
				("updated_at", models.DateTimeField(auto_now=True)),
				("replied_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="inquiry_replies", to=settings.AUTH_USER_MODEL)),
			],
			options={
				"verbose_name_plural": "contact inquiries",
				"ordering": ["-created_at", "-id"],
			},
		),
	]
