import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

	initial = True

	dependencies = []

	operations = [
		migrations.CreateModel(
			name="Service",
			fields=[
				("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
				("title", models.CharField(max_length=200)),
				("slug", models.SlugField(max_length=220, unique=True)),
				("description", models.TextField()),
				("category", models.CharField(choices=[("MIND", "Mind"), ("BODY", "Body")], db_index=True, max_length=10)),
				("price", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
				("duration", models.PositiveIntegerField(blank=True, help_text="Duration in days", null=True)),
				("featured", models.BooleanField(default=False)),
				("status", models.CharField(choices=[("ACTIVE", "Active"), ("INACTIVE", "Inactive")], db_index=True, default="ACTIVE", max_length=10)),
				("image", models.CharField(blank=True, default="", max_length=255)),
				("benefits", models.JSONField(blank=True, default=list)),
				("prerequisites", models.JSONField(blank=True, default=list)),
				("created_at", models.DateTimeField(auto_now_add=True)),
				("updated_at", models.DateTimeField(auto_now=True)),
			],
			options={
				"ordering": ["-featured", "-created_at", "-id"],
			},
		),
		migrations.CreateModel(
			name="Program",
			fields=[
				("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
				("name", models.CharField(max_length=200)),
				("slug", models.SlugField(max_length=220, unique=True)),
				("description", models.TextField()),
				("type", models.CharField(choices=[("BASIC", "Basic"), ("EXTENDED", "Extended"), ("RESIDENTIAL", "Residential")], db_index=True, max_length=12)),
				("session_count", models.PositiveIntegerField(default=1)),
				("duration", models.CharField(blank=True, default="", max_length=100)),
				("price", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
				("max_participants", models.PositiveIntegerField(blank=True, null=True)),
				("featured", models.BooleanField(default=False)),
				("status", models.CharField(choices=[("ACTIVE", "Active"), ("INACTIVE", "Inactive")], db_index=True, default="ACTIVE", max_length=10)),
				("image", models.CharField(blank=True, default="", max_length=255)),
				("inclusions", models.JSONField(blank=True, default=list)),
				("schedule", models.JSONField(blank=True, default=dict)),
				("requirements", models.JSONField(blank=True, default=list)),
				("created_at", models.DateTimeField(auto_now_add=True)),
				("updated_at", models.DateTimeField(auto_now=True)),
				("service", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="programs", to="catalog.service")),
			],
			options={
				"ordering": ["-featured", "-created_at", "-id"],
			},
		),
		migrations.CreateModel(
			name="Practitioner",
			fields=[
				("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
				("name", models.CharField(max_length=150)),
				("slug", models.SlugField(max_length=170, unique=True)),
				("title", models.CharField(default="Dr", help_text="Dr, Mr, Ms, ...", max_length=20)),
				("specialization", models.CharField(max_length=200)),
				("qualifications", models.CharField(blank=True, default="", max_length=255)),
				("experience_in_years", models.PositiveIntegerField(default=0)),
				("languages", models.JSONField(blank=True, default=list)),
				("certifications", models.JSONField(blank=True, default=list)),
				("expertise", models.JSONField(blank=True, default=list)),
				("email", models.EmailField(max_length=254, unique=True)),
				("phone", models.CharField(blank=True, default="", max_length=30)),
				("bio", models.TextField(blank=True, default="")),
				("consultation_fee", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
				("photo", models.CharField(blank=True, default="", max_length=255)),
				("status", models.CharField(choices=[("ACTIVE", "Active"), ("BLOCKED", "Blocked")], db_index=True, default="ACTIVE", max_length=10)),
				("created_at", models.DateTimeField(auto_now_add=True)),
				("updated_at", models.DateTimeField(auto_now=True)),
				("services", models.ManyToManyField(blank=True, related_name="practitioners", to="catalog.service")),
			],
			options={
				"ordering": ["name", "id"],
			},
		),
		migrations.CreateModel(
			name="Testimonial",
			fields=[
				("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
				("patient_name", models.CharField(max_length=150)),
				("age", models.PositiveIntegerField(blank=True, null=True)),
				("location", models.CharField(blank=True, default="", max_length=150)),
				("content", models.TextField()),
				("rating", models.PositiveSmallIntegerField(validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(5)])),
				("featured", models.BooleanField(default=False)),
				("status", models.CharField(choices=[("ACTIVE", "Active"), ("INACTIVE", "Inactive")], db_index=True, default="ACTIVE", max_length=10)),
				("photo", models.CharField(blank=True, default="", max_length=255)),
				("treatment_date", models.DateField(blank=True, null=True)),
				("created_at", models.DateTimeField(auto_now_add=True)),
				("updated_at", models.DateTimeField(auto_now=True)),
				("program", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="testimonials", to="catalog.program")),
				("service", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="testimonials", to="catalog.service")),
			],
			options={
				"ordering": ["-featured", "-rating", "-created_at", "-id"],
			},
		),
	]
