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
			name="Notification",
			fields=[
				("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
				("title", models.CharField(max_length=200)),
				("message", models.TextField()),
				("type", models.CharField(choices=[("INFO", "Info"), ("SUCCESS", "Success"), ("WARNING", "Warning"), ("ERROR", "Error"), ("APPOINTMENT", "Appointment")], db_index=True, default="INFO", max_length=12)),
				("read", models.BooleanField(db_index=True, default=False)),
				("read_at", models.DateTimeField(blank=True, null=True)),
				("related_id", models.CharField(blank=True, default="", max_length=64)),
				("related_type", models.CharField(blank=True, default="", max_length=50)),
				("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
				("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="notifications", to=settings.AUTH_USER_MODEL)),
			],
			options={
				"ordering": ["-created_at", "-id"],
				"indexes": [models.Index(fields=["user", "read"], name="notification_user_read_idx")],
			},
		),
	]
