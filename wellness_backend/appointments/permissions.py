from wellness_backend.core.permissions import IsClinicAdmin


class AppointmentPermission(IsClinicAdmin):
	"""Anyone may book (POST); listing and managing bookings is admin-only."""

	def has_permission(self, request, view):
		if request.method == 'POST':
			return True
		return super().has_permission(request, view)
