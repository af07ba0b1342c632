from django.contrib import admin

from .models import Practitioner, Program, Service, Testimonial


@admin.register(Service)
class ServiceAdmin(admin.ModelAdmin):
    list_display = ("title", "category", "price", "featured", "status", "created_at")
    list_filter = ("category", "status", "featured")
    search_fields = ("title", "description")
    prepopulated_fields = {"slug": ("title",)}


@admin.register(Practitioner)
class PractitionerAdmin(admin.ModelAdmin):
    list_display = ("name", "title", "specialization", "email", "status")
    list_filter = ("status",)
    search_fields = ("name", "email", "specialization")
    filter_horizontal = ("services",)
    prepopulated_fields = {"slug": ("name",)}


@admin.register(Program)
class ProgramAdmin(admin.ModelAdmin):
    list_display = ("name", "type", "session_count", "price", "service", "status")
    list_filter = ("type", "status", "featured")
    search_fields = ("name", "description")
    prepopulated_fields = {"slug": ("name",)}


@admin.register(Testimonial)
class TestimonialAdmin(admin.ModelAdmin):
    list_display = ("patient_name", "rating", "service", "featured", "status", "created_at")
    list_filter = ("rating", "status", "featured")
    search_fields = ("patient_name", "content", "location")
