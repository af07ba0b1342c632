from django.contrib import admin

from .models import ContactInquiry


@admin.register(ContactInquiry)
class ContactInquiryAdmin(admin.ModelAdmin):
    list_display = ("name", "email", "type", "status", "created_at", "replied_at")
    list_filter = ("type", "status", "preferred_contact")
    search_fields = ("name", "email", "subject", "message")
    readonly_fields = ("replied_at", "replied_by", "created_at", "updated_at")
