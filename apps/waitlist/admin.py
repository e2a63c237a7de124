from django.contrib import admin

from .models import WaitlistEntry


@admin.register(WaitlistEntry)
class WaitlistEntryAdmin(admin.ModelAdmin):
    list_display = ("content_id", "preferred_date", "preferred_time", "position", "user", "party_size")
    list_filter = ("preferred_date",)
    search_fields = ("content_id", "user__email", "contact_email")
    ordering = ("content_id", "preferred_date", "preferred_time", "position")
