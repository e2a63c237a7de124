from django.contrib import admin

from .models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ("channel", "recipient", "title", "is_sent", "created_at")
    list_filter = ("channel", "is_sent")
    search_fields = ("recipient", "title")
    readonly_fields = ("context", "created_at")
