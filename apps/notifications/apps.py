from django.apps import AppConfig


class NotificationsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.notifications"

    def ready(self) -> None:
        from shared.application.message_bus import message_bus
        from apps.waitlist.domain.events import WaitlistAdmitted

        from .handlers import on_waitlist_admitted

        message_bus.register_event_handler(WaitlistAdmitted, on_waitlist_admitted)
