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
            name="WaitlistEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("content_id", models.CharField(max_length=64)),
                ("preferred_date", models.DateField()),
                ("preferred_time", models.TimeField()),
                ("party_size", models.PositiveIntegerField(default=1)),
                ("position", models.PositiveIntegerField(help_text="1-based place in the slot's queue (max existing + 1).")),
                ("contact_email", models.EmailField(blank=True, max_length=254)),
                ("contact_phone", models.CharField(blank=True, max_length=32)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="waitlist_entries",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Waitlist entry",
                "verbose_name_plural": "Waitlist entries",
                "db_table": "waitlist",
                "ordering": ["content_id", "preferred_date", "preferred_time", "position"],
                "indexes": [
                    models.Index(
                        fields=["content_id", "preferred_date", "preferred_time", "position"],
                        name="waitlist_slot_queue_idx",
                    ),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("user", "content_id", "preferred_date", "preferred_time"),
                        name="waitlist_unique_user_slot",
                    ),
                    models.UniqueConstraint(
                        fields=("content_id", "preferred_date", "preferred_time", "position"),
                        name="waitlist_unique_slot_position",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("party_size__gte", 1)),
                        name="waitlist_positive_party",
                    ),
                ],
            },
        ),
    ]
