import django.db.models.deletion
from decimal import Decimal

from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("finances", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="SlotReservation",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("slot_id", models.CharField(max_length=96, unique=True)),
                ("content_id", models.CharField(db_index=True, max_length=64)),
                ("date", models.DateField()),
                ("start_time", models.TimeField()),
                ("reserved", models.PositiveIntegerField(default=0)),
                ("version", models.PositiveIntegerField(default=0)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Slot reservation",
                "verbose_name_plural": "Slot reservations",
                "db_table": "slot_reservations",
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("reserved__gte", 0)),
                        name="slot_reservation_non_negative",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="RecurringBooking",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("content_id", models.CharField(db_index=True, max_length=64)),
                (
                    "pattern",
                    models.CharField(
                        choices=[("daily", "Daily"), ("weekly", "Weekly"), ("monthly", "Monthly")],
                        max_length=10,
                    ),
                ),
                ("start_date", models.DateField()),
                ("end_date", models.DateField()),
                ("start_time", models.TimeField()),
                ("end_time", models.TimeField()),
                ("frequency", models.PositiveSmallIntegerField(default=1)),
                ("max_occurrences", models.PositiveIntegerField(blank=True, null=True)),
                ("party_size", models.PositiveIntegerField(default=1)),
                ("special_requests", models.TextField(blank=True)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="recurring_bookings",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Recurring booking",
                "verbose_name_plural": "Recurring bookings",
                "db_table": "recurring_bookings",
                "ordering": ["-created_at"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("end_date__gte", models.F("start_date"))),
                        name="recurring_booking_valid_range",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("frequency__gte", 1)),
                        name="recurring_booking_positive_frequency",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="BookingRequest",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("content_id", models.CharField(db_index=True, max_length=64)),
                ("booking_slot_id", models.CharField(db_index=True, max_length=96)),
                ("date", models.DateField()),
                ("start_time", models.TimeField()),
                ("end_time", models.TimeField()),
                ("party_size", models.PositiveIntegerField(default=1)),
                ("total_price", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("currency", models.CharField(default="EUR", max_length=3)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("confirmed", "Confirmed"),
                            ("cancelled", "Cancelled"),
                            ("completed", "Completed"),
                            ("no_show", "No-show"),
                        ],
                        default="pending",
                        max_length=16,
                    ),
                ),
                ("special_requests", models.TextField(blank=True)),
                ("contact_name", models.CharField(blank=True, max_length=255)),
                ("contact_email", models.EmailField(blank=True, max_length=254)),
                ("contact_phone", models.CharField(blank=True, max_length=32)),
                ("payment_reference", models.CharField(blank=True, max_length=128)),
                ("cancellation_reason", models.CharField(blank=True, max_length=255)),
                ("confirmed_at", models.DateTimeField(blank=True, null=True)),
                ("cancelled_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "recurring_booking",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="bookings",
                        to="bookings.recurringbooking",
                    ),
                ),
                (
                    "transaction",
                    models.OneToOneField(
                        blank=True,
                        help_text="Payment transaction opened together with the booking.",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="booking_request",
                        to="finances.transaction",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="booking_requests",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Booking request",
                "verbose_name_plural": "Booking requests",
                "db_table": "booking_requests",
                "ordering": ["date", "start_time", "id"],
                "indexes": [
                    models.Index(fields=["booking_slot_id", "status"], name="booking_req_slot_status_idx"),
                    models.Index(fields=["content_id", "date"], name="booking_req_content_date_idx"),
                    models.Index(fields=["user", "status"], name="booking_req_user_status_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("party_size__gte", 1)),
                        name="booking_request_positive_party",
                    ),
                ],
            },
        ),
    ]
