import django.core.validators
import django.db.models.deletion
from decimal import Decimal

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="AvailabilityRule",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("content_id", models.CharField(db_index=True, max_length=64)),
                (
                    "day_of_week",
                    models.PositiveSmallIntegerField(
                        choices=[
                            (0, "Monday"),
                            (1, "Tuesday"),
                            (2, "Wednesday"),
                            (3, "Thursday"),
                            (4, "Friday"),
                            (5, "Saturday"),
                            (6, "Sunday"),
                        ],
                        validators=[
                            django.core.validators.MinValueValidator(0),
                            django.core.validators.MaxValueValidator(6),
                        ],
                    ),
                ),
                ("start_time", models.TimeField()),
                ("end_time", models.TimeField()),
                ("max_capacity", models.PositiveIntegerField(help_text="Total party size a single slot accepts.")),
                ("price", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=10)),
                ("currency", models.CharField(default="EUR", max_length=3)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Availability rule",
                "verbose_name_plural": "Availability rules",
                "db_table": "availability_rules",
                "ordering": ["content_id", "day_of_week", "start_time", "id"],
                "indexes": [
                    models.Index(
                        fields=["content_id", "day_of_week", "is_active"],
                        name="availability_rule_lookup_idx",
                    )
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("start_time__lt", models.F("end_time"))),
                        name="availability_rule_valid_window",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("day_of_week__gte", 0), ("day_of_week__lte", 6)),
                        name="availability_rule_valid_weekday",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="AvailabilityException",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("date", models.DateField()),
                ("is_available", models.BooleanField(default=False)),
                ("custom_price", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("custom_capacity", models.PositiveIntegerField(blank=True, null=True)),
                ("reason", models.CharField(blank=True, max_length=255)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "rule",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="exceptions",
                        to="availability.availabilityrule",
                    ),
                ),
            ],
            options={
                "verbose_name": "Availability exception",
                "verbose_name_plural": "Availability exceptions",
                "db_table": "availability_exceptions",
                "ordering": ["date"],
                "constraints": [
                    models.UniqueConstraint(fields=("rule", "date"), name="availability_exception_unique_date"),
                ],
            },
        ),
    ]
