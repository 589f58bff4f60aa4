import decimal

import django.core.validators
import uuid6
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Car",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid6.uuid7, editable=False, primary_key=True, serialize=False
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("make", models.CharField(max_length=50)),
                ("model", models.CharField(max_length=50)),
                (
                    "year",
                    models.PositiveIntegerField(
                        validators=[django.core.validators.MinValueValidator(1900)]
                    ),
                ),
                (
                    "price",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=8,
                        validators=[
                            django.core.validators.MinValueValidator(decimal.Decimal("0")),
                            django.core.validators.MaxValueValidator(decimal.Decimal("3000")),
                        ],
                    ),
                ),
                ("mileage", models.PositiveIntegerField()),
                (
                    "fuel_type",
                    models.CharField(
                        choices=[
                            ("Gasoline", "Gasoline"),
                            ("Diesel", "Diesel"),
                            ("Electric", "Electric"),
                            ("Hybrid", "Hybrid"),
                            ("Other", "Other"),
                        ],
                        default="Gasoline",
                        max_length=20,
                    ),
                ),
                (
                    "transmission",
                    models.CharField(
                        choices=[("Manual", "Manual"), ("Automatic", "Automatic"), ("CVT", "CVT")],
                        default="Automatic",
                        max_length=20,
                    ),
                ),
                ("description", models.TextField(max_length=2000)),
                ("images", models.JSONField(default=list)),
                ("features", models.JSONField(blank=True, default=list)),
                ("is_available", models.BooleanField(default=True)),
            ],
            options={
                "db_table": "cars",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(
                        fields=["is_available", "-created_at"], name="cars_available_created_idx"
                    ),
                    models.Index(fields=["make"], name="cars_make_idx"),
                    models.Index(fields=["price"], name="cars_price_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(
                            ("price__gte", decimal.Decimal("0")),
                            ("price__lte", decimal.Decimal("3000")),
                        ),
                        name="cars_price_in_range",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("year__gte", 1900)), name="cars_year_min"
                    ),
                ],
            },
        ),
    ]
