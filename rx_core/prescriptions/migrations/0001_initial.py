import uuid

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("catalog", "0001_initial"),
        ("patients", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Prescription",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("diagnosis", models.TextField()),
                ("recommendation", models.TextField()),
                ("notes", models.TextField(blank=True, default="")),
                (
                    "status",
                    models.CharField(
                        choices=[("DRAFT", "Draft"), ("FINAL", "Final")],
                        db_index=True,
                        default="DRAFT",
                        max_length=16,
                    ),
                ),
                ("issued_on", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ("dispensed_at", models.DateTimeField(blank=True, null=True)),
                (
                    "dispensed_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="prescriptions_dispensed",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "doctor",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="prescriptions_authored",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "patient",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="prescriptions",
                        to="patients.patient",
                    ),
                ),
            ],
            options={
                "db_table": "prescriptions_prescription",
                "indexes": [
                    models.Index(fields=["doctor", "issued_on"], name="rx_doctor_issued_idx"),
                    models.Index(fields=["status", "dispensed_at"], name="rx_status_dispensed_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("dispensed_at__isnull", True), ("status", "FINAL"), _connector="OR"),
                        name="ck_rx_dispensed_requires_final",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="PrescriptionItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("position", models.PositiveSmallIntegerField()),
                ("dosage", models.CharField(max_length=128)),
                ("frequency", models.CharField(max_length=128)),
                ("duration", models.CharField(max_length=128)),
                ("remarks", models.CharField(blank=True, default="", max_length=255)),
                (
                    "medicine",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="prescription_items",
                        to="catalog.medicine",
                    ),
                ),
                (
                    "prescription",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="prescriptions.prescription",
                    ),
                ),
            ],
            options={
                "db_table": "prescriptions_prescription_item",
                "ordering": ["position"],
                "constraints": [
                    models.UniqueConstraint(fields=("prescription", "position"), name="uq_rx_item_position")
                ],
            },
        ),
    ]
