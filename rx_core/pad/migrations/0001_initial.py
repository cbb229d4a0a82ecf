import uuid

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
            name="RawPrescription",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("patient_name", models.CharField(blank=True, default="", max_length=255)),
                ("patient_age", models.CharField(blank=True, default="", max_length=32)),
                ("patient_gender", models.CharField(blank=True, default="", max_length=32)),
                ("patient_cnic", models.CharField(blank=True, default="", max_length=32)),
                ("patient_phone", models.CharField(blank=True, default="", max_length=32)),
                ("patient_address", models.TextField(blank=True, default="")),
                ("diagnosis", models.TextField(blank=True, default="")),
                ("tests", models.TextField(blank=True, default="")),
                ("recommendations", models.TextField(blank=True, default="")),
                (
                    "doctor",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="raw_prescriptions",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "pad_raw_prescription",
                "indexes": [models.Index(fields=["doctor", "created_at"], name="pad_raw_doctor_created_idx")],
            },
        ),
        migrations.CreateModel(
            name="RawPrescriptionMedicine",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("medicine_order", models.PositiveSmallIntegerField()),
                ("medicine_name", models.CharField(max_length=255)),
                ("frequency1", models.BooleanField(default=False)),
                ("frequency2", models.BooleanField(default=False)),
                ("frequency3", models.BooleanField(default=False)),
                (
                    "raw_prescription",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="medicines",
                        to="pad.rawprescription",
                    ),
                ),
            ],
            options={
                "db_table": "pad_raw_prescription_medicine",
                "ordering": ["medicine_order"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("raw_prescription", "medicine_order"), name="uq_pad_medicine_order"
                    )
                ],
            },
        ),
    ]
