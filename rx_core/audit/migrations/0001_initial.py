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
            name="AuditLog",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "action",
                    models.CharField(
                        choices=[
                            ("CREATE_PATIENT", "Create Patient"),
                            ("CREATE_PRESCRIPTION", "Create Prescription"),
                            ("UPDATE_PRESCRIPTION", "Update Prescription"),
                            ("FINALIZE_PRESCRIPTION", "Finalize Prescription"),
                            ("DISPENSE_PRESCRIPTION", "Dispense Prescription"),
                            ("GENERATE_PDF", "Generate Pdf"),
                            ("CREATE_USER", "Create User"),
                        ],
                        db_index=True,
                        max_length=32,
                    ),
                ),
                (
                    "resource_type",
                    models.CharField(
                        choices=[("PATIENT", "Patient"), ("PRESCRIPTION", "Prescription"), ("USER", "User")],
                        db_index=True,
                        max_length=32,
                    ),
                ),
                ("resource_id", models.CharField(db_index=True, max_length=64)),
                ("details", models.JSONField(blank=True, default=dict)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                (
                    "actor",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="audit_logs",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "audit_log",
                "indexes": [
                    models.Index(fields=["resource_type", "resource_id"], name="audit_log_res_type_id_idx"),
                    models.Index(fields=["actor", "created_at"], name="audit_log_actor_created_idx"),
                ],
            },
        ),
    ]
