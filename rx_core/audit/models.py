# rx_core/audit/models.py
from django.conf import settings
from django.db import models


class AuditAction(models.TextChoices):
    CREATE_PATIENT = "CREATE_PATIENT"
    CREATE_PRESCRIPTION = "CREATE_PRESCRIPTION"
    UPDATE_PRESCRIPTION = "UPDATE_PRESCRIPTION"
    FINALIZE_PRESCRIPTION = "FINALIZE_PRESCRIPTION"
    DISPENSE_PRESCRIPTION = "DISPENSE_PRESCRIPTION"
    GENERATE_PDF = "GENERATE_PDF"
    CREATE_USER = "CREATE_USER"


class ResourceType(models.TextChoices):
    PATIENT = "PATIENT"
    PRESCRIPTION = "PRESCRIPTION"
    USER = "USER"


class AuditLogImmutable(Exception):
    """Raised on any attempt to change or remove an audit row."""


class AuditLogQuerySet(models.QuerySet):
    def update(self, **kwargs):
        raise AuditLogImmutable("Audit log rows cannot be updated.")

    def delete(self):
        raise AuditLogImmutable("Audit log rows cannot be deleted.")


class AuditLog(models.Model):
    """
    Append-only audit record: who did what to which resource, and when.
    """
    actor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="audit_logs",
    )
    action = models.CharField(max_length=32, choices=AuditAction.choices, db_index=True)
    resource_type = models.CharField(max_length=32, choices=ResourceType.choices, db_index=True)
    # int for users, UUID for patients/prescriptions
    resource_id = models.CharField(max_length=64, db_index=True)
    details = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    objects = AuditLogQuerySet.as_manager()

    class Meta:
        db_table = "audit_log"
        indexes = [
            models.Index(fields=["resource_type", "resource_id"], name="audit_log_res_type_id_idx"),
            models.Index(fields=["actor", "created_at"], name="audit_log_actor_created_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.action} {self.resource_type}:{self.resource_id}"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise AuditLogImmutable("Audit log rows cannot be updated.")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise AuditLogImmutable("Audit log rows cannot be deleted.")
