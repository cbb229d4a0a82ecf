from django.apps import AppConfig


class PadConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "rx_core.pad"
    verbose_name = "Prescription pad"
