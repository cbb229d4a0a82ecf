from django.apps import AppConfig


class DashboardConfig(AppConfig):
    name = "rx_core.dashboard"
