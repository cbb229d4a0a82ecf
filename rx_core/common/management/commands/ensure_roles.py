# rx_core/common/management/commands/ensure_roles.py

from django.contrib.auth.models import Group
from django.core.management.base import BaseCommand

from rx_core.common.permissions import Role


class Command(BaseCommand):
    help = "Ensure the ADMIN / DOCTOR / DISPENSER role groups exist (idempotent)."

    def handle(self, *args, **options):
        created = 0
        for role in Role:
            _, was_created = Group.objects.get_or_create(name=role.value)
            created += 1 if was_created else 0

        self.stdout.write(self.style.SUCCESS(f"Roles ensured. Newly created: {created}"))
