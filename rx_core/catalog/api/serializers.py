from rest_framework import serializers

from rx_core.catalog.models import Medicine


class MedicineSerializer(serializers.ModelSerializer):
    class Meta:
        model = Medicine
        fields = ["id", "name", "strength", "form", "is_active"]
        read_only_fields = fields
