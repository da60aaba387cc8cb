from rest_framework import serializers
from .models import Rider


class RiderSerializer(serializers.ModelSerializer):
    class Meta:
        model = Rider
        fields = ['id', 'name', 'phone_number', 'email', 'tickets']
        read_only_fields = fields


class RiderPayloadSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    phone_number = serializers.CharField(max_length=32)
    email = serializers.EmailField(max_length=255)
