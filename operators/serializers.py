"""
Serializers for the operator registry.
"""
from rest_framework import serializers
from .models import Operator


class OperatorSerializer(serializers.ModelSerializer):
    """Serializer for Operator records."""
    principal = serializers.CharField(source='principal.email', read_only=True)

    class Meta:
        model = Operator
        fields = ['name', 'principal', 'address', 'phone_number']


class OperatorPayloadSerializer(serializers.Serializer):
    """Payload for registering an operator."""
    name = serializers.CharField(max_length=255)
    address = serializers.CharField(max_length=255, required=False, allow_blank=True, default='')
    phone_number = serializers.CharField(max_length=32)
