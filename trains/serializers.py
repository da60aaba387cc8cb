"""
Serializers for the train catalog.
"""
from rest_framework import serializers
from .models import MAX_PRICE, MAX_SEATS, Train, parse_timestamp


class TrainSerializer(serializers.ModelSerializer):
    """Serializer for Train records."""

    class Meta:
        model = Train
        fields = [
            'id', 'operator', 'name', 'image',
            'departure_time', 'arrival_time', 'time_taken',
            'price', 'available_seats', 'booked_seats'
        ]
        read_only_fields = fields


class TrainPayloadSerializer(serializers.Serializer):
    """Payload for adding a train. ``operator`` defaults to the caller's operator."""
    name = serializers.CharField(max_length=255)
    operator = serializers.CharField(max_length=255, required=False)
    image = serializers.CharField(max_length=500, required=False, allow_blank=True, default='')
    departure_time = serializers.CharField(max_length=64)
    arrival_time = serializers.CharField(max_length=64)
    time_taken = serializers.CharField(max_length=64)
    price = serializers.IntegerField(min_value=0, max_value=MAX_PRICE)
    available_seats = serializers.IntegerField(min_value=0, max_value=MAX_SEATS)

    def validate_departure_time(self, value):
        if parse_timestamp(value) is None:
            raise serializers.ValidationError("Departure time must be an ISO-8601 timestamp.")
        return value
