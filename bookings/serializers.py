"""
Serializers for the ticket ledger.
"""
from rest_framework import serializers

from trains.models import MAX_SEATS

from .models import Ticket


class TicketSerializer(serializers.ModelSerializer):
    """Serializer for Ticket records."""

    class Meta:
        model = Ticket
        fields = ['id', 'train_id', 'user_id', 'number_of_seats']
        read_only_fields = fields


class TicketInfoSerializer(serializers.Serializer):
    """Ticket joined with its train schedule and rider contact details."""
    id = serializers.CharField()
    train_id = serializers.CharField()
    user_id = serializers.CharField()
    departure_time = serializers.CharField()
    arrival_time = serializers.CharField()
    time_taken = serializers.CharField()
    price = serializers.IntegerField()
    number_of_seats = serializers.IntegerField()
    user_name = serializers.CharField()
    user_phone_number = serializers.CharField()


class TicketPayloadSerializer(serializers.Serializer):
    """Payload for booking seats."""
    train_id = serializers.CharField(max_length=36)
    user_id = serializers.CharField(max_length=36)
    number_of_seats = serializers.IntegerField(min_value=1, max_value=MAX_SEATS)


class CancelTicketSerializer(serializers.Serializer):
    """Payload for cancelling a ticket; also the shape of the cancel response."""
    ticket_id = serializers.CharField(max_length=36)
    user_id = serializers.CharField(max_length=36)
