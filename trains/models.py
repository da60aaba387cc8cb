"""
Train catalog models.
"""
from datetime import datetime, time

from django.db import models
from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

# Largest values the positive integer columns accept on every backend.
MAX_SEATS = 2147483647
MAX_PRICE = 9223372036854775807


def parse_timestamp(value):
    """
    Parse a schedule string into an aware datetime.

    Accepts ISO-8601 date-times or bare dates (midnight). Naive values are
    taken in the current time zone. Returns None when unparseable.
    """
    if not value:
        return None
    try:
        parsed = parse_datetime(value)
        if parsed is None:
            day = parse_date(value)
            if day is None:
                return None
            parsed = datetime.combine(day, time.min)
    except ValueError:
        return None
    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed)
    return parsed


class Train(models.Model):
    """
    Train listing with its seat inventory.
    Maps to the 'trains' table.

    The operator is referenced by name and resolved through the operator
    store when needed; it is never copied into the train.
    """
    id = models.CharField(max_length=36, primary_key=True)
    operator = models.CharField(max_length=255)
    name = models.CharField(max_length=255, unique=True)
    image = models.CharField(max_length=500, blank=True, default='')
    departure_time = models.CharField(max_length=64)
    arrival_time = models.CharField(max_length=64)
    time_taken = models.CharField(max_length=64)
    price = models.PositiveBigIntegerField()
    available_seats = models.PositiveIntegerField()
    booked_seats = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'trains'
        indexes = [
            models.Index(fields=['operator'], name='trains_operator_idx'),
        ]

    def __str__(self):
        return f"{self.name} ({self.operator})"

    @property
    def total_seats(self):
        return self.available_seats + self.booked_seats

    def departs_at(self):
        return parse_timestamp(self.departure_time)

    def can_book(self, num_seats):
        """Check if the requested number of seats can be booked."""
        return 0 < num_seats <= self.available_seats

    def book(self, num_seats):
        self.available_seats -= num_seats
        self.booked_seats += num_seats

    def release(self, num_seats):
        self.available_seats += num_seats
        self.booked_seats -= num_seats
