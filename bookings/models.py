"""Ticket ledger models."""
from django.core.validators import MinValueValidator
from django.db import models


class Ticket(models.Model):
    """
    A booking of one or more seats on a train.
    Maps to the 'tickets' table.

    Train and rider are referenced by id and resolved through their stores.
    """
    id = models.CharField(max_length=36, primary_key=True)
    train_id = models.CharField(max_length=36)
    user_id = models.CharField(max_length=36)
    number_of_seats = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    booking_date = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'tickets'
        indexes = [
            models.Index(fields=['train_id'], name='tickets_train_idx'),
            models.Index(fields=['user_id'], name='tickets_user_idx'),
        ]

    def __str__(self):
        return f"Ticket {self.id}: {self.number_of_seats} seat(s) on {self.train_id}"
