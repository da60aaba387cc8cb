"""Rider directory models."""
from django.db import models


class Rider(models.Model):
    """
    A traveller who books tickets.
    Maps to the 'riders' table.

    ``tickets`` holds the ids of the tickets this rider currently owns.
    """
    id = models.CharField(max_length=36, primary_key=True)
    name = models.CharField(max_length=255)
    phone_number = models.CharField(max_length=32)
    email = models.EmailField(max_length=255)
    tickets = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'riders'

    def __str__(self):
        return f"{self.name} <{self.email}>"

    def holds(self, ticket_id):
        return ticket_id in self.tickets

    def add_ticket(self, ticket_id):
        if ticket_id not in self.tickets:
            self.tickets = [*self.tickets, ticket_id]

    def drop_ticket(self, ticket_id):
        self.tickets = [t for t in self.tickets if t != ticket_id]
