"""
Operator registry models.
"""
from django.conf import settings
from django.db import models


class Operator(models.Model):
    """
    Transport operator, keyed by its unique name.
    Maps to the 'operators' table.
    """
    name = models.CharField(max_length=255, primary_key=True)
    principal = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='operators'
    )
    address = models.CharField(max_length=255, blank=True, default='')
    phone_number = models.CharField(max_length=32)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'operators'

    def __str__(self):
        return self.name
