"""
Keyed record stores.

Services never touch model managers directly: they receive a ``Stores``
bundle holding one keyed map per record type (operators, trains, tickets,
users). Two backends implement the same small map interface:

- ``ModelStore`` keeps records in their Django model table and survives
  process restarts.
- ``MemoryStore`` keeps records in a dict; useful for development and for
  unit-testing services without a database.
"""
import logging
from contextlib import nullcontext
from dataclasses import dataclass

from django.conf import settings
from django.db import transaction

logger = logging.getLogger(__name__)


class ModelStore:
    """Keyed map over a Django model table, keyed by primary key."""

    transactional = True

    def __init__(self, model):
        self.model = model

    def get(self, key, for_update=False):
        queryset = self.model.objects.all()
        if for_update:
            queryset = queryset.select_for_update()
        try:
            return queryset.get(pk=key)
        except (self.model.DoesNotExist, ValueError):
            return None

    def find(self, **fields):
        """First record whose fields match, or None."""
        return self.model.objects.filter(**fields).first()

    def insert(self, key, record):
        record.pk = key
        record.save()
        return record

    def remove(self, key):
        deleted, _ = self.model.objects.filter(pk=key).delete()
        return deleted > 0

    def values(self):
        return list(self.model.objects.all())

    def clear(self):
        self.model.objects.all().delete()

    def __contains__(self, key):
        return self.model.objects.filter(pk=key).exists()

    def __len__(self):
        return self.model.objects.count()


class MemoryStore:
    """Keyed map held in process memory."""

    transactional = False

    def __init__(self):
        self._records = {}

    def get(self, key, for_update=False):
        return self._records.get(key)

    def find(self, **fields):
        for record in self._records.values():
            if all(getattr(record, name) == value for name, value in fields.items()):
                return record
        return None

    def insert(self, key, record):
        record.pk = key
        self._records[key] = record
        return record

    def remove(self, key):
        return self._records.pop(key, None) is not None

    def values(self):
        return list(self._records.values())

    def clear(self):
        self._records.clear()

    def __contains__(self, key):
        return key in self._records

    def __len__(self):
        return len(self._records)


@dataclass
class Stores:
    operators: object
    trains: object
    tickets: object
    users: object

    @classmethod
    def persistent(cls):
        from operators.models import Operator
        from trains.models import Train
        from bookings.models import Ticket
        from riders.models import Rider

        return cls(
            operators=ModelStore(Operator),
            trains=ModelStore(Train),
            tickets=ModelStore(Ticket),
            users=ModelStore(Rider),
        )

    @classmethod
    def in_memory(cls):
        return cls(
            operators=MemoryStore(),
            trains=MemoryStore(),
            tickets=MemoryStore(),
            users=MemoryStore(),
        )

    def atomic(self):
        """Group the writes of one operation into a single commit."""
        if self.trains.transactional:
            return transaction.atomic()
        return nullcontext()

    def clear(self):
        for store in (self.tickets, self.trains, self.users, self.operators):
            store.clear()


_stores = None


def get_stores():
    """Get the process-wide stores (singleton pattern)."""
    global _stores

    if _stores is None:
        backend = getattr(settings, 'RAILBOOK_STORAGE', 'database')
        if backend == 'memory':
            _stores = Stores.in_memory()
        elif backend == 'database':
            _stores = Stores.persistent()
        else:
            raise ValueError(f"Unknown RAILBOOK_STORAGE backend: {backend!r}")
        logger.info("Initialized %s record stores", backend)

    return _stores


def reset_stores():
    """Drop the process-wide stores; the next get_stores() call rebuilds them."""
    global _stores
    _stores = None
