from django.contrib import admin
from .models import Ticket


@admin.register(Ticket)
class TicketAdmin(admin.ModelAdmin):
    list_display = ['id', 'train_id', 'user_id', 'number_of_seats', 'booking_date']
    search_fields = ['id', 'train_id', 'user_id']
    readonly_fields = ['id', 'train_id', 'user_id', 'number_of_seats', 'booking_date']
    ordering = ['-booking_date']
