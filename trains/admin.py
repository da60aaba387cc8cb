from django.contrib import admin
from .models import Train


@admin.register(Train)
class TrainAdmin(admin.ModelAdmin):
    list_display = ['name', 'operator', 'departure_time', 'price', 'available_seats', 'booked_seats']
    list_filter = ['operator']
    search_fields = ['id', 'name', 'operator']
    readonly_fields = ['id', 'booked_seats', 'created_at']
    ordering = ['departure_time']
