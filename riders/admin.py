from django.contrib import admin
from .models import Rider


@admin.register(Rider)
class RiderAdmin(admin.ModelAdmin):
    list_display = ['name', 'email', 'phone_number', 'created_at']
    search_fields = ['id', 'name', 'email']
    readonly_fields = ['id', 'tickets', 'created_at']
    ordering = ['-created_at']
