from django.contrib import admin
from .models import Operator


@admin.register(Operator)
class OperatorAdmin(admin.ModelAdmin):
    list_display = ['name', 'principal', 'phone_number', 'created_at']
    search_fields = ['name', 'principal__email']
    ordering = ['name']
