"""
URL configuration for analytics app.
"""
from django.urls import path
from .views import APILogsView

urlpatterns = [
    path('logs/', APILogsView.as_view(), name='api_logs'),
]
