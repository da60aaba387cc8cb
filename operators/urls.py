"""
URL configuration for operators app.
"""
from django.urls import path
from .views import OperatorListView, OperatorDetailView

urlpatterns = [
    path('', OperatorListView.as_view(), name='operator_list'),
    path('<str:name>/', OperatorDetailView.as_view(), name='operator_detail'),
]
