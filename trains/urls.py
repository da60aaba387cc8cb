"""
URL configuration for trains app.
"""
from django.urls import path
from .views import TrainListView, TrainDetailView

urlpatterns = [
    path('', TrainListView.as_view(), name='train_list'),
    path('<str:train_id>/', TrainDetailView.as_view(), name='train_detail'),
]
