"""
URL configuration for riders app.
"""
from django.urls import path
from .views import RiderListView, RiderDetailView

urlpatterns = [
    path('', RiderListView.as_view(), name='user_list'),
    path('<str:user_id>/', RiderDetailView.as_view(), name='user_detail'),
]
