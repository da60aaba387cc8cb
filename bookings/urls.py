"""
URL configuration for bookings app.
"""
from django.urls import path
from .views import TicketListView, TicketCancelView, TicketInfoView

urlpatterns = [
    path('', TicketListView.as_view(), name='ticket_list'),
    path('cancel/', TicketCancelView.as_view(), name='ticket_cancel'),
    path('<str:ticket_id>/', TicketInfoView.as_view(), name='ticket_info'),
]
