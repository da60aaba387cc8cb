"""Views for the ticket ledger."""
import logging

from rest_framework import status
from rest_framework.views import APIView
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiExample
from rest_framework import serializers as drf_serializers

from core.exceptions import ServiceError
from core.serializers import ErrorSerializer
from core.storage import get_stores

from . import services
from .serializers import (
    TicketSerializer, TicketInfoSerializer, TicketPayloadSerializer, CancelTicketSerializer
)

logger = logging.getLogger(__name__)


class TicketListResponseSerializer(drf_serializers.Serializer):
    count = drf_serializers.IntegerField()
    results = TicketSerializer(many=True)


class TicketListView(APIView):
    """Book seats and list tickets."""

    @extend_schema(
        summary="Book seats on a train",
        description="Books seats for a user. Fails if the train has departed or has too few seats left.",
        request=TicketPayloadSerializer,
        responses={201: TicketInfoSerializer, 400: ErrorSerializer, 404: ErrorSerializer},
        examples=[
            OpenApiExample(
                "Book 3 seats",
                value={
                    "train_id": "6f1c2a0e-7c1d-4e55-9a5b-0d2b8f9e1a11",
                    "user_id": "0b5d3c9a-2f4e-4b7a-8e61-3c2d1f0a9b88",
                    "number_of_seats": 3
                },
                request_only=True
            )
        ],
        tags=["Tickets"]
    )
    def post(self, request):
        try:
            info = services.create_ticket(get_stores(), request.data)
        except ServiceError as e:
            logger.warning("Rejected %s %s: %s %s", request.method, request.path, e.tag, e.message)
            return Response(e.as_dict(), status=e.status_code)
        return Response(TicketInfoSerializer(info).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        summary="List tickets",
        responses={200: TicketListResponseSerializer},
        tags=["Tickets"]
    )
    def get(self, request):
        tickets = services.list_tickets(get_stores())
        return Response({'count': len(tickets), 'results': TicketSerializer(tickets, many=True).data})


class TicketInfoView(APIView):

    @extend_schema(
        summary="Get ticket info",
        description="Returns the ticket joined with its train schedule and user contact details.",
        parameters=[
            OpenApiParameter(name='ticket_id', type=str, location='path', description='Ticket id')
        ],
        responses={200: TicketInfoSerializer, 404: ErrorSerializer},
        tags=["Tickets"]
    )
    def get(self, request, ticket_id):
        try:
            info = services.get_ticket_info(get_stores(), ticket_id)
        except ServiceError as e:
            logger.warning("Rejected %s %s: %s %s", request.method, request.path, e.tag, e.message)
            return Response(e.as_dict(), status=e.status_code)
        return Response(TicketInfoSerializer(info).data)


class TicketCancelView(APIView):

    @extend_schema(
        summary="Cancel a ticket",
        description="Cancels a user's ticket and returns its seats to the train.",
        request=CancelTicketSerializer,
        responses={200: CancelTicketSerializer, 400: ErrorSerializer, 404: ErrorSerializer},
        tags=["Tickets"]
    )
    def post(self, request):
        try:
            cancelled = services.cancel_ticket(get_stores(), request.data)
        except ServiceError as e:
            logger.warning("Rejected %s %s: %s %s", request.method, request.path, e.tag, e.message)
            return Response(e.as_dict(), status=e.status_code)
        return Response(cancelled, status=status.HTTP_200_OK)
