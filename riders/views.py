"""Views for the user directory."""
import logging

from rest_framework import status
from rest_framework.views import APIView
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiExample
from rest_framework import serializers as drf_serializers

from core.exceptions import ServiceError
from core.serializers import ErrorSerializer
from core.storage import get_stores

from . import services
from .serializers import RiderSerializer, RiderPayloadSerializer

logger = logging.getLogger(__name__)


class RiderListResponseSerializer(drf_serializers.Serializer):
    count = drf_serializers.IntegerField()
    results = RiderSerializer(many=True)


class RiderLookupResponseSerializer(drf_serializers.Serializer):
    user = RiderSerializer(allow_null=True)


class RiderListView(APIView):

    @extend_schema(
        summary="Add a user",
        request=RiderPayloadSerializer,
        responses={201: RiderSerializer, 400: ErrorSerializer},
        examples=[
            OpenApiExample(
                "Add Alice",
                value={"name": "Alice", "phone_number": "5550101", "email": "alice@example.com"},
                request_only=True
            )
        ],
        tags=["Users"]
    )
    def post(self, request):
        try:
            rider = services.add_user(get_stores(), request.data)
        except ServiceError as e:
            logger.warning("Rejected %s %s: %s %s", request.method, request.path, e.tag, e.message)
            return Response(e.as_dict(), status=e.status_code)
        return Response(RiderSerializer(rider).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        summary="List users",
        responses={200: RiderListResponseSerializer},
        tags=["Users"]
    )
    def get(self, request):
        riders = services.list_users(get_stores())
        return Response({'count': len(riders), 'results': RiderSerializer(riders, many=True).data})


class RiderDetailView(APIView):

    @extend_schema(
        summary="Look up a user by id",
        description="Returns the user under 'user', or null when there is no such user.",
        responses={200: RiderLookupResponseSerializer},
        tags=["Users"]
    )
    def get(self, request, user_id):
        rider = services.get_user(get_stores(), user_id)
        return Response({'user': RiderSerializer(rider).data if rider is not None else None})
