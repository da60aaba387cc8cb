"""Views for the operator registry."""
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
from .serializers import OperatorSerializer, OperatorPayloadSerializer

logger = logging.getLogger(__name__)


class OperatorListResponseSerializer(drf_serializers.Serializer):
    count = drf_serializers.IntegerField()
    results = OperatorSerializer(many=True)


class OperatorListView(APIView):

    @extend_schema(
        summary="Register an operator",
        description="Register a transport operator owned by the calling account. "
                    "Registering an existing name replaces it.",
        request=OperatorPayloadSerializer,
        responses={201: OperatorSerializer, 400: ErrorSerializer},
        examples=[
            OpenApiExample(
                "Register NorthRail",
                value={"name": "NorthRail", "address": "1 Station Rd", "phone_number": "5550100"},
                request_only=True
            )
        ],
        tags=["Operators"]
    )
    def post(self, request):
        try:
            operator = services.add_operator(get_stores(), request.data, caller=request.user)
        except ServiceError as e:
            logger.warning("Rejected %s %s: %s %s", request.method, request.path, e.tag, e.message)
            return Response(e.as_dict(), status=e.status_code)
        return Response(OperatorSerializer(operator).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        summary="List operators",
        responses={200: OperatorListResponseSerializer},
        tags=["Operators"]
    )
    def get(self, request):
        operators = services.list_operators(get_stores())
        return Response({'count': len(operators), 'results': OperatorSerializer(operators, many=True).data})


class OperatorDetailView(APIView):

    @extend_schema(
        summary="Get operator by name",
        responses={200: OperatorSerializer, 404: ErrorSerializer},
        tags=["Operators"]
    )
    def get(self, request, name):
        try:
            operator = services.get_operator(get_stores(), name)
        except ServiceError as e:
            logger.warning("Rejected %s %s: %s %s", request.method, request.path, e.tag, e.message)
            return Response(e.as_dict(), status=e.status_code)
        return Response(OperatorSerializer(operator).data)
