"""Views for the train catalog."""
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
from .serializers import TrainSerializer, TrainPayloadSerializer

logger = logging.getLogger(__name__)


class TrainListResponseSerializer(drf_serializers.Serializer):
    count = drf_serializers.IntegerField()
    results = TrainSerializer(many=True)


class TrainListView(APIView):

    @extend_schema(
        summary="Add a train",
        description="Add a train listing. The operator defaults to the one registered by the caller.",
        request=TrainPayloadSerializer,
        responses={201: TrainSerializer, 400: ErrorSerializer, 404: ErrorSerializer},
        examples=[
            OpenApiExample(
                "Add Train",
                value={
                    "name": "Northern Express",
                    "operator": "NorthRail",
                    "image": "https://example.com/northern.png",
                    "departure_time": "2030-01-15T08:30:00Z",
                    "arrival_time": "2030-01-15T14:10:00Z",
                    "time_taken": "5h40m",
                    "price": 4500,
                    "available_seats": 120
                },
                request_only=True
            )
        ],
        tags=["Trains"]
    )
    def post(self, request):
        try:
            train = services.add_train(get_stores(), request.data, caller=request.user)
        except ServiceError as e:
            logger.warning("Rejected %s %s: %s %s", request.method, request.path, e.tag, e.message)
            return Response(e.as_dict(), status=e.status_code)
        return Response(TrainSerializer(train).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        summary="List trains",
        responses={200: TrainListResponseSerializer},
        tags=["Trains"]
    )
    def get(self, request):
        trains = services.list_trains(get_stores())
        return Response({'count': len(trains), 'results': TrainSerializer(trains, many=True).data})


class TrainDetailView(APIView):

    @extend_schema(
        summary="Get train by id",
        responses={200: TrainSerializer, 404: ErrorSerializer},
        tags=["Trains"]
    )
    def get(self, request, train_id):
        try:
            train = services.get_train(get_stores(), train_id)
        except ServiceError as e:
            logger.warning("Rejected %s %s: %s %s", request.method, request.path, e.tag, e.message)
            return Response(e.as_dict(), status=e.status_code)
        return Response(TrainSerializer(train).data)
