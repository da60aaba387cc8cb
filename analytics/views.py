"""
Request audit log views.
"""
from rest_framework import status
from rest_framework.views import APIView
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter, inline_serializer
from rest_framework import serializers as drf_serializers

from utils.mongo import get_api_logs, is_mongodb_available


def _parse_int(value):
    try:
        return int(value) if value else None
    except ValueError:
        return None


class APILogsView(APIView):
    """Request audit log (Admin only)."""

    @extend_schema(
        summary="Get API request logs (Admin only)",
        description="Query the request audit log stored in MongoDB, newest first.",
        parameters=[
            OpenApiParameter(name='endpoint', type=str, required=False, description='Filter by endpoint path'),
            OpenApiParameter(name='user_id', type=int, required=False, description='Filter by account id'),
            OpenApiParameter(name='status_code', type=int, required=False, description='Filter by HTTP status'),
            OpenApiParameter(name='method', type=str, required=False, description='Filter by HTTP method'),
            OpenApiParameter(name='error', type=str, required=False, description='Filter by error tag (NotFound, InvalidPayload, InvalidArgument)'),
            OpenApiParameter(name='limit', type=int, required=False, description='Results limit (default: 50, max: 500)'),
            OpenApiParameter(name='offset', type=int, required=False, description='Offset'),
        ],
        responses={
            200: inline_serializer(name='LogsResponse', fields={
                'count': drf_serializers.IntegerField(),
                'limit': drf_serializers.IntegerField(),
                'offset': drf_serializers.IntegerField(),
                'mongodb_available': drf_serializers.BooleanField(),
                'results': drf_serializers.ListField()
            }),
            403: inline_serializer(name='Forbidden', fields={'error': drf_serializers.CharField()})
        },
        tags=["Analytics (Admin)"]
    )
    def get(self, request):
        if not request.user.is_admin:
            return Response({
                'error': 'Forbidden',
                'message': 'This endpoint is restricted to administrators only.'
            }, status=status.HTTP_403_FORBIDDEN)

        filters = self._parse_filters(request.query_params)
        logs = get_api_logs(**filters)
        return Response({
            'count': len(logs),
            'limit': filters['limit'],
            'offset': filters['offset'],
            'mongodb_available': is_mongodb_available(),
            'filters_applied': {k: v for k, v in filters.items() if v is not None and k not in ['limit', 'offset']},
            'results': logs
        })

    def _parse_filters(self, params):
        limit = _parse_int(params.get('limit'))
        offset = _parse_int(params.get('offset'))
        return {
            'limit': min(max(limit or 50, 1), 500),
            'offset': max(offset or 0, 0),
            'endpoint': params.get('endpoint'),
            'user_id': _parse_int(params.get('user_id')),
            'status_code': _parse_int(params.get('status_code')),
            'method': params.get('method', '').upper() or None,
            'error': params.get('error') or None,
        }
