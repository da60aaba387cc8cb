"""Views for account registration and authentication."""
import logging

from rest_framework import status
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import AllowAny
from rest_framework_simplejwt.tokens import RefreshToken
from django.utils import timezone
from drf_spectacular.utils import extend_schema, OpenApiExample
from rest_framework import serializers as drf_serializers

from .serializers import AccountRegistrationSerializer, AccountLoginSerializer, AccountSerializer

logger = logging.getLogger(__name__)


# Response serializers for Swagger documentation
class TokenResponseSerializer(drf_serializers.Serializer):
    refresh = drf_serializers.CharField()
    access = drf_serializers.CharField()


class AuthResponseSerializer(drf_serializers.Serializer):
    message = drf_serializers.CharField()
    user = AccountSerializer()
    tokens = TokenResponseSerializer()


def _tokens_for(user):
    refresh = RefreshToken.for_user(user)
    return {'refresh': str(refresh), 'access': str(refresh.access_token)}


class RegisterView(APIView):
    permission_classes = [AllowAny]

    @extend_schema(
        summary="Register a caller account",
        description="Create an account and receive JWT tokens",
        request=AccountRegistrationSerializer,
        responses={201: AuthResponseSerializer},
        examples=[
            OpenApiExample(
                "Register Example",
                value={
                    "email": "ops@northrail.example",
                    "name": "NorthRail Ops",
                    "password": "SecurePass123!",
                    "password_confirm": "SecurePass123!",
                    "phone": "5550100"
                },
                request_only=True
            )
        ],
        tags=["Authentication"]
    )
    def post(self, request):
        serializer = AccountRegistrationSerializer(data=request.data)
        if serializer.is_valid():
            user = serializer.save()
            logger.info("Registered account %s", user.email)
            return Response({
                'message': 'Account registered successfully',
                'user': AccountSerializer(user).data,
                'tokens': _tokens_for(user)
            }, status=status.HTTP_201_CREATED)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


class LoginView(APIView):
    permission_classes = [AllowAny]

    @extend_schema(
        summary="Login",
        description="Authenticate with email and password to receive JWT tokens",
        request=AccountLoginSerializer,
        responses={200: AuthResponseSerializer},
        tags=["Authentication"]
    )
    def post(self, request):
        serializer = AccountLoginSerializer(data=request.data, context={'request': request})
        if serializer.is_valid():
            user = serializer.validated_data['user']
            user.last_login = timezone.now()
            user.save(update_fields=['last_login'])
            return Response({
                'message': 'Login successful',
                'user': AccountSerializer(user).data,
                'tokens': _tokens_for(user)
            }, status=status.HTTP_200_OK)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


class ProfileView(APIView):
    @extend_schema(
        summary="Get current account",
        description="Returns the authenticated caller's account",
        responses={200: AccountSerializer},
        tags=["Authentication"]
    )
    def get(self, request):
        return Response(AccountSerializer(request.user).data)
