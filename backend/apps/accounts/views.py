# apps/accounts/views.py

import logging

from rest_framework import permissions, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.views import APIView

from .serializers import LoginSerializer, LogoutSerializer, RegisterSerializer, UserProfileSerializer
from .services import AuthService, issue_tokens

logger = logging.getLogger(__name__)


class RegisterView(APIView):
    """User registration with JWT response"""
    permission_classes = [permissions.AllowAny]

    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = AuthService.sign_up(**serializer.validated_data)
        return Response({
            'message': 'User created successfully',
            'user': UserProfileSerializer(user.profile).data,
            'tokens': issue_tokens(user),
        }, status=status.HTTP_201_CREATED)


class LoginView(APIView):
    """Session + JWT login; merges the guest cart into the account"""
    permission_classes = [permissions.AllowAny]

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user, tokens = AuthService.sign_in(request, **serializer.validated_data)
        return Response({
            'message': 'Login successful',
            'tokens': tokens,
            'user': UserProfileSerializer(user.profile).data,
        }, status=status.HTTP_200_OK)


@api_view(['POST'])
@permission_classes([permissions.IsAuthenticated])
def logout(request):
    """Logout user by blacklisting refresh token"""
    serializer = LogoutSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    blacklisted = AuthService.sign_out(request, serializer.validated_data.get('refresh_token'))
    message = 'Successfully logged out' if blacklisted else 'Logged out (no refresh token provided)'
    return Response({'message': message}, status=status.HTTP_200_OK)


class MeView(APIView):
    """Get and update the current user's profile"""
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        profile = AuthService.get_profile(request.user)
        return Response(UserProfileSerializer(profile).data)

    def patch(self, request):
        profile = AuthService.get_profile(request.user)
        serializer = UserProfileSerializer(profile, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(serializer.data)
