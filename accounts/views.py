import logging

from rest_framework import generics, permissions, status
from rest_framework.response import Response
from rest_framework.exceptions import AuthenticationFailed
from rest_framework.views import APIView
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken

from .serializers import (
    UserSerializer,
    AdminLoginSerializer,
    FarmerLoginSerializer,
    OrganicFarmerLoginSerializer,
)

logger = logging.getLogger(__name__)


class BaseLoginView(APIView):
    """
    Exchange credentials for a JWT pair.
    No authentication required.
    """
    permission_classes = [permissions.AllowAny]
    authentication_classes = []
    serializer_class = None

    def post(self, request):
        serializer = self.serializer_class(data=request.data)
        try:
            serializer.is_valid(raise_exception=True)
        except AuthenticationFailed as e:
            # No authenticators here, so DRF would otherwise answer 403
            return Response({'error': str(e.detail)}, status=status.HTTP_401_UNAUTHORIZED)
        data = serializer.validated_data
        logger.info(f"{data['user']['role']} login: {data['user']['username']}")
        return Response({'success': True, **data}, status=status.HTTP_200_OK)


class AdminLoginView(BaseLoginView):
    serializer_class = AdminLoginSerializer


class FarmerLoginView(BaseLoginView):
    serializer_class = FarmerLoginSerializer


class OrganicFarmerLoginView(BaseLoginView):
    serializer_class = OrganicFarmerLoginSerializer


class MeView(generics.RetrieveAPIView):
    """
    API endpoint for the authenticated user's summary.
    """
    serializer_class = UserSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_object(self):
        return self.request.user


class LogoutView(APIView):
    """
    API endpoint for user logout.
    Blacklists the refresh token.
    """
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):
        refresh_token = request.data.get('refresh_token')
        if not refresh_token:
            return Response(
                {'error': 'Refresh token is required'},
                status=status.HTTP_400_BAD_REQUEST
            )

        try:
            token = RefreshToken(refresh_token)
            token.blacklist()
        except TokenError as e:
            return Response(
                {'error': str(e)},
                status=status.HTTP_400_BAD_REQUEST
            )

        return Response({
            'message': 'Logout successful'
        }, status=status.HTTP_200_OK)
