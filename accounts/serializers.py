import logging

from django.contrib.auth import get_user_model
from django.db.models import Q
from django.utils import timezone
from rest_framework import serializers
from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.tokens import RefreshToken

User = get_user_model()
logger = logging.getLogger(__name__)


class UserSerializer(serializers.ModelSerializer):
    """Serializer for the authenticated user summary."""
    registrant_id = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ['id', 'username', 'email', 'role', 'registrant_id', 'date_joined', 'last_login_at']
        read_only_fields = fields

    def get_registrant_id(self, obj):
        registrant = obj.registrant
        return registrant.id if registrant else None


class RegistryLoginSerializer(serializers.Serializer):
    """
    Base login serializer. Subclasses pick the role that may log in
    and whether email works as an identifier.

    Every rejection reads "Invalid credentials" so the response never
    reveals whether the username exists.
    """
    username = serializers.CharField(help_text="Username (or email where allowed)")
    password = serializers.CharField(write_only=True, style={'input_type': 'password'})

    role = None
    allow_email = True

    def get_candidates(self, identifier):
        lookup = Q(username=identifier)
        if self.allow_email:
            lookup |= Q(email__iexact=identifier)
        return User.objects.filter(lookup, role=self.role, is_active=True)

    def check_registrant(self, user):
        """Hook for role-specific gates; return False to reject."""
        return True

    def validate(self, attrs):
        identifier = attrs['username'].strip()
        user = None
        for candidate in self.get_candidates(identifier):
            if candidate.check_password(attrs['password']):
                user = candidate
                break

        if user is None or not self.check_registrant(user):
            logger.info(f"Rejected {self.role} login for '{identifier}'")
            raise AuthenticationFailed('Invalid credentials')

        user.last_login_at = timezone.now()
        user.save(update_fields=['last_login_at'])

        refresh = RefreshToken.for_user(user)
        return {
            'user': UserSerializer(user).data,
            'tokens': {
                'refresh': str(refresh),
                'access': str(refresh.access_token),
            },
        }


class AdminLoginSerializer(RegistryLoginSerializer):
    role = User.UserRole.ADMIN
    allow_email = False


class FarmerLoginSerializer(RegistryLoginSerializer):
    """Regular farmers may only log in once their application is approved."""
    role = User.UserRole.FARMER

    def check_registrant(self, user):
        farmer = user.registrant
        return farmer is not None and farmer.status == 'REGISTERED'


class OrganicFarmerLoginSerializer(RegistryLoginSerializer):
    role = User.UserRole.ORGANIC_FARMER

    def check_registrant(self, user):
        return user.registrant is not None
