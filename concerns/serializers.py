"""
Concern Serializers
"""
from django.utils.html import strip_tags
from rest_framework import serializers

from .models import Concern, ConcernMessage


class ConcernSerializer(serializers.ModelSerializer):
    """Concern with its owner summary and message count."""

    type = serializers.CharField(source='owner_type', read_only=True)
    owner = serializers.SerializerMethodField()
    message_count = serializers.SerializerMethodField()
    status_display = serializers.CharField(source='get_status_display', read_only=True)

    class Meta:
        model = Concern
        fields = [
            'id', 'title', 'description', 'image', 'status', 'status_display',
            'type', 'owner', 'message_count', 'created_at', 'updated_at',
        ]
        read_only_fields = ['status', 'created_at', 'updated_at']
        extra_kwargs = {
            'image': {'required': False, 'allow_blank': True},
        }

    def get_owner(self, obj):
        owner = obj.owner
        if owner is None:
            return None
        return {
            'id': owner.pk,
            'full_name': owner.full_name,
            'contact_number': owner.contact_number,
            'barangay': owner.barangay,
        }

    def get_message_count(self, obj):
        # Annotated on list querysets, counted on demand otherwise
        count = getattr(obj, 'message_count', None)
        if count is None:
            count = obj.messages.count()
        return count

    def validate_title(self, value):
        value = strip_tags(value).strip()
        if not value:
            raise serializers.ValidationError("Title cannot be empty.")
        return value

    def validate_description(self, value):
        value = strip_tags(value).strip()
        if not value:
            raise serializers.ValidationError("Description cannot be empty.")
        return value


class ConcernStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Concern.Status.choices)


class ConcernMessageSerializer(serializers.ModelSerializer):
    sender_name = serializers.SerializerMethodField()
    image = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    class Meta:
        model = ConcernMessage
        fields = ['id', 'concern', 'sender_type', 'sender_name', 'content', 'image', 'created_at']
        read_only_fields = ['concern', 'sender_type', 'created_at']

    def get_sender_name(self, obj):
        if obj.sender is None:
            return None
        registrant = obj.sender.registrant
        if registrant is not None:
            return registrant.full_name
        return obj.sender.username

    def validate_content(self, value):
        value = strip_tags(value).strip()
        if not value:
            raise serializers.ValidationError("Message cannot be empty.")
        return value
