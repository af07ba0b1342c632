from rest_framework import serializers

from .models import Notification


class NotificationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Notification
        fields = [
            'id',
            'title',
            'message',
            'type',
            'read',
            'read_at',
            'related_id',
            'related_type',
            'created_at',
        ]
        read_only_fields = fields


class SystemNotificationSerializer(serializers.Serializer):
    """POST /api/notifications/system/"""

    title = serializers.CharField(max_length=200)
    message = serializers.CharField()
    type = serializers.ChoiceField(choices=Notification.TYPE_CHOICES, default=Notification.TYPE_INFO)
    target_user_ids = serializers.ListField(child=serializers.IntegerField(), required=False)
    send_to_all = serializers.BooleanField(required=False, default=False)

    def validate(self, attrs):
        if not attrs.get('send_to_all') and not attrs.get('target_user_ids'):
            raise serializers.ValidationError('Either target_user_ids or send_to_all must be specified')
        return attrs
