from rest_framework import serializers

from .models import ContactInquiry


class ReplierSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    email = serializers.EmailField()


class ContactInquirySerializer(serializers.ModelSerializer):
    replied_by = ReplierSerializer(read_only=True)

    class Meta:
        model = ContactInquiry
        fields = [
            'id',
            'name',
            'email',
            'phone',
            'subject',
            'message',
            'type',
            'preferred_contact',
            'status',
            'admin_notes',
            'replied_at',
            'replied_by',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class ContactInquirySummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = ContactInquiry
        fields = ['id', 'name', 'email', 'type', 'status', 'created_at']
        read_only_fields = fields


class ContactInquiryCreateSerializer(serializers.ModelSerializer):
    name = serializers.CharField(max_length=150, error_messages={'blank': 'Name is required', 'required': 'Name is required'})
    email = serializers.EmailField(
        error_messages={
            'invalid': 'Please provide a valid email address',
            'blank': 'Email is required',
            'required': 'Email is required',
        }
    )
    message = serializers.CharField(error_messages={'blank': 'Message is required', 'required': 'Message is required'})
    type = serializers.ChoiceField(
        choices=ContactInquiry.TYPE_CHOICES,
        default=ContactInquiry.TYPE_GENERAL,
        error_messages={'invalid_choice': 'Invalid inquiry type'},
    )
    preferred_contact = serializers.ChoiceField(
        choices=ContactInquiry.CONTACT_CHOICES,
        default=ContactInquiry.CONTACT_EMAIL,
        error_messages={'invalid_choice': 'Preferred contact must be EMAIL or PHONE'},
    )

    class Meta:
        model = ContactInquiry
        fields = ['name', 'email', 'phone', 'subject', 'message', 'type', 'preferred_contact']

    def to_internal_value(self, data):
        # the contact form may send lower-case choices
        if hasattr(data, 'copy'):
            data = data.copy()
        for key in ('type', 'preferred_contact'):
            value = data.get(key)
            if isinstance(value, str):
                data[key] = value.strip().upper()
        return super().to_internal_value(data)


class InquiryStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(
        choices=ContactInquiry.STATUS_CHOICES,
        error_messages={'invalid_choice': 'Invalid status', 'required': 'Status is required'},
    )
    admin_notes = serializers.CharField(required=False, allow_blank=True)


class InquiryReplySerializer(serializers.Serializer):
    message = serializers.CharField(
        error_messages={'blank': 'Reply message is required', 'required': 'Reply message is required'},
    )
    send_email = serializers.BooleanField(default=True)
