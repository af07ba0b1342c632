"""Serializers for the core app.

Contains serializers for User and Role plus the authentication payloads.
Follows the Read/Write serializer pattern.
"""

from django.contrib.auth import authenticate

from rest_framework import exceptions, serializers

from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken

from wellness_backend.core.models import Role, User


MIN_PASSWORD_LENGTH = 6


# -----------------------------------------------------------------------------
# Role / User Serializers
# -----------------------------------------------------------------------------


class RoleSerializer(serializers.ModelSerializer):
    """Read-only serializer for Role model."""

    class Meta:
        model = Role
        fields = ['id', 'name', 'label']
        read_only_fields = fields


class UserSerializer(serializers.ModelSerializer):
    """Read-only serializer for User model with flat role name."""

    role = serializers.CharField(source='role.name', read_only=True, allow_null=True)

    class Meta:
        model = User
        fields = [
            'id',
            'name',
            'email',
            'role',
            'is_active',
            'date_joined',
            'last_login',
        ]
        read_only_fields = fields


def _email_taken(email, exclude_pk=None) -> bool:
    qs = User.objects.using('default').filter(email__iexact=email)
    if exclude_pk is not None:
        qs = qs.exclude(pk=exclude_pk)
    return qs.exists()


class AdminUserCreateSerializer(serializers.ModelSerializer):
    """Write serializer for POST /api/admin/users/."""

    name = serializers.CharField(required=True, allow_blank=False, max_length=150)
    email = serializers.EmailField(required=True)
    password = serializers.CharField(write_only=True, required=True, min_length=MIN_PASSWORD_LENGTH)
    role = serializers.SlugRelatedField(
        slug_field='name',
        queryset=Role.objects.using('default').all(),
        required=False,
    )

    class Meta:
        model = User
        fields = ['name', 'email', 'password', 'role']

    def validate_email(self, value):
        if _email_taken(value):
            raise serializers.ValidationError('User with this email already exists.')
        return value.lower()

    def create(self, validated_data):
        password = validated_data.pop('password')
        if validated_data.get('role') is None:
            validated_data['role'], _ = Role.objects.using('default').get_or_create(
                name=Role.ADMIN,
                defaults={'label': 'Admin'},
            )
        return User.objects.db_manager('default').create_user(
            password=password,
            **validated_data,
        )


class AdminUserUpdateSerializer(serializers.ModelSerializer):
    """Write serializer for PUT/PATCH /api/admin/users/<id>/."""

    email = serializers.EmailField(required=False)
    password = serializers.CharField(write_only=True, required=False, min_length=MIN_PASSWORD_LENGTH)
    role = serializers.SlugRelatedField(
        slug_field='name',
        queryset=Role.objects.using('default').all(),
        required=False,
    )

    class Meta:
        model = User
        fields = ['name', 'email', 'password', 'role', 'is_active']
        extra_kwargs = {'name': {'required': False}}

    def validate_email(self, value):
        if _email_taken(value, exclude_pk=getattr(self.instance, 'pk', None)):
            raise serializers.ValidationError('Email is already taken.')
        return value.lower()

    def validate_role(self, value):
        request = self.context.get('request')
        instance = self.instance
        if (
            request is not None
            and instance is not None
            and instance.pk == request.user.pk
            and value != instance.role
        ):
            raise serializers.ValidationError('Cannot change your own role.')
        return value

    def update(self, instance, validated_data):
        password = validated_data.pop('password', None)
        instance = super().update(instance, validated_data)
        if password:
            instance.set_password(password)
            instance.save(update_fields=['password'])
        return instance


class ProfileUpdateSerializer(serializers.Serializer):
    """PUT /api/auth/profile/: name, email, optional password change."""

    name = serializers.CharField(required=False, allow_blank=False, max_length=150)
    email = serializers.EmailField(required=False)
    current_password = serializers.CharField(write_only=True, required=False)
    new_password = serializers.CharField(write_only=True, required=False, min_length=MIN_PASSWORD_LENGTH)

    def validate_email(self, value):
        user = self.context['user']
        if _email_taken(value, exclude_pk=user.pk):
            raise serializers.ValidationError('Email is already taken.')
        return value.lower()

    def validate(self, attrs):
        new_password = attrs.get('new_password')
        if new_password:
            current = attrs.get('current_password')
            if not current:
                raise serializers.ValidationError(
                    {'current_password': ['Current password is required to set a new password.']}
                )
            if not self.context['user'].check_password(current):
                raise serializers.ValidationError(
                    {'current_password': ['Current password is incorrect.']}
                )
        return attrs

    def save(self, **kwargs):
        user = self.context['user']
        data = self.validated_data
        if 'name' in data:
            user.name = data['name']
        if 'email' in data:
            user.email = data['email']
        if data.get('new_password'):
            user.set_password(data['new_password'])
        user.save()
        return user


# -----------------------------------------------------------------------------
# Authentication Serializers
# -----------------------------------------------------------------------------


class LoginSerializer(serializers.Serializer):
    """Validates email/password and returns the user.

    Missing fields are a 400, wrong credentials a 401.
    """

    email = serializers.EmailField(required=True)
    password = serializers.CharField(required=True, write_only=True)

    def validate(self, attrs):
        user = authenticate(
            self.context.get('request'),
            email=attrs['email'].lower(),
            password=attrs['password'],
        )

        if user is None:
            raise exceptions.AuthenticationFailed('Invalid credentials.')

        attrs['user'] = user
        return attrs


class RefreshSerializer(serializers.Serializer):
    """Validates a refresh token."""

    refresh = serializers.CharField(required=True)

    def validate_refresh(self, value):
        try:
            RefreshToken(value)
        except TokenError as e:
            raise serializers.ValidationError(f'Invalid or expired refresh token: {e}')
        return value


def issue_tokens(user) -> dict:
    """Signed access/refresh pair carrying role, email and name claims."""
    refresh = RefreshToken.for_user(user)
    refresh['role'] = user.role_name
    refresh['email'] = user.email
    refresh['name'] = user.name
    access = refresh.access_token
    return {'access': str(access), 'refresh': str(refresh)}
