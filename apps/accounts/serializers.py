from rest_framework import serializers

from apps.utils.validators import password_strength_errors, is_valid_email
from .models import User, Role, AdminActivityLog


class RegisterSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    email = serializers.CharField(max_length=254)
    password = serializers.CharField(write_only=True, trim_whitespace=False)

    def validate_email(self, value):
        if not is_valid_email(value):
            raise serializers.ValidationError("Please enter a valid email address.")
        return value

    def validate_password(self, value):
        errors = password_strength_errors(value)
        if errors:
            raise serializers.ValidationError(errors)
        return value


class LoginSerializer(serializers.Serializer):
    email = serializers.CharField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = [
            'id', 'name', 'email', 'phone', 'role',
            'profile_picture_url', 'is_blocked', 'date_joined',
        ]
        read_only_fields = fields


class AdminUserSerializer(serializers.ModelSerializer):
    """
    Admin panel user management. Password is write-only and optional on update.
    """
    password = serializers.CharField(write_only=True, required=False, allow_blank=True, trim_whitespace=False)
    role = serializers.ChoiceField(choices=Role.choices, default=Role.ADMIN)

    class Meta:
        model = User
        fields = ['id', 'name', 'email', 'role', 'is_active', 'password', 'date_joined']
        read_only_fields = ['id', 'date_joined']
        # Uniqueness is reported as 409 by the view
        extra_kwargs = {'email': {'validators': []}}

    def validate(self, attrs):
        if self.instance is None and not attrs.get('password'):
            raise serializers.ValidationError({'password': 'This field is required.'})
        return attrs

    def create(self, validated_data):
        password = validated_data.pop('password')
        return User.objects.create_user(password=password, is_staff=True, **validated_data)

    def update(self, instance, validated_data):
        password = validated_data.pop('password', None)
        for field, value in validated_data.items():
            setattr(instance, field, value)
        if password:
            instance.set_password(password)
        instance.save()
        return instance


class AdminActivityLogSerializer(serializers.ModelSerializer):
    class Meta:
        model = AdminActivityLog
        fields = ['id', 'admin_user', 'admin_user_name', 'action', 'details', 'ip_address', 'created_at']
