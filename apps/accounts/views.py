from rest_framework import generics, status, viewsets
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import AllowAny, IsAuthenticated

from apps.utils.exceptions import Conflict
from apps.utils.throttle import LoginRateThrottle
from .models import User, Role, AdminActivityLog
from .permissions import IsAdmin
from .serializers import (
    RegisterSerializer,
    LoginSerializer,
    UserSerializer,
    AdminUserSerializer,
    AdminActivityLogSerializer,
)
from .services import AuthService, log_admin_action


class RegisterView(APIView):
    permission_classes = [AllowAny]
    throttle_classes = [LoginRateThrottle]

    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        AuthService.register(**serializer.validated_data)
        return Response(
            {"message": "User registered successfully"},
            status=status.HTTP_201_CREATED
        )


class LoginView(APIView):
    permission_classes = [AllowAny]
    throttle_classes = [LoginRateThrottle]

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = AuthService.login(
            request,
            email=serializer.validated_data['email'],
            password=serializer.validated_data['password'],
        )
        return Response({
            "token": result['token'],
            "refresh": result['refresh'],
            "user": UserSerializer(result['user']).data,
        })


class MeView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response(UserSerializer(request.user).data)


class AdminUserViewSet(viewsets.ModelViewSet):
    """
    /api/v1/admin/users/ (store admin accounts).
    """
    serializer_class = AdminUserSerializer
    permission_classes = [IsAdmin]
    queryset = User.objects.filter(role=Role.ADMIN).order_by("-date_joined")

    def _ensure_email_free(self, email, exclude_pk=None):
        qs = User.objects.filter(email__iexact=email)
        if exclude_pk is not None:
            qs = qs.exclude(pk=exclude_pk)
        if qs.exists():
            raise Conflict("Email already in use")

    def perform_create(self, serializer):
        self._ensure_email_free(serializer.validated_data["email"])
        user = serializer.save()
        log_admin_action(self.request, "Created admin user", f"Name: {user.name}")

    def perform_update(self, serializer):
        email = serializer.validated_data.get("email")
        if email:
            self._ensure_email_free(email, exclude_pk=serializer.instance.pk)
        user = serializer.save()
        log_admin_action(self.request, "Updated admin user", f"Name: {user.name}")

    def perform_destroy(self, instance):
        name = instance.name
        instance.delete()
        log_admin_action(self.request, "Deleted admin user", f"Name: {name}")


class AdminActivityLogListView(generics.ListAPIView):
    serializer_class = AdminActivityLogSerializer
    permission_classes = [IsAdmin]

    def get_queryset(self):
        return AdminActivityLog.objects.select_related("admin_user")[:200]
