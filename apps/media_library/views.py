from rest_framework import mixins, viewsets
from rest_framework.views import APIView
from rest_framework.response import Response

from apps.accounts.permissions import IsAdmin
from apps.accounts.services import log_admin_action
from .models import MediaFile
from .serializers import MediaFileSerializer, PresignedUrlQuerySerializer
from .storage import get_storage


class PresignedUrlView(APIView):
    """
    GET /api/v1/media/presigned-url/?file_name=&file_type=
    """
    permission_classes = [IsAdmin]

    def get(self, request):
        query = PresignedUrlQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        result = get_storage().presigned_upload(
            query.validated_data['file_name'],
            query.validated_data['file_type'],
        )
        return Response(result)


class MediaFileViewSet(mixins.ListModelMixin,
                       mixins.CreateModelMixin,
                       mixins.DestroyModelMixin,
                       viewsets.GenericViewSet):
    serializer_class = MediaFileSerializer
    permission_classes = [IsAdmin]
    queryset = MediaFile.objects.all()

    def perform_create(self, serializer):
        media = serializer.save(uploaded_by=self.request.user)
        log_admin_action(self.request, "Uploaded media file", f"Name: {media.name}")

    def perform_destroy(self, instance):
        name = instance.name
        instance.delete()
        log_admin_action(self.request, "Deleted media file", f"Name: {name}")
