from unittest.mock import MagicMock, patch
from urllib.parse import urlparse, parse_qs

import boto3
from botocore.exceptions import NoCredentialsError
from django.contrib.auth import get_user_model
from django.test import TestCase, override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from apps.accounts.models import AdminActivityLog
from .models import MediaFile
from .storage import MediaStorage, upload_key

User = get_user_model()


def offline_s3_client():
    return boto3.client(
        "s3",
        region_name="ap-south-1",
        aws_access_key_id="AKIATESTTESTTEST",
        aws_secret_access_key="test-secret",
    )


class UploadKeyTests(TestCase):

    @patch("apps.media_library.storage.epoch_millis", return_value=1700000000000)
    def test_key_is_timestamped_and_encoded(self, _):
        self.assertEqual(upload_key("summer sale (1).png"), "uploads/1700000000000_summer%20sale%20(1).png")
        self.assertEqual(upload_key("a/b&c.jpg"), "uploads/1700000000000_a%2Fb%26c.jpg")


class PresignedUrlTests(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.client.force_authenticate(
            User.objects.create_admin(email="ops@shop.test", password="0ps!Admin", name="Ops")
        )
        self.url = reverse("media-presigned-url")

    def test_missing_params(self):
        response = self.client.get(self.url, {"file_name": "banner.png"})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("file_type", response.data)

    def test_returns_upload_and_public_urls(self):
        storage = MediaStorage(bucket="shopfront-media", region="ap-south-1", client=offline_s3_client())

        with patch("apps.media_library.views.get_storage", return_value=storage):
            response = self.client.get(self.url, {"file_name": "banner.png", "file_type": "image/png"})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data["file_url"].startswith(
            "https://shopfront-media.s3.ap-south-1.amazonaws.com/uploads/"
        ))
        self.assertTrue(response.data["file_url"].endswith("_banner.png"))

        upload = urlparse(response.data["upload_url"])
        self.assertIn("shopfront-media", upload.netloc + upload.path)
        self.assertEqual(parse_qs(upload.query)["X-Amz-Expires"], ["900"])

    def test_storage_failure_is_service_unavailable(self):
        s3 = MagicMock()
        s3.generate_presigned_url.side_effect = NoCredentialsError()
        storage = MediaStorage(bucket="shopfront-media", region="ap-south-1", client=s3)

        with patch("apps.media_library.views.get_storage", return_value=storage):
            response = self.client.get(self.url, {"file_name": "banner.png", "file_type": "image/png"})

        self.assertEqual(response.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)

    @override_settings(MEDIA_BUCKET_NAME="")
    def test_unconfigured_bucket(self):
        response = self.client.get(self.url, {"file_name": "banner.png", "file_type": "image/png"})
        self.assertEqual(response.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)


class MediaLibraryTests(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.admin = User.objects.create_admin(email="ops@shop.test", password="0ps!Admin", name="Ops")
        self.client.force_authenticate(self.admin)

    def test_add_list_delete_are_audited(self):
        response = self.client.post(reverse("admin-media-list"), {
            "name": "banner.png",
            "url": "https://shopfront-media.s3.ap-south-1.amazonaws.com/uploads/1_banner.png",
            "file_type": "image/png",
            "size": 20480,
        }, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

        media = MediaFile.objects.get()
        self.assertEqual(media.uploaded_by, self.admin)
        self.assertEqual(len(self.client.get(reverse("admin-media-list")).data), 1)

        response = self.client.delete(reverse("admin-media-detail", kwargs={"pk": media.pk}))
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)

        actions = set(AdminActivityLog.objects.values_list("action", flat=True))
        self.assertEqual(actions, {"Uploaded media file", "Deleted media file"})
