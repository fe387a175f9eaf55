"""Presigned upload URLs for the S3 media bucket."""

import logging
from urllib.parse import quote

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from django.conf import settings

from apps.utils.exceptions import ServiceUnavailable
from apps.utils.utils import epoch_millis

logger = logging.getLogger(__name__)

# Same unreserved set as JavaScript's encodeURIComponent
_KEY_SAFE_CHARS = "!~*'()"


def upload_key(file_name: str) -> str:
    return f"uploads/{epoch_millis()}_{quote(file_name, safe=_KEY_SAFE_CHARS)}"


class MediaStorage:

    def __init__(self, bucket=None, region=None, client=None):
        self.bucket = bucket if bucket is not None else settings.MEDIA_BUCKET_NAME
        self.region = region or settings.AWS_REGION
        self._client = client

    @property
    def client(self):
        if self._client is None:
            # Credentials come from the standard AWS env vars / instance role
            self._client = boto3.client("s3", region_name=self.region)
        return self._client

    def public_url(self, key: str) -> str:
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"

    def presigned_upload(self, file_name: str, file_type: str) -> dict:
        """
        Returns a short-lived PUT URL for the browser plus the permanent URL
        the object will have once uploaded.
        """
        if not self.bucket:
            raise ServiceUnavailable("Media storage is not configured. Set MEDIA_BUCKET_NAME.")

        key = upload_key(file_name)
        try:
            upload_url = self.client.generate_presigned_url(
                "put_object",
                Params={"Bucket": self.bucket, "Key": key, "ContentType": file_type},
                ExpiresIn=settings.MEDIA_UPLOAD_URL_TTL,
            )
        except (BotoCoreError, ClientError) as exc:
            logger.error("Error generating presigned upload URL: %s", exc, exc_info=True)
            raise ServiceUnavailable(
                "Could not generate upload URL. Ensure the media bucket and AWS credentials are configured."
            )

        return {"upload_url": upload_url, "file_url": self.public_url(key)}


def get_storage() -> MediaStorage:
    return MediaStorage()
