from django.db import models
from django.conf import settings
from apps.utils.models import TimestampedModel


class MediaFile(TimestampedModel):
    """
    A file already uploaded to the media bucket. Only the URL is stored here.
    """
    name = models.CharField(max_length=255)
    url = models.URLField(max_length=1024)
    file_type = models.CharField(max_length=100, blank=True)
    size = models.PositiveBigIntegerField(null=True, blank=True, help_text="Bytes")
    uploaded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='media_files',
    )

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return self.name
