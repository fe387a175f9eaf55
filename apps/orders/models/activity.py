from django.db import models

__all__ = ["ActivityLog"]


class ActivityLog(models.Model):
    """
    Public "recent purchases" feed entry. Anonymised, text only.
    """
    message = models.CharField(max_length=500)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return self.message
