import uuid

from django.db import models


class Property(models.Model):
    """A rental listing. The messaging service only reads it to find the landlord."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=255)
    landlord_id = models.CharField(max_length=100, db_index=True)
    location = models.CharField(max_length=255, blank=True)
    price = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'properties'
        verbose_name_plural = 'properties'

    def __str__(self):
        return f"{self.title} ({self.id})"

    def as_context(self):
        return {
            'id': str(self.id),
            'title': self.title,
            'landlord_id': self.landlord_id,
            'location': self.location,
        }
