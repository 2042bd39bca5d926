from django.db import models


class UserProfile(models.Model):
    USER_TYPE_CHOICES = [
        ("renter", "Renter"),
        ("landlord", "Landlord"),
    ]

    user_id = models.CharField(max_length=100, unique=True, primary_key=True)
    full_name = models.CharField(max_length=150, blank=True)
    email = models.EmailField(max_length=255, null=True, blank=True)
    avatar_url = models.URLField(max_length=500, null=True, blank=True)
    user_type = models.CharField(max_length=20, choices=USER_TYPE_CHOICES, default="renter")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'user_profiles'
        indexes = [
            models.Index(fields=['email'], name='user_profiles_email_idx'),
        ]

    def __str__(self):
        return f"{self.full_name or 'Unnamed'} ({self.user_id})"

    def as_display(self):
        return {
            'id': self.user_id,
            'full_name': self.full_name or 'Unknown User',
            'avatar_url': self.avatar_url,
            'user_type': self.user_type,
        }
