from django.contrib import admin
from .models import UserProfile


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    list_display = (
        "user_id",
        "full_name",
        "email",
        "user_type",
        "created_at",
    )
    list_filter = ("user_type",)
    search_fields = ("user_id", "full_name", "email")
