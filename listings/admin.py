from django.contrib import admin
from .models import Property


@admin.register(Property)
class PropertyAdmin(admin.ModelAdmin):
    list_display = ['id', 'title', 'landlord_id', 'location', 'price', 'created_at']
    search_fields = ['title', 'landlord_id', 'location']
    readonly_fields = ['id', 'created_at']
