from django.core.exceptions import ValidationError as DjangoValidationError

from homeswift.exceptions import NotFound

from .models import Property


def get_property(property_id):
    """Fetch a property or raise ``NotFound``; malformed ids count as missing."""
    try:
        return Property.objects.get(pk=property_id)
    except (Property.DoesNotExist, DjangoValidationError, ValueError):
        raise NotFound("Property not found")
