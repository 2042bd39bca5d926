import uuid

from django.test import TestCase

from homeswift.exceptions import NotFound
from listings.models import Property
from listings.services import get_property


class GetPropertyTest(TestCase):
    def setUp(self):
        self.property = Property.objects.create(title="Two-bed flat", landlord_id="landlord1")

    def test_get_existing_property(self):
        self.assertEqual(get_property(self.property.id), self.property)
        self.assertEqual(get_property(str(self.property.id)).landlord_id, "landlord1")

    def test_missing_property_raises_not_found(self):
        with self.assertRaises(NotFound):
            get_property(uuid.uuid4())

    def test_malformed_id_raises_not_found(self):
        with self.assertRaises(NotFound):
            get_property("not-a-uuid")

    def test_context_shape(self):
        context = self.property.as_context()
        self.assertEqual(context["id"], str(self.property.id))
        self.assertEqual(context["landlord_id"], "landlord1")
