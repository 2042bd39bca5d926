from django.test import TestCase

from users.models import UserProfile
from users.profiles import display_for, display_map


class UserProfileModelTest(TestCase):
    def setUp(self):
        self.profile = UserProfile.objects.create(
            user_id="landlord1",
            full_name="Ada Landlord",
            email="ada@example.com",
            user_type="landlord",
        )

    def test_profile_str_representation(self):
        """Test the string representation of a profile"""
        self.assertEqual(str(self.profile), "Ada Landlord (landlord1)")

    def test_default_user_type_is_renter(self):
        profile = UserProfile.objects.create(user_id="renter1")
        self.assertEqual(profile.user_type, "renter")


class DisplayDataTest(TestCase):
    def setUp(self):
        UserProfile.objects.create(user_id="u1", full_name="First User", avatar_url="https://cdn.example.com/u1.png")

    def test_display_for_known_user(self):
        data = display_for("u1")
        self.assertEqual(data["id"], "u1")
        self.assertEqual(data["full_name"], "First User")
        self.assertEqual(data["avatar_url"], "https://cdn.example.com/u1.png")

    def test_display_for_unknown_user_uses_placeholder(self):
        data = display_for("ghost")
        self.assertEqual(data, {"id": "ghost", "full_name": "Unknown User", "avatar_url": None, "user_type": None})

    def test_display_for_empty_id(self):
        self.assertIsNone(display_for(""))

    def test_display_map_mixes_known_and_unknown(self):
        data = display_map(["u1", "ghost", None])
        self.assertEqual(set(data), {"u1", "ghost"})
        self.assertEqual(data["u1"]["full_name"], "First User")
        self.assertEqual(data["ghost"]["full_name"], "Unknown User")
