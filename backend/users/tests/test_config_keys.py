"""
Opaque config key generation for users and restaurants.
"""
import re
import pytest

from restaurants.models import Restaurant


@pytest.mark.django_db
class TestConfigKeys:
    def test_user_key_format(self, owner_a):
        assert re.fullmatch(r"usr_[0-9a-f]{16}", owner_a.config_key)

    def test_restaurant_key_format(self, restaurant_a):
        assert re.fullmatch(r"rest_[0-9a-f]{16}", restaurant_a.config_key)

    def test_keys_are_unique_and_stable(self, owner_a, restaurant_a, restaurant_b):
        assert restaurant_a.config_key != restaurant_b.config_key

        original = restaurant_a.config_key
        restaurant_a.name = "Renamed"
        restaurant_a.save()
        assert Restaurant.objects.get(id=restaurant_a.id).config_key == original
