from django.conf import settings
from rest_framework_simplejwt.authentication import JWTAuthentication


class CookieJWTAuthentication(JWTAuthentication):
    """
    Reads the access token from the auth cookie.

    Listed after the header-based JWTAuthentication, so it only runs for
    browser clients that carry the token in a cookie instead of a header.
    """

    def authenticate(self, request):
        cookie_name = settings.SIMPLE_JWT.get("AUTH_COOKIE", "access_token")
        access_token = request.COOKIES.get(cookie_name)
        if not access_token:
            return None

        validated_token = self.get_validated_token(access_token)
        return self.get_user(validated_token), validated_token
