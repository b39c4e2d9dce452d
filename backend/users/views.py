from rest_framework import permissions
from rest_framework.response import Response
from rest_framework.views import APIView

from users.models import User
from users.serializers import UserProfileSerializer


class UserProfileView(APIView):
    """
    The logged-in owner, including the config key the voice agent session
    is opened with.
    """

    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        user = User.objects.prefetch_related("restaurants").get(id=request.user.id)
        return Response(UserProfileSerializer(user).data)
