import logging

from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from ai_agent.services import AgentSessionService, AgentToolService
from ai_agent.tools import TOOL_DEFINITIONS
from core_backend.exceptions import BadRequestError
from orders.serializers import OrderSerializer

logger = logging.getLogger(__name__)


class AgentSessionView(APIView):
    """
    Open a voice agent session for the owner identified by ``?config_key=``.

    Called from the public ordering widget, so no JWT is expected.
    """

    authentication_classes = []
    permission_classes = [permissions.AllowAny]

    def post(self, request):
        config_key = request.query_params.get("config_key")
        if not config_key:
            raise BadRequestError("config_key query parameter is required")

        session = AgentSessionService.create_session(config_key)
        return Response(session, status=status.HTTP_201_CREATED)


class AgentToolView(APIView):
    """Execute a tool call made by the voice agent."""

    authentication_classes = []
    permission_classes = [permissions.AllowAny]

    def post(self, request, tool_name):
        order = AgentToolService.dispatch(tool_name, request.data)
        response_status = (
            status.HTTP_201_CREATED if tool_name == "create_order" else status.HTTP_200_OK
        )
        return Response(OrderSerializer(order).data, status=response_status)


class AgentToolListView(APIView):
    authentication_classes = []
    permission_classes = [permissions.AllowAny]

    def get(self, request):
        return Response(TOOL_DEFINITIONS)
