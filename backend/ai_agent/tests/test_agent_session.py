"""
Knowledge base and realtime session tests. The outbound HTTP call is mocked.
"""
import pytest
from unittest.mock import MagicMock, patch

import requests

from ai_agent.services import AgentSessionService, KnowledgeBaseService
from core_backend.exceptions import NotFoundError, UpstreamError
from restaurants.models import Table


@pytest.mark.django_db
class TestKnowledgeBase:
    def test_contains_available_items_grouped_by_category(
        self, owner_a, restaurant_a, menu_item_a, unavailable_item_a
    ):
        knowledge_base = KnowledgeBaseService.build(owner_a.config_key)

        assert knowledge_base["owner"] == {"first_name": "Ana", "last_name": "Pizza"}
        restaurant = knowledge_base["restaurants"][0]
        assert restaurant["name"] == "Pizza Place"
        assert restaurant["menu"] == [
            {
                "category": "Pizza",
                "items": [
                    {
                        "id": menu_item_a.id,
                        "name": "Margherita",
                        "description": "Tomato, mozzarella, basil",
                        "price": "12.99",
                        "currency": "USD",
                        "tags": ["vegetarian"],
                        "allergens": ["gluten", "dairy"],
                    }
                ],
            }
        ]

    def test_tables_are_generated_for_the_agent(self, owner_a, restaurant_a):
        knowledge_base = KnowledgeBaseService.build(owner_a.config_key)

        tables = knowledge_base["restaurants"][0]["tables"]
        assert [t["table_number"] for t in tables] == [1, 2, 3, 4]
        assert Table.objects.filter(restaurant=restaurant_a).count() == 4

    def test_unknown_key(self, db):
        with pytest.raises(NotFoundError) as exc_info:
            KnowledgeBaseService.build("usr_doesnotexist")
        assert exc_info.value.message == "User or restaurant not found"

    def test_owner_without_restaurants(self, owner_b):
        with pytest.raises(NotFoundError):
            KnowledgeBaseService.build(owner_b.config_key)


@pytest.mark.django_db
class TestCreateSession:
    @patch("ai_agent.services.requests.post")
    def test_posts_config_and_returns_session(self, mock_post, owner_a, restaurant_a, menu_item_a, settings):
        settings.AI_AGENT_MODEL = "test-model"
        settings.AI_AGENT_VOICE = "test-voice"
        mock_post.return_value = MagicMock(
            status_code=200, json=MagicMock(return_value={"id": "sess_1", "client_secret": {"value": "x"}})
        )

        session = AgentSessionService.create_session(owner_a.config_key)

        assert session["id"] == "sess_1"
        payload = mock_post.call_args.kwargs["json"]
        assert payload["model"] == "test-model"
        assert payload["voice"] == "test-voice"
        assert [tool["name"] for tool in payload["tools"]][0] == "create_order"
        assert "Margherita" in payload["instructions"]
        assert mock_post.call_args.kwargs["timeout"] == settings.AI_AGENT_TIMEOUT

    @patch("ai_agent.services.requests.post")
    def test_http_failure_is_upstream_error(self, mock_post, owner_a, restaurant_a):
        mock_post.side_effect = requests.ConnectionError("connection refused")

        with pytest.raises(UpstreamError):
            AgentSessionService.create_session(owner_a.config_key)

    @patch("ai_agent.services.requests.post")
    def test_error_status_is_upstream_error(self, mock_post, owner_a, restaurant_a):
        response = MagicMock(status_code=401)
        response.raise_for_status.side_effect = requests.HTTPError("401 Unauthorized")
        mock_post.return_value = response

        with pytest.raises(UpstreamError):
            AgentSessionService.create_session(owner_a.config_key)


@pytest.mark.django_db
class TestAgentEndpoints:
    @patch("ai_agent.services.requests.post")
    def test_session_endpoint(self, mock_post, api_client, owner_a, restaurant_a):
        mock_post.return_value = MagicMock(json=MagicMock(return_value={"id": "sess_2"}))

        response = api_client.post(f"/api/ai-agent/session/?config_key={owner_a.config_key}")

        assert response.status_code == 201
        assert response.data == {"id": "sess_2"}

    def test_session_requires_config_key(self, api_client):
        response = api_client.post("/api/ai-agent/session/")

        assert response.status_code == 400
        assert response.data["message"] == "config_key query parameter is required"

    @patch("ai_agent.services.requests.post")
    def test_upstream_failure_is_502(self, mock_post, api_client, owner_a, restaurant_a):
        mock_post.side_effect = requests.Timeout("timed out")

        response = api_client.post(f"/api/ai-agent/session/?config_key={owner_a.config_key}")

        assert response.status_code == 502
        assert response.data["error"] == "Bad Gateway"

    def test_tool_endpoint_without_jwt(self, api_client, restaurant_a, table_a, menu_item_a):
        response = api_client.post(
            "/api/ai-agent/tool/create_order/",
            {
                "restaurantId": restaurant_a.id,
                "tableId": table_a.id,
                "items": [{"menuItemId": menu_item_a.id, "quantity": 1}],
            },
            format="json",
        )

        assert response.status_code == 201, response.data
        assert response.data["total"] == "12.99"

    def test_tool_endpoint_validation_error_shape(self, api_client, restaurant_a, table_a):
        response = api_client.post(
            "/api/ai-agent/tool/create_order/",
            {"restaurantId": restaurant_a.id, "tableId": table_a.id, "items": []},
            format="json",
        )

        assert response.status_code == 400
        assert response.data["statusCode"] == 400

    def test_tools_listing(self, api_client):
        response = api_client.get("/api/ai-agent/tools/")

        assert response.status_code == 200
        assert len(response.data) == 4
        assert response.data[0]["name"] == "create_order"
