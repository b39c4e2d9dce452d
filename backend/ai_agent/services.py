import json
import logging

import requests
from django.conf import settings
from django.core.serializers.json import DjangoJSONEncoder
from django.db.models import Prefetch

from ai_agent.serializers import (
    AddItemsToolSerializer,
    CreateOrderToolSerializer,
    OrderContextSerializer,
)
from ai_agent.tools import TOOL_DEFINITIONS
from core_backend.exceptions import BadRequestError, NotFoundError, UpstreamError
from orders.services import OrderService, TableService
from restaurants.models import MenuCategory, MenuItem, Restaurant
from users.models import User

logger = logging.getLogger(__name__)


class KnowledgeBaseService:
    """Builds the restaurant data the voice agent is allowed to talk about."""

    @staticmethod
    def build(config_key) -> dict:
        """
        Owner, restaurants, tables and currently available menu items for the
        user holding config_key.

        Raises:
            NotFoundError: unknown key, or a user without restaurants
        """
        user = User.objects.filter(config_key=config_key).first() if config_key else None
        restaurants = list(Restaurant.objects.filter(owner=user)) if user else []
        if not restaurants:
            logger.warning(f"Knowledge base requested for unknown config key {config_key!r}")
            raise NotFoundError("User or restaurant not found")

        for restaurant in restaurants:
            TableService.ensure_tables(restaurant)

        available_items = MenuItem.objects.filter(is_available=True).order_by("name")
        restaurants = Restaurant.objects.filter(owner=user).prefetch_related(
            "tables",
            Prefetch(
                "categories",
                queryset=MenuCategory.objects.prefetch_related(
                    Prefetch("items", queryset=available_items)
                ).order_by("name"),
            ),
        )

        return {
            "owner": {"first_name": user.first_name, "last_name": user.last_name},
            "restaurants": [
                KnowledgeBaseService._restaurant_entry(restaurant) for restaurant in restaurants
            ],
        }

    @staticmethod
    def _restaurant_entry(restaurant) -> dict:
        menu = []
        for category in restaurant.categories.all():
            items = [
                {
                    "id": item.id,
                    "name": item.name,
                    "description": item.description,
                    "price": f"{item.price:.2f}",
                    "currency": item.currency,
                    "tags": item.tags,
                    "allergens": item.allergens,
                }
                for item in category.items.all()
            ]
            # Categories whose items are all unavailable are left out
            if items:
                menu.append({"category": category.name, "items": items})

        return {
            "id": restaurant.id,
            "name": restaurant.name,
            "description": restaurant.description,
            "address": restaurant.address,
            "phone": restaurant.phone,
            "tables": [
                {"id": table.id, "table_number": table.table_number}
                for table in restaurant.tables.all()
            ],
            "menu": menu,
        }


class AgentSessionService:
    """Opens a realtime voice session configured with our tools and data."""

    @staticmethod
    def build_session_config(knowledge_base) -> dict:
        knowledge = json.dumps(knowledge_base, cls=DjangoJSONEncoder, ensure_ascii=False)
        instructions = settings.AI_AGENT_INSTRUCTIONS
        return {
            "model": settings.AI_AGENT_MODEL,
            "voice": settings.AI_AGENT_VOICE,
            "instructions": f"{instructions}\n\nKnowledge base:\n{knowledge}".strip(),
            "tools": TOOL_DEFINITIONS,
        }

    @staticmethod
    def create_session(config_key) -> dict:
        """
        Raises:
            NotFoundError: see KnowledgeBaseService.build
            UpstreamError: the session endpoint failed or returned an error status
        """
        knowledge_base = KnowledgeBaseService.build(config_key)
        payload = AgentSessionService.build_session_config(knowledge_base)

        try:
            response = requests.post(
                settings.AI_AGENT_SESSION_URL,
                json=payload,
                headers={
                    "Authorization": f"Bearer {settings.OPENAI_API_KEY}",
                    "Content-Type": "application/json",
                },
                timeout=settings.AI_AGENT_TIMEOUT,
            )
            response.raise_for_status()
            session = response.json()
        except (requests.RequestException, ValueError) as exc:
            logger.error(f"Voice agent session request failed: {exc}", exc_info=True)
            raise UpstreamError("Could not create voice agent session")

        logger.info(
            f"Created voice agent session for {len(knowledge_base['restaurants'])} restaurant(s)"
        )
        return session


class AgentToolService:
    """
    Runs a tool call from the voice agent against the order services.

    Arguments go through the same validation and ownership checks as the
    HTTP order endpoints.
    """

    @staticmethod
    def _create_order(arguments):
        data = AgentToolService._validate(CreateOrderToolSerializer, arguments)
        return OrderService.create_order(data["restaurant_id"], data["table_id"], data["items"])

    @staticmethod
    def _add_items_to_order(arguments):
        data = AgentToolService._validate(AddItemsToolSerializer, arguments)
        return OrderService.add_items_to_order(
            data["restaurant_id"], data["table_id"], data["order_id"], data["items"]
        )

    @staticmethod
    def _get_order(arguments):
        data = AgentToolService._validate(OrderContextSerializer, arguments)
        return OrderService.get_order_by_id(
            data["restaurant_id"], data["table_id"], data["order_id"]
        )

    @staticmethod
    def _cancel_order(arguments):
        data = AgentToolService._validate(OrderContextSerializer, arguments)
        return OrderService.cancel_order(data["restaurant_id"], data["table_id"], data["order_id"])

    @staticmethod
    def _validate(serializer_class, arguments):
        serializer = serializer_class(data=arguments)
        serializer.is_valid(raise_exception=True)
        return serializer.validated_data

    HANDLERS = {
        "create_order": "_create_order",
        "add_items_to_order": "_add_items_to_order",
        "get_order": "_get_order",
        "cancel_order": "_cancel_order",
    }

    @staticmethod
    def dispatch(name, arguments):
        handler_name = AgentToolService.HANDLERS.get(name)
        if handler_name is None:
            raise BadRequestError(f"Unknown tool: {name}")

        logger.info(f"Voice agent called tool {name}")
        return getattr(AgentToolService, handler_name)(arguments)
