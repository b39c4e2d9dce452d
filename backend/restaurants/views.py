import logging

from rest_framework import status
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView

from restaurants.serializers import MenuItemSerializer, MenuUploadSerializer
from restaurants.services import MenuImportService, MenuService

logger = logging.getLogger(__name__)


class RestaurantMenuView(APIView):
    """
    Owner-only menu management for one restaurant.

    GET returns the flat menu, PUT replaces it from a CSV upload
    (multipart field ``menu_csv``), DELETE removes it.
    """

    parser_classes = [MultiPartParser, FormParser, JSONParser]

    def get(self, request, restaurant_id):
        restaurant = MenuService.get_owned_restaurant(restaurant_id, request.user)
        items = MenuService.get_menu(restaurant)
        return Response(MenuItemSerializer(items, many=True).data)

    def put(self, request, restaurant_id):
        restaurant = MenuService.get_owned_restaurant(restaurant_id, request.user)

        serializer = MenuUploadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        rows = MenuImportService.parse_csv(serializer.validated_data["menu_csv"])
        summary = MenuImportService.replace_menu(restaurant.id, rows)
        return Response(
            {"message": "Menu replaced successfully", **summary},
            status=status.HTTP_200_OK,
        )

    def delete(self, request, restaurant_id):
        restaurant = MenuService.get_owned_restaurant(restaurant_id, request.user)
        summary = MenuService.delete_menu(restaurant)
        return Response({"message": "Menu deleted successfully", **summary})
