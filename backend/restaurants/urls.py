from django.urls import path

from . import views

app_name = "restaurants"

urlpatterns = [
    path("<int:restaurant_id>/menu/", views.RestaurantMenuView.as_view(), name="menu"),
]
