from django.urls import path

from . import views

app_name = "orders"

table_prefix = "restaurant/<int:restaurant_id>/table/<int:table_id>/"

urlpatterns = [
    path(
        "restaurant/<int:restaurant_id>/tables/",
        views.RestaurantTablesView.as_view(),
        name="restaurant-tables",
    ),
    path(table_prefix, views.TableDetailView.as_view(), name="table-detail"),
    path(f"{table_prefix}orders/", views.TableOrdersView.as_view(), name="table-orders"),
    path(f"{table_prefix}order/", views.CreateOrderView.as_view(), name="order-create"),
    path(
        f"{table_prefix}order/<int:order_id>/",
        views.OrderDetailView.as_view(),
        name="order-detail",
    ),
    path(
        f"{table_prefix}order/<int:order_id>/status/",
        views.OrderStatusView.as_view(),
        name="order-status",
    ),
]
