from django.urls import path
from .views import (
    CostEstimateView, OrderCreateView, OrderListView, OrderStatsView, OrderDetailView,
    OrderTrackingView, OrderCancelView, OrderConfirmView, OrderStatusUpdateView,
    OrderEditView, OrderDeleteView,
)

urlpatterns = [
    path("orders/estimate/",                      CostEstimateView.as_view(),      name="order-estimate"),
    path("orders/create/",                        OrderCreateView.as_view(),       name="order-create"),
    path("orders/stats/",                         OrderStatsView.as_view(),        name="order-stats"),
    path("orders/",                               OrderListView.as_view(),         name="order-list"),
    path("orders/<str:order_number>/",            OrderDetailView.as_view(),       name="order-detail"),
    path("orders/<str:order_number>/tracking/",   OrderTrackingView.as_view(),     name="order-tracking"),
    path("orders/<str:order_number>/cancel/",     OrderCancelView.as_view(),       name="order-cancel"),
    path("orders/<str:order_number>/confirm/",    OrderConfirmView.as_view(),      name="order-confirm"),
    path("orders/<str:order_number>/status/",     OrderStatusUpdateView.as_view(), name="order-status"),
    path("orders/<str:order_number>/edit/",       OrderEditView.as_view(),         name="order-edit"),
    path("orders/<str:order_number>/delete/",     OrderDeleteView.as_view(),       name="order-delete"),
]
