from django.urls import path
from .views import PublicTrackingView

urlpatterns = [
    path("<str:identifier>/", PublicTrackingView.as_view(), name="public-tracking"),
]
