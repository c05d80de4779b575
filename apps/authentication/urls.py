from django.urls import path
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView
from .views import (
    RegisterView, ProfileView, PasswordChangeView,
    AccountListCreateView, AccountDetailView, CustomerDirectoryView,
)

urlpatterns = [
    path("register/",         RegisterView.as_view(),          name="auth-register"),
    path("login/",            TokenObtainPairView.as_view(),   name="auth-login"),
    path("refresh/",          TokenRefreshView.as_view(),      name="auth-refresh"),
    path("me/",               ProfileView.as_view(),           name="auth-me"),
    path("me/password/",      PasswordChangeView.as_view(),    name="auth-password"),
    path("users/",            AccountListCreateView.as_view(), name="auth-users"),
    path("users/<uuid:pk>/",  AccountDetailView.as_view(),     name="auth-user-detail"),
    path("customers/",        CustomerDirectoryView.as_view(), name="auth-customers"),
]
