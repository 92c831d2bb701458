from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import (
    LoginView,
    LogoutView,
    RefreshView,
    reset_password,
    UserViewSet,
)

router = DefaultRouter()
router.register(r'users', UserViewSet)

urlpatterns = [
    path("auth/login/", LoginView.as_view(), name="auth_login"),
    path("auth/refresh/", RefreshView.as_view(), name="auth_refresh"),
    path("auth/logout/", LogoutView.as_view(), name="auth_logout"),
    path("auth/reset-password/", reset_password, name="auth_reset_password"),
    path("", include(router.urls)),
]
