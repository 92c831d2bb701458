from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import SppPaymentViewSet

router = DefaultRouter()
router.register(r'spp-payments', SppPaymentViewSet)

urlpatterns = [
    path('', include(router.urls)),
]
