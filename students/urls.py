from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import CertificatePickupViewSet, StudentCardViewSet, StudentTransferViewSet, StudentViewSet

router = DefaultRouter()
router.register(r'students', StudentViewSet)
router.register(r'certificate-pickups', CertificatePickupViewSet)
router.register(r'student-transfers', StudentTransferViewSet)
router.register(r'student-cards', StudentCardViewSet)

urlpatterns = [
    path('', include(router.urls)),
]
