from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import (
    BackgroundSettingViewSet,
    ClassroomViewSet,
    SchoolProfileLogoView,
    SchoolProfileView,
    TeacherViewSet,
    dashboard_stats,
)

router = DefaultRouter()
router.register(r'teachers', TeacherViewSet)
router.register(r'classes', ClassroomViewSet)
router.register(r'backgrounds', BackgroundSettingViewSet)

urlpatterns = [
    path('school-profile/', SchoolProfileView.as_view(), name='school_profile'),
    path('school-profile/upload-logo/', SchoolProfileLogoView.as_view(), name='school_profile_upload_logo'),
    path('dashboard/stats/', dashboard_stats, name='dashboard_stats'),
    path('', include(router.urls)),
]
