from django.db import connection
from drf_spectacular.utils import extend_schema
from rest_framework import permissions, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response


@extend_schema(operation_id="health_check", responses={200: None, 503: None}, tags=["health"])
@api_view(["GET"])
@permission_classes([permissions.AllowAny])
def health_check(request):
    """
    Report whether the API and its database are reachable.

    - 200 OK: database answered ``SELECT 1``
    - 503 Service Unavailable: the database connection failed
    """
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
    except Exception as e:
        return Response({
            "status": "unhealthy",
            "service": "simadam_api",
            "database": "disconnected",
            "error": str(e),
        }, status=status.HTTP_503_SERVICE_UNAVAILABLE)

    return Response({
        "status": "healthy",
        "service": "simadam_api",
        "database": "connected",
    }, status=status.HTTP_200_OK)
