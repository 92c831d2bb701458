"""
Custom middleware for the SIMADAM project.
"""

from django.conf import settings


class RemoveXFrameForMedia:
    """
    Drops X-Frame-Options on uploaded media (school logo, background images)
    so the front end can embed them.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        response = self.get_response(request)

        if request.path.startswith(settings.MEDIA_URL) and "X-Frame-Options" in response.headers:
            del response.headers["X-Frame-Options"]

        return response
