"""
URL configuration for the task tracker.

The API is mounted at the site root: /register, /login, /projects...
"""
from django.http import HttpResponse
from django.urls import path
from ninja import NinjaAPI
from ninja.errors import AuthenticationError, HttpError, ValidationError

from apps.projects.services import ProjectAccessDenied

from .parser import FormOrJSONParser

api = NinjaAPI(
    title="Task Tracker API",
    version="1.0.0",
    description="Personal projects and tasks",
    docs_url="/docs",
    parser=FormOrJSONParser(),
)

from apps.identity.api import router as identity_router
from apps.projects.api import router as projects_router

api.add_router("", identity_router)
api.add_router("/projects", projects_router)


# =============================================================================
# Error rendering
# =============================================================================

@api.exception_handler(HttpError)
def http_error(request, exc: HttpError):
    return api.create_response(request, {"error": str(exc)}, status=exc.status_code)


@api.exception_handler(AuthenticationError)
def unauthorized(request, exc: AuthenticationError):
    return api.create_response(request, {"error": "Unauthorized"}, status=401)


@api.exception_handler(ValidationError)
def validation_failed(request, exc: ValidationError):
    return api.create_response(
        request,
        {"error": "Validation failed", "details": exc.errors},
        status=400,
    )


@api.exception_handler(ProjectAccessDenied)
def project_access_denied(request, exc: ProjectAccessDenied):
    # Plain text, unlike every other error body
    return HttpResponse("Go away", status=403, content_type="text/plain")


urlpatterns = [
    path('', api.urls),
]
