"""
Identity API endpoints.

Registration and login. A successful login sets the signed session token in
the http-only ``token`` cookie; every project route reads it from there.
"""
from django.conf import settings
from django.http import HttpRequest, HttpResponse
from ninja import Router
from ninja.errors import HttpError

from .dtos import CredentialsIn, InfoOut
from .jwt_auth import create_session_token, get_session_cookie_settings
from .services import (
    EmailAlreadyExists,
    IncorrectPassword,
    UnknownEmail,
    authenticate_user,
    register_user,
)

router = Router(tags=["Identity"])


@router.post("/register", response=InfoOut)
def register(request: HttpRequest, payload: CredentialsIn):
    """
    Create an account. Does not log the user in.
    """
    try:
        register_user(payload.email, payload.password)
    except EmailAlreadyExists:
        raise HttpError(400, "Email already exists")
    return InfoOut()


@router.post("/login", response=InfoOut)
def login(request: HttpRequest, payload: CredentialsIn):
    """
    Verify credentials and set the session token cookie.
    """
    try:
        user = authenticate_user(payload.email, payload.password)
    except UnknownEmail:
        raise HttpError(400, "Email does not exist")
    except IncorrectPassword:
        raise HttpError(400, "Password is incorrect")

    token = create_session_token(user.id, user.email)

    response = HttpResponse(InfoOut().model_dump_json(), content_type='application/json')
    response.set_cookie(settings.SESSION_TOKEN_COOKIE, token, **get_session_cookie_settings())
    return response
