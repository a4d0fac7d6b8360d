"""Request body parsing: JSON, or HTML form fields read into the body."""
from django.http import HttpRequest
from ninja.parser import Parser

FORM_CONTENT_TYPES = ('multipart/form-data', 'application/x-www-form-urlencoded')


class FormOrJSONParser(Parser):
    def parse_body(self, request: HttpRequest):
        if request.content_type in FORM_CONTENT_TYPES:
            return request.POST.dict()
        return super().parse_body(request)
