"""
REST framework exception handler for examination errors.

Maps the service-level exception hierarchy onto HTTP responses; everything
else is passed on to DRF's default handler.
"""

import logging

from rest_framework.response import Response
from rest_framework.views import exception_handler

from .exceptions import ExaminationError

logger = logging.getLogger(__name__)


def examination_exception_handler(exc, context):
    if isinstance(exc, ExaminationError):
        view = context.get("view")
        logger.warning(
            f"{exc.__class__.__name__} in {view.__class__.__name__ if view else 'unknown view'}: {exc.message}"
        )
        return Response(exc.to_dict(), status=exc.status_code)

    return exception_handler(exc, context)
