from typing import Optional

from interneval.constants import (
    ERROR_API_KEY_MISSING,
    ERROR_CRITERIA_EXTRACTION,
    ERROR_GENERATION_IN_PROGRESS,
    ERROR_TEMPLATE_GENERATION,
)
from interneval.models.state import ErrorKind


class TemplateError(Exception):
    """Base error for criteria template acquisition"""

    kind: ErrorKind = ErrorKind.ACQUISITION_FAILURE

    def __init__(self, message: str = ERROR_TEMPLATE_GENERATION, kind: Optional[ErrorKind] = None):
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind


class MissingCredentialError(TemplateError):
    kind = ErrorKind.MISSING_CREDENTIAL

    def __init__(self, message: str = ERROR_API_KEY_MISSING):
        super().__init__(message)


class EmptyTemplateError(TemplateError):
    kind = ErrorKind.EMPTY_TEMPLATE

    def __init__(self, message: str = ERROR_CRITERIA_EXTRACTION):
        super().__init__(message)


class AcquisitionError(TemplateError):
    """Network, service or response parsing failure"""
    kind = ErrorKind.ACQUISITION_FAILURE


class GenerationInProgressError(Exception):
    def __init__(self, message: str = ERROR_GENERATION_IN_PROGRESS):
        super().__init__(message)
        self.message = message
