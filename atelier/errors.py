"""Error taxonomy and the translation of low-level failures into user-facing ones."""

import logging
from typing import NoReturn

logger = logging.getLogger(__name__)


class ServiceError(RuntimeError):
    """Base for the errors a caller of the styling service is allowed to see."""

    message = "Falha no processamento da IA. Tente novamente."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)


class RateLimitError(ServiceError):
    message = "Muitas solicitações. Aguarde um momento."


class ConnectivityError(ServiceError):
    message = "Erro de conexão. Verifique sua internet."


class ProcessingError(ServiceError):
    message = "Falha no processamento da IA. Tente novamente."


class ConfigurationError(ServiceError):
    """The Gemini client could not be initialized (missing key, bad setup)."""

    message = "Falha ao inicializar serviço de IA. Tente recarregar a página."


class ResponseParseError(ValueError):
    """The model answered, but not with JSON of the expected shape."""


class GenerationError(RuntimeError):
    """The model answered, but the response carried no image."""


def raise_user_facing(error: BaseException) -> NoReturn:
    """Re-raise ``error`` as one of the fixed user-facing categories."""
    if isinstance(error, ConfigurationError):
        raise error

    logger.error("Gemini API error: %r", error)
    if isinstance(error, (ResponseParseError, GenerationError)):
        raise ProcessingError() from error

    msg = str(error).lower()

    if "429" in msg or "quota" in msg:
        raise RateLimitError() from error
    if "xhr" in msg or "network" in msg or "fetch" in msg:
        raise ConnectivityError() from error
    raise ProcessingError() from error
