class PostCheckError(Exception):
    """Base class for errors raised while analyzing an upload."""


class ConfigurationError(PostCheckError):
    pass


class UnsupportedFileType(PostCheckError):
    """Declared MIME type is neither an image nor a PDF."""


class UnsupportedFormat(PostCheckError):
    """Image bytes are not a PNG or JPEG."""


class ExtractionFailed(PostCheckError):
    pass


class ModelInvocationFailed(PostCheckError):
    pass


class ResponseParseFailure(ValueError):
    """Model output could not be decoded as a JSON object.

    Only raised inside the normalizer, which answers it with a fallback result.
    """
