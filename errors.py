"""
Error taxonomy for the prediction flow.

Only MissingInput maps to a 400; every other error becomes a generic 500
at the request boundary.
"""


class PredictionError(Exception):
    """Base class for every failure raised while producing predictions."""


class MissingInput(PredictionError):
    """Profile or college list absent from the request."""


class FieldAccessFailure(PredictionError):
    """A profile field could not be rendered into the prompt."""


class BackendInvocationFailure(PredictionError):
    """Network, auth or quota error from the generative backend."""


class EmptyBackendResponse(PredictionError):
    """Backend answered (or timed out) without any usable text."""


class MalformedBackendResponse(PredictionError):
    """Backend text does not match the declared output schema."""
