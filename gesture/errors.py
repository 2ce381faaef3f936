# gesture/errors.py


class SignTyperError(Exception):
    pass


class InvalidFrame(SignTyperError):
    """Malformed capture (no image / zero dimensions). The frame is dropped."""


class CaptureBindingFailure(SignTyperError):
    """No camera could be opened for the selected side."""


class InferenceFailure(SignTyperError):
    """The landmark extractor failed on a frame."""
