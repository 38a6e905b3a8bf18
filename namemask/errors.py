"""Error kinds raised by the masking pipeline.

Everything derived from ``NameMaskError`` aborts the current run without
writing output. ``NoMatchFound`` is kept outside that hierarchy: it is an
ordinary outcome the CLI reports, not a failure.
"""


class NameMaskError(RuntimeError):
    pass


class ImageReadFailure(NameMaskError):
    pass


class ImageWriteFailure(NameMaskError):
    pass


class MaskingFailure(NameMaskError):
    pass


class EngineInitFailure(NameMaskError):
    pass


class RecognitionFailure(NameMaskError):
    def __init__(self, message, region=None):
        super().__init__(message)
        self.region = region


class NoMatchFound(Exception):
    def __init__(self, target, outcomes=None):
        super().__init__(f"No region matched {target!r}")
        self.target = target
        self.outcomes = list(outcomes or [])
