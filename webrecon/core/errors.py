"""Error kinds raised by the probing layer."""


class WebReconError(Exception):
    """Base class for scanner errors."""


class InvalidTarget(WebReconError):
    """The target string cannot be turned into a usable URL."""


class Unreachable(WebReconError):
    """Connection or timeout failure while talking to the target."""


class ProbeFailed(WebReconError):
    """A single probe failed for a reason other than connectivity."""


class UnsupportedCapability(WebReconError):
    """The local environment lacks a capability a check needs (e.g. TLS)."""
