#!/usr/bin/env python3

"""
APRS decoding exceptions.  Structural problems with a frame abort the
decode with one of these; problems with the information field do not, they
are reported in the decoded payload instead.
"""


class APRSDecodeError(ValueError):
    """
    Base class for all frame-level decoding failures.
    """
    pass


class NoSenderDelimiter(APRSDecodeError):
    """
    The frame has no ``>`` separating the sender from the path.
    """
    pass


class NoBodyDelimiter(APRSDecodeError):
    """
    The frame has no ``:`` separating the path from the information field.
    """
    pass


class InvalidCallsign(APRSDecodeError):
    pass


class InvalidUtf8(APRSDecodeError):
    pass


class InvalidPacket(APRSDecodeError):
    """
    The frame is structurally valid but carries nothing decodable, or
    decoding failed unexpectedly.
    """
    pass
