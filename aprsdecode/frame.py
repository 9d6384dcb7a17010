#!/usr/bin/env python3

"""
TNC2 frame handling: splitting ``SENDER>DEST,PATH:BODY`` into its parts.
"""

from .errors import NoSenderDelimiter, NoBodyDelimiter, InvalidCallsign

SENDER_DELIMITER = '>'
BODY_DELIMITER = ':'
PATH_DELIMITER = ','
SSID_DELIMITER = '-'
RELAYED_MARKER = '*'


def split_frame(text):
    """
    Split a TNC2 frame into sender, path and information field.  Only the
    first ``>`` and the first ``:`` after it are significant; everything
    else is part of the field it falls in.
    """
    (sender, sep, rest) = text.partition(SENDER_DELIMITER)
    if not sep:
        raise NoSenderDelimiter("No sender delimiter in frame: %r" % text)

    (path, sep, body) = rest.partition(BODY_DELIMITER)
    if not sep:
        raise NoBodyDelimiter("No body delimiter in frame: %r" % text)

    return (sender, path, body)


def split_path(path):
    """
    Split the routing field into destination and digipeater path.
    """
    (destination, _, digipeater_path) = path.partition(PATH_DELIMITER)
    return (destination, digipeater_path)


def tokenize_callsign(callsign):
    """
    Split a callsign into base call and SSID.  The SSID is whatever follows
    the last hyphen, and is None when there is no hyphen.
    """
    if not callsign:
        raise InvalidCallsign("Empty callsign")

    (base, sep, ssid) = callsign.rpartition(SSID_DELIMITER)
    if not sep:
        return (callsign, None)
    return (base, ssid)


class APRSDigipeater(object):
    """
    One hop of the digipeater path.
    """
    @classmethod
    def decode(cls, hop):
        if is_qconstruct(hop):
            return cls(hop, False)
        if hop.endswith(RELAYED_MARKER):
            return cls(hop.rstrip(RELAYED_MARKER), True)
        return cls(hop, False)

    def __init__(self, call, was_relayed=False):
        self.call = call
        self.was_relayed = was_relayed

    def __eq__(self, other):
        if not isinstance(other, APRSDigipeater):
            return NotImplemented
        return (self.call, self.was_relayed) \
                == (other.call, other.was_relayed)

    def __repr__(self): # pragma: no cover
        return '%s(call=%r, was_relayed=%r)' % (
                self.__class__.__name__, self.call, self.was_relayed
        )

    def __str__(self):
        if self.was_relayed:
            return self.call + RELAYED_MARKER
        return self.call

    def fields(self):
        return dict(call=self.call, wasdigied=int(self.was_relayed))


def is_qconstruct(hop):
    """
    APRS-IS q-constructs (qAC, qAR, ...) record how a packet entered the
    network; they are never relays.
    """
    return hop.startswith('q') and (len(hop) == 3)


def decode_digipeaters(path):
    """
    Decode the digipeater path into a list of `APRSDigipeater`.
    """
    if not path:
        return []
    return [APRSDigipeater.decode(hop) for hop in path.split(PATH_DELIMITER)]
