#!/usr/bin/env python3

"""
APRS objects (``;``) and items (``)``): positions reported on behalf of
something other than the sending station.
"""

import re

from .datatype import APRSDataType
from .datetime import decode as decode_datetime, DHMBaseTimestamp
from .payload import APRSRawPayload
from .position import decode_position
from .report import APRSPosition

NAME_LENGTH = 9
LIVE = '*'
KILLED = '_'
ITEM_LIVE = '!'


class APRSObjectPayload(APRSPosition):
    """
    An object report.  `alive` is 1 for a live object, 0 once killed.
    """
    FIELDS = APRSPosition.FIELDS + (
            'object_name', 'live_killed', 'alive',
    )

    @classmethod
    def decode(cls, data, log):
        header_length = NAME_LENGTH + 1 + DHMBaseTimestamp.TS_LENGTH
        if len(data) < header_length:
            log.debug('Object report too short: %r', data)
            return APRSRawPayload(APRSDataType.OBJECT, data)

        name = data[0:NAME_LENGTH].rstrip()
        live_killed = data[NAME_LENGTH]
        tsstr = data[NAME_LENGTH+1:header_length]
        try:
            timestamp = decode_datetime(tsstr)
        except ValueError as e:
            log.debug('Object %r has invalid timestamp: %s', name, e)
            timestamp = None

        position = decode_position(
                data[header_length:], APRSDataType.OBJECT, log)
        fields = position.fields()
        fields.update(
                data_type=APRSDataType.OBJECT,
                timestamp=timestamp
        )
        return cls(
                object_name=name,
                live_killed=live_killed,
                **fields
        )

    def __init__(self, object_name, live_killed, **kwargs):
        super(APRSObjectPayload, self).__init__(**kwargs)
        self.object_name = object_name
        self.live_killed = live_killed
        self.alive = 1 if live_killed == LIVE else 0


class APRSItemPayload(APRSPosition):
    """
    An item report.  The name is 3 to 9 characters, terminated by ``!``
    (live) or ``_`` (killed).
    """
    FIELDS = APRSPosition.FIELDS + (
            'item_name', 'live_killed', 'alive',
    )
    ITEM_RE = re.compile(r'^([^!_]{3,9})([!_])(.*)$', re.DOTALL)

    @classmethod
    def decode(cls, data, log):
        match = cls.ITEM_RE.match(data)
        if match is None:
            log.debug('Not an item report: %r', data)
            return APRSRawPayload(APRSDataType.ITEM, data)

        position = decode_position(match.group(3), APRSDataType.ITEM, log)
        fields = position.fields()
        fields.update(data_type=APRSDataType.ITEM)
        return cls(
                item_name=match.group(1),
                live_killed=match.group(2),
                **fields
        )

    def __init__(self, item_name, live_killed, **kwargs):
        super(APRSItemPayload, self).__init__(**kwargs)
        self.item_name = item_name
        self.live_killed = live_killed
        self.alive = 1 if live_killed == ITEM_LIVE else 0
