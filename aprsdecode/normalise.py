#!/usr/bin/env python3

"""
Flatten a decoded packet into a single dictionary, using the field names
common to other APRS decoders (``srccallsign``, ``posambiguity``, ``wx``,
etc.) alongside our own.
"""

from enum import Enum

from .datatype import legacy_type
from .message import APRSMessagePayload
from .payload import APRSPayload
from .report import APRSPosition
from .objects import APRSObjectPayload, APRSItemPayload
from .weather import APRSWeatherPayload


# Fields every record carries, whatever the payload
RECORD_DEFAULTS = dict(
        alive=1,
        posambiguity=0,
        format='uncompressed',
        messaging=0,
        daodatumbyte=None,
        gpsfixstatus=None,
        mbits=None,
        message=None,
        phg=None,
        wx=None,
        radiorange=None,
        itemname=None,
)


def plain(value):
    """
    Reduce a decoded value to plain Python types.
    """
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [plain(v) for v in value]
    if isinstance(value, dict):
        return dict((k, plain(v)) for (k, v) in value.items())
    if hasattr(value, 'record'):
        return value.record()
    if hasattr(value, 'fields'):
        return plain(value.fields())
    return value


def _payload_fields(payload):
    return dict(
            (name, plain(value))
            for (name, value) in payload.fields().items()
    )


def _position_fields(payload):
    record = _payload_fields(payload)
    record['posambiguity'] = payload.position_ambiguity
    record['messaging'] = int(bool(payload.aprs_messaging))
    record['symbolcode'] = payload.symbol_code
    record['symboltable'] = payload.symbol_table_id
    if payload.compressed:
        record['format'] = 'compressed'
    if payload.dao is not None:
        record['daodatumbyte'] = payload.dao.datum
    if payload.telemetry is not None:
        record['mbits'] = payload.telemetry.bits
    if payload.compression_info is not None:
        record['gpsfixstatus'] = payload.compression_info.gps_fix_type.value
    if payload.weather is not None:
        record['wx'] = plain(payload.weather.fields(include_timestamp=False))
        record.update(record['wx'])
    return record


def _object_fields(payload):
    record = _position_fields(payload)
    record['objectname'] = payload.object_name
    record['alive'] = payload.alive
    return record


def _item_fields(payload):
    record = _position_fields(payload)
    record['itemname'] = payload.item_name
    record['alive'] = payload.alive
    return record


def _weather_fields(payload):
    record = _payload_fields(payload)
    record['wx'] = plain(payload.weather.fields(include_timestamp=False))
    record.update(record['wx'])
    return record


def _message_fields(payload):
    record = _payload_fields(payload)
    record['message'] = payload.message_text
    return record


# Payload class to mapping function; the most derived class wins
PAYLOAD_MAPPERS = (
        (APRSObjectPayload, _object_fields),
        (APRSItemPayload, _item_fields),
        (APRSPosition, _position_fields),
        (APRSWeatherPayload, _weather_fields),
        (APRSMessagePayload, _message_fields),
)


def _mapper_for(payload):
    for (cls, mapper) in PAYLOAD_MAPPERS:
        if isinstance(payload, cls):
            return mapper
    return _payload_fields


def envelope_fields(packet):
    return dict(
            id=packet.id,
            sender=packet.sender,
            base_callsign=packet.base_callsign,
            ssid=packet.ssid,
            destination=packet.destination,
            path=packet.path,
            digipeaters=[d.fields() for d in packet.digipeaters],
            information_field=packet.information_field,
            data_type=packet.data_type.value,
            received_at=packet.received_at,
            srccallsign=packet.sender,
            dstcallsign=packet.destination,
            body=packet.information_field,
            header=packet.header,
            origpacket=packet.origpacket,
    )


def normalise(packet):
    """
    Return the packet as a flat dictionary.  The payload's own fields are
    merged over the envelope, so a payload ``data_type`` (e.g. weather
    decoded from a position) is the one reported.
    """
    record = dict(RECORD_DEFAULTS)
    record.update(envelope_fields(packet))

    payload = packet.data_extended
    if isinstance(payload, APRSPayload):
        record.update(_mapper_for(payload)(payload))
        record['data_extended'] = _payload_fields(payload)

    record['type'] = legacy_type(packet.data_type)
    return record
