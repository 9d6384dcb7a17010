#!/usr/bin/env python3

"""
APRS date and time formats.

APRS timestamps omit the year and often the month, so they are kept as
given and only turned into a full `datetime` on request, relative to a
reference time (normally the time the packet was received).
"""

from datetime import time, timedelta


class APRSTimestamp(object):
    """
    Base abstract class for APRS timestamps.
    """
    # How far into the future a resolved timestamp may be before we assume
    # it refers to the previous period instead.
    FUTURE_SLACK = timedelta(days=1)

    def resolve(self, reference):
        """
        Return a `datetime` for this timestamp, filling in the missing
        fields from `reference`.  Returns None if the fields do not make a
        valid date.
        """
        raise NotImplementedError('Abstract function')


class DHMBaseTimestamp(APRSTimestamp):
    """
    Day/Hour/Minute timestamp (base class)
    """
    TS_LENGTH = 7

    def __init__(self, day, hour, minute):
        self.day = day
        self.hour = hour
        self.minute = minute

    def __str__(self):
        return '%02d%02d%02d%s' % (
                self.day, self.hour, self.minute,
                self.TS_SUFFIX
        )

    def __repr__(self): # pragma: no cover
        return '%s(day=%r, hour=%r, minute=%r)' % (
                self.__class__.__name__, self.day, self.hour, self.minute
        )

    def _reference(self, reference):
        return reference

    def resolve(self, reference):
        reference = self._reference(reference)
        year = reference.year
        month = reference.month

        for _ in range(2):
            try:
                resolved = reference.replace(
                        year=year, month=month, day=self.day,
                        hour=self.hour, minute=self.minute,
                        second=0, microsecond=0
                )
            except ValueError:
                resolved = None

            if (resolved is not None) \
                    and (resolved <= reference + self.FUTURE_SLACK):
                return resolved

            # Try the month before
            month -= 1
            if month < 1:
                month = 12
                year -= 1

        return None


class DHMUTCTimestamp(DHMBaseTimestamp):
    """
    Day/Hour/Minute timestamp in UTC.
    """
    TS_SUFFIX = "z"


class DHMLocalTimestamp(DHMBaseTimestamp):
    """
    Day/Hour/Minute timestamp in local time.
    """
    TS_SUFFIX = "/"

    def _reference(self, reference):
        # Local to the receiver, which is the best guess we have.
        return reference.astimezone()


class HMSTimestamp(time, APRSTimestamp):
    """
    Hour/Minute/Second timestamp in UTC.
    """
    TS_LENGTH = 7
    TS_SUFFIX = "h"

    def __str__(self):
        return '%02d%02d%02d%s' % (
                self.hour, self.minute, self.second,
                self.TS_SUFFIX
        )

    def resolve(self, reference):
        resolved = reference.replace(
                hour=self.hour, minute=self.minute, second=self.second,
                microsecond=0
        )
        if resolved > reference + timedelta(hours=1):
            resolved -= timedelta(days=1)
        return resolved


class MDHMTimestamp(APRSTimestamp):
    """
    Month/Day/Hour/Minute timestamp in UTC.
    """
    TS_LENGTH = 8

    def __init__(self, month, day, hour, minute):
        self.month = month
        self.day = day
        self.hour = hour
        self.minute = minute

    def __str__(self):
        return '%02d%02d%02d%02d' % (
                self.month, self.day, self.hour, self.minute
        )

    def __repr__(self): # pragma: no cover
        return '%s(month=%r, day=%r, hour=%r, minute=%r)' % (
                self.__class__.__name__,
                self.month, self.day, self.hour, self.minute
        )

    def resolve(self, reference):
        for year in (reference.year, reference.year - 1):
            try:
                resolved = reference.replace(
                        year=year, month=self.month, day=self.day,
                        hour=self.hour, minute=self.minute,
                        second=0, microsecond=0
                )
            except ValueError:
                return None
            if resolved <= reference + self.FUTURE_SLACK:
                return resolved
        return None


def _digits(dtstr):
    if not dtstr.isdigit():
        raise ValueError("Timestamp fields must be digits: %r" % dtstr)
    return [int(dtstr[i:i+2]) for i in range(0, len(dtstr), 2)]


def decode(dtstr):
    """
    Decode a APRS date/time date code.  Since not full information is given
    in the timestamp, we keep the fields as sent; use `resolve` to place
    them in time.
    """
    if len(dtstr) < DHMBaseTimestamp.TS_LENGTH:
        # Not a valid date/time format
        raise ValueError("Timestamp string too short")

    if dtstr[6] in (DHMLocalTimestamp.TS_SUFFIX, DHMUTCTimestamp.TS_SUFFIX):
        # Day/Hours/Minutes in UTC or local-time
        # Format is:
        #   DDHHMM{z|/}
        (day, hour, minute) = _digits(dtstr[0:6])

        if dtstr[6] == DHMUTCTimestamp.TS_SUFFIX:
            return DHMUTCTimestamp(day, hour, minute)
        else:
            return DHMLocalTimestamp(day, hour, minute)
    elif dtstr[6] == HMSTimestamp.TS_SUFFIX:
        # Hours/Minutes/Seconds in UTC
        # Format is:
        #   HHMMSSh
        (hour, minute, second) = _digits(dtstr[0:6])

        return HMSTimestamp(hour, minute, second)
    elif len(dtstr) >= MDHMTimestamp.TS_LENGTH:
        # Month/Day/Hours/Minutes in UTC
        # Format is:
        #   MMDDHHMM
        (month, day, hour, minute) = _digits(dtstr[0:8])

        return MDHMTimestamp(month, day, hour, minute)

    raise ValueError("Timestamp format not recognised")
