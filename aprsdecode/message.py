#!/usr/bin/env python3

"""
APRS messages, acknowledgements and rejections.
"""

import re

from .datatype import APRSDataType
from .payload import APRSPayload


ADDRESSEE_LENGTH = 9
ADDRESSEE_DELIMITER = ':'


class APRSMessagePayload(APRSPayload):
    """
    A message to `addressee`.  If the message is an acknowledgement or
    rejection of an earlier message, `response` is ``ack`` or ``rej`` and
    `response_id` identifies the message being answered.
    """
    FIELDS = APRSPayload.FIELDS + (
            'addressee', 'message_text', 'message_number', 'response',
            'response_id', 'reply_ack',
    )

    MSGID_RE = re.compile(r'{([0-9A-Za-z]+)(}[0-9A-Za-z]*)?(\r?)$')
    ACKREJ_RE = re.compile(r'^(ack|rej)([0-9A-Za-z]+)$')

    @classmethod
    def decode(cls, data, log):
        if (len(data) > ADDRESSEE_LENGTH) \
                and (data[ADDRESSEE_LENGTH] == ADDRESSEE_DELIMITER):
            addressee = data[0:ADDRESSEE_LENGTH]
            message = data[ADDRESSEE_LENGTH+1:]
        else:
            # Addressee not padded to 9 characters
            log.debug('Message addressee not padded: %r', data)
            (addressee, _, message) = data.partition(ADDRESSEE_DELIMITER)
        addressee = addressee.strip()

        match = cls.ACKREJ_RE.match(message.strip())
        if match:
            return cls(
                    addressee=addressee,
                    message_text=message.strip(),
                    response=match.group(1),
                    response_id=match.group(2)
            )

        match = cls.MSGID_RE.search(message)
        reply_ack = False
        if match:
            msgid = match.group(1)

            # APRS 1.1 Reply-ACK detection
            reply_ack = match.group(2)
            if reply_ack:
                reply_ack = reply_ack[1:] or True
            else:
                reply_ack = False
            message = message[:match.start(1)-1]
        else:
            msgid = None

        return cls(
                addressee=addressee,
                message_text=message.strip(),
                message_number=msgid,
                reply_ack=reply_ack
        )

    def __init__(self, addressee, message_text, message_number=None,
            response=None, response_id=None, reply_ack=False):
        super(APRSMessagePayload, self).__init__(APRSDataType.MESSAGE)
        self.addressee = addressee
        self.message_text = message_text
        self.message_number = message_number
        self.response = response
        self.response_id = response_id
        self.reply_ack = reply_ack

    @property
    def is_ack(self):
        return self.response == 'ack'

    @property
    def is_rej(self):
        return self.response == 'rej'
