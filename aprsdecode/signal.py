#!/usr/bin/env python3

"""
Event signals for decoded traffic, built on `signalslot`.
"""

from signalslot import Signal as BaseSignal, Slot as BaseSlot
import logging


class Slot(BaseSlot):
    """
    A listener attached to a `Signal`.  Any exception raised by the
    listener is logged and discarded so that the remaining listeners still
    see the event.
    """
    def __init__(self, slot_fn, **kwargs):
        super(Slot, self).__init__(slot_fn)
        self._slot_kwargs = kwargs

    def __call__(self, **kwargs):
        call_kwargs = self._slot_kwargs.copy()
        call_kwargs.update(kwargs)
        try:
            super(Slot, self).__call__(**call_kwargs)
        except Exception:
            logging.getLogger(self.__class__.__module__).exception(
                    'Listener %s failed', self.func
            )


class Signal(BaseSignal):
    """
    `signalslot.Signal` that calls every listener regardless of what the
    others return or raise.
    """
    def connect(self, slot, **kwargs):
        """
        Attach a listener.  Extra keyword arguments are passed to the
        listener on every emission.
        """
        super(Signal, self).connect(Slot(slot, **kwargs))

    def _find_slot(self, slot):
        for maybe_slot in super(Signal, self).slots:
            if isinstance(maybe_slot, Slot) and (maybe_slot.func is slot):
                return maybe_slot
            elif maybe_slot is slot:
                return maybe_slot

    def disconnect(self, slot):
        """
        Detach the first matching listener, if any.
        """
        slot = self._find_slot(slot)
        if slot:
            super(Signal, self).disconnect(slot)

    def is_connected(self, slot):
        return self._find_slot(slot) is not None
