#!/usr/bin/env python3

"""
Unit handling, wrapping `pint`.
"""

from pint import Quantity


def checknumeric(name, value, required=False):
    """
    Assert the value is a numeric value, or throw a ValueError.
    """
    if value is None:
        if required:
            raise ValueError("%s is a required parameter" % name)
        else:
            return None

    # This will throw ValueError if it can't be converted
    return float(value)


def convertvalue(name, quantity, units, required=False):
    """
    Assert the value is a numeric value and convert to the appropriate
    units if possible.
    """
    if (quantity is not None) and isinstance(quantity, Quantity):
        # Convert to target units, take the magnitude
        return quantity.to(units).magnitude
    else:
        # Pass through to handler
        return checknumeric(name, quantity, required=required)


def optionalquantity(value, units):
    """
    Return the value as a Pint quantity, or None if there is no value.
    """
    if value is None:
        return None
    return Quantity(value, units)
