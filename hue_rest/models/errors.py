"""Error taxonomy for the Hue bridge REST client.

Bridge-reported errors are plain data (``BridgeErrorCode``); the exceptions
below are only raised for contract violations by the calling code, never for
anything the bridge or the network did.
"""

from enum import IntEnum


class BridgeErrorCode(IntEnum):
    """Error ``type`` values reported in-band by the bridge."""

    # Generic errors
    UNAUTHORIZED = 1
    INVALID_MESSAGE = 2
    RESOURCE_UNAVAILABLE = 3
    METHOD_NOT_ALLOWED = 4
    MISSING_PARAMETERS = 5
    PARAMETER_UNAVAILABLE = 6
    INVALID_VALUE = 7
    NOT_MODIFIABLE = 8
    TOO_MANY = 11
    PORTAL_REQUIRED = 12
    INTERNAL_ERROR = 901

    # Command specific errors
    LINK_BUTTON_NOT_PUSHED = 101
    DHCP_NOT_DISABLED = 110
    INVALID_UPDATE_STATE = 111
    PARAMETER_NOT_MODIFIABLE = 201
    COMMISSIONABLE_LIST_FULL = 203
    GROUP_TABLE_FULL = 301
    DELETE_NOT_PERMITTED = 305
    ALREADY_USED = 306
    SCENE_BUFFER_FULL = 402
    SCENE_LOCKED = 403
    GROUP_EMPTY = 404
    CANNOT_CREATE_SENSOR = 501
    SENSOR_LIST_FULL = 502
    COMMISSIONABLE_SENSOR_LIST_FULL = 503
    RULE_ENGINE_FULL = 601
    CONDITION_ERROR = 607
    ACTION_ERROR = 608
    UNABLE_TO_ACTIVATE = 609
    SCHEDULE_LIST_FULL = 701
    INVALID_TIMEZONE = 702
    CANNOT_SET_SCHEDULE_TIME = 703
    CANNOT_CREATE_SCHEDULE = 704
    SCHEDULE_IN_PAST = 705
    COMMAND_ERROR = 706
    MODEL_INVALID = 801
    FACTORY_NEW = 802
    INVALID_STATE = 803


class HueRestError(Exception):
    """Base class for misuse of the client (not bridge or network failures)."""


class RuntimeStateError(HueRestError):
    """Process-wide runtime used out of order (not initialised, contexts still alive)."""


class ContextClosedError(HueRestError):
    """Operation attempted on a context that has already been cleaned up."""


class ContextBusyError(HueRestError):
    """A second exchange was started while one is still in flight on the same context."""
