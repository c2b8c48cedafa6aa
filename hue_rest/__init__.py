"""Client for the local REST API of a Philips Hue Bridge.

Authenticates an application against the bridge, lists entertainment areas
and registered applications, and switches entertainment groups into
streaming mode.
"""

from hue_rest.core.controller import HueRestContext, build_devicetype
from hue_rest.core.debug import MSG_DEBUG, MSG_ERR, MSG_INFO, MSG_OFF, DebugLevel
from hue_rest.core.runtime import (
    HueRestRuntime,
    context_cleanup,
    context_init,
    process_cleanup,
    process_init,
)
from hue_rest.models.errors import (
    BridgeErrorCode,
    ContextBusyError,
    ContextClosedError,
    HueRestError,
    RuntimeStateError,
)
from hue_rest.models.outcome import BridgeError, Outcome, Success, TransportFailure
from hue_rest.models.types import EntertainmentArea, WhitelistEntry

__version__ = '0.1.0'

__all__ = [
    'BridgeError',
    'BridgeErrorCode',
    'ContextBusyError',
    'ContextClosedError',
    'DebugLevel',
    'EntertainmentArea',
    'HueRestContext',
    'HueRestError',
    'HueRestRuntime',
    'MSG_DEBUG',
    'MSG_ERR',
    'MSG_INFO',
    'MSG_OFF',
    'Outcome',
    'RuntimeStateError',
    'Success',
    'TransportFailure',
    'WhitelistEntry',
    'build_devicetype',
    'context_cleanup',
    'context_init',
    'process_cleanup',
    'process_init',
]
