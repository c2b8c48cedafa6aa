"""Tagged result of a bridge exchange.

Every bridge operation returns exactly one of ``Success``, ``BridgeError`` or
``TransportFailure``. ``status`` keeps the numeric convention used by older
bindings of the same API: negative for transport failure, zero for success
and the positive bridge error code otherwise.
"""

from dataclasses import dataclass
from typing import Any, Union

from hue_rest.models.errors import BridgeErrorCode

TRANSPORT_FAILURE_STATUS = -1


@dataclass(frozen=True)
class Success:
    """Bridge accepted the request; ``payload`` is the decoded response."""
    payload: Any = None

    ok = True

    @property
    def status(self) -> int:
        return 0


@dataclass(frozen=True)
class BridgeError:
    """Bridge refused the request with an in-band error object."""
    code: int
    description: str = ''

    ok = False

    @property
    def status(self) -> int:
        return self.code

    @property
    def kind(self) -> BridgeErrorCode | None:
        """Enum member for ``code``, or None if the bridge sent an unknown code."""
        try:
            return BridgeErrorCode(self.code)
        except ValueError:
            return None


@dataclass(frozen=True)
class TransportFailure:
    """No usable bridge response (connection, TLS, timeout or protocol violation)."""
    reason: str = ''

    ok = False

    @property
    def status(self) -> int:
        return TRANSPORT_FAILURE_STATUS


Outcome = Union[Success, BridgeError, TransportFailure]
