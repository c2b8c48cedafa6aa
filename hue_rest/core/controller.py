"""HueRestContext class for one bridge connection.

This module contains the connection context that owns the HTTP session,
credentials, exchange buffers and result cache for a single bridge. Bridge
operations live in core.operations; the context methods delegate to them.
"""

import socket
import threading
from contextlib import contextmanager
from typing import TYPE_CHECKING

import requests

from hue_rest.core import operations
from hue_rest.core.buffers import ExchangeBuffers
from hue_rest.core.cache import ResultCache
from hue_rest.core.debug import MSG_ERR, Debugger, DebugSink
from hue_rest.models.errors import ContextBusyError, ContextClosedError
from hue_rest.models.outcome import Outcome
from hue_rest.models.types import EntertainmentArea, WhitelistEntry

if TYPE_CHECKING:
    from hue_rest.core.runtime import HueRestRuntime

DEFAULT_PORT = 443
DEFAULT_TIMEOUT = 5
DEFAULT_APP_NAME = 'hue_rest'

# Bridge limits for the two halves of devicetype
APP_NAME_MAX_LEN = 20
DEVICE_NAME_MAX_LEN = 19


def build_devicetype(app_name: str = DEFAULT_APP_NAME, device_name: str | None = None) -> str:
    """Build the '<app>#<device>' identifier sent when registering.

    Args:
        app_name: Application name, truncated to APP_NAME_MAX_LEN
        device_name: Device name, truncated to DEVICE_NAME_MAX_LEN (default: host name)

    Returns:
        devicetype string
    """
    if device_name is None:
        device_name = socket.gethostname()
    return f"{app_name[:APP_NAME_MAX_LEN]}#{device_name[:DEVICE_NAME_MAX_LEN]}"


def build_base_url(address: str, port: int) -> str:
    host = f"[{address}]" if ':' in address and not address.startswith('[') else address
    return f"https://{host}:{port}/api"


class HueRestContext:
    """Connection to one Hue Bridge via its local REST API.

    A context serves one call at a time; its buffers and result cache are a
    single slot. Separate contexts share nothing and may be used from
    separate threads.
    """

    def __init__(self, address: str, port: int = DEFAULT_PORT, username: str = '',
                 debug_sink: DebugSink | None = None, debug_level: int = MSG_ERR, *,
                 clientkey: str = '', app_name: str = DEFAULT_APP_NAME,
                 device_name: str | None = None, timeout: float = DEFAULT_TIMEOUT,
                 runtime: 'HueRestRuntime | None' = None):
        """Initialise HueRestContext.

        Use HueRestRuntime.create_context() (or context_init()) rather than
        constructing directly, so arguments are validated and the runtime
        can track the context.

        Args:
            address: IP address or host name of the bridge
            port: HTTPS port of the bridge, normally 443
            username: App username issued by the bridge; empty if not registered yet
            debug_sink: Callable receiving (level, message); defaults to click output
            debug_level: One of MSG_OFF, MSG_ERR, MSG_INFO, MSG_DEBUG
            clientkey: Streaming PSK issued with the username, if already known
            app_name: Application half of the devicetype identifier
            device_name: Device half of the devicetype identifier
            timeout: Per-request timeout in seconds
            runtime: Owning runtime, notified on cleanup
        """
        self.address = address
        self.port = port
        self.username = username or ''
        self.clientkey = clientkey or ''
        self.devicetype = build_devicetype(app_name, device_name)
        self.timeout = timeout
        self.base_url = build_base_url(address, port)
        self.debugger = Debugger(debug_sink, debug_level)

        self.session = requests.Session()
        self.session.verify = False  # Accept self-signed certificate

        self.buffers = ExchangeBuffers()
        self.cache = ResultCache()

        self._runtime = runtime
        self._lock = threading.Lock()
        self._closed = False

    def __repr__(self) -> str:
        state = 'closed' if self._closed else 'open'
        return f"<HueRestContext {self.address}:{self.port} {state}>"

    def __enter__(self) -> 'HueRestContext':
        return self

    def __exit__(self, exc_type, exc, tb):
        if not self._closed:
            self.cleanup()

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def is_registered(self) -> bool:
        return bool(self.username)

    @property
    def areas(self) -> tuple[EntertainmentArea, ...]:
        """Entertainment areas from the most recent successful listing."""
        return self.cache.areas

    @property
    def whitelist(self) -> tuple[WhitelistEntry, ...]:
        """Whitelist entries from the most recent successful listing."""
        return self.cache.whitelist

    def ensure_open(self) -> None:
        if self._closed:
            raise ContextClosedError(f"Context for {self.address}:{self.port} has been cleaned up")

    @contextmanager
    def exclusive(self):
        """Hold the context's single exchange slot for the duration of a call.

        Raises:
            ContextClosedError: Context already cleaned up
            ContextBusyError: Slot already held by another call
        """
        self.ensure_open()
        if not self._lock.acquire(blocking=False):
            raise ContextBusyError(f"Context for {self.address}:{self.port} is already in use")
        try:
            yield self
        finally:
            self._lock.release()

    def cleanup(self) -> None:
        """Release the HTTP session, credentials, buffers and cached results.

        Raises:
            ContextClosedError: Context already cleaned up
            ContextBusyError: An exchange is still in flight
        """
        with self.exclusive():
            self.session.close()
            self.buffers.clear()
            self.cache.clear()
            self.username = ''
            self.clientkey = ''
            self._closed = True

        if self._runtime is not None:
            self._runtime.forget(self)
            self._runtime = None
        self.debugger.debug(f"Context for {self.address}:{self.port} cleaned up")

    # Bridge operations

    def register(self) -> Outcome:
        """Delegates to core.operations.register()."""
        return operations.register(self)

    def list_entertainment_groups(self) -> Outcome:
        """Delegates to core.operations.list_entertainment_groups()."""
        return operations.list_entertainment_groups(self)

    def activate_stream(self, group_id: int) -> Outcome:
        """Delegates to core.operations.activate_stream()."""
        return operations.activate_stream(self, group_id)

    def deactivate_stream(self, group_id: int) -> Outcome:
        """Delegates to core.operations.deactivate_stream()."""
        return operations.deactivate_stream(self, group_id)

    def list_whitelist(self) -> Outcome:
        """Delegates to core.operations.list_whitelist()."""
        return operations.list_whitelist(self)

    def delete_user(self, username: str) -> Outcome:
        """Delegates to core.operations.delete_user()."""
        return operations.delete_user(self, username)
