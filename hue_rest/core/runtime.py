"""Process-wide runtime for the Hue REST client.

``HueRestRuntime`` is the guard object for process-wide transport state.
Initialise it once before creating any context and clean it up once after
every context is gone; the runtime tracks live contexts so that ordering is
checked at run time instead of being left to convention.
"""

import threading

import requests
from requests.packages.urllib3.exceptions import InsecureRequestWarning

from hue_rest.core.controller import DEFAULT_PORT, HueRestContext
from hue_rest.core.debug import MSG_ERR, DebugLevel, Debugger, DebugSink, click_sink
from hue_rest.models.errors import RuntimeStateError

MIN_REQUESTS_MAJOR = 2


def transport_compatible(version: str | None = None) -> bool:
    """Check the installed requests release is one this client supports."""
    version = version if version is not None else requests.__version__
    try:
        return int(version.split('.')[0]) >= MIN_REQUESTS_MAJOR
    except (ValueError, AttributeError):
        return False


def validate_context_args(address, port, username, debug_level) -> str | None:
    """Return a description of the first malformed argument, or None."""
    if not isinstance(address, str) or not address.strip():
        return "Bridge address must be a non-empty string"
    if any(ch.isspace() for ch in address):
        return f"Bridge address contains whitespace: {address!r}"
    if isinstance(port, bool) or not isinstance(port, int) or not 1 <= port <= 65535:
        return f"Port out of range: {port!r}"
    if username is not None and not isinstance(username, str):
        return "Username must be a string"
    if debug_level not in tuple(DebugLevel):
        return f"Unknown debug level: {debug_level!r}"
    return None


class HueRestRuntime:
    """Guard for process-wide transport state and the contexts created under it."""

    def __init__(self):
        self._active = False
        self._contexts: list[HueRestContext] = []
        self._lock = threading.Lock()

    @property
    def active(self) -> bool:
        return self._active

    @property
    def contexts(self) -> tuple[HueRestContext, ...]:
        with self._lock:
            return tuple(self._contexts)

    def __enter__(self) -> 'HueRestRuntime':
        if not self.init():
            raise RuntimeStateError("Transport subsystem could not be initialised")
        return self

    def __exit__(self, exc_type, exc, tb):
        for ctx in self.contexts:
            ctx.cleanup()
        self.cleanup()

    def init(self) -> bool:
        """Set up process-wide transport state.

        Returns:
            True on success (or if already initialised), False if the
            transport library is unusable and no context may be created
        """
        if self._active:
            return True

        if not transport_compatible():
            click_sink(MSG_ERR, f"Unsupported requests version {requests.__version__}")
            return False

        # Bridges serve a self-signed certificate
        requests.packages.urllib3.disable_warnings(InsecureRequestWarning)
        self._active = True
        return True

    def cleanup(self) -> None:
        """Release process-wide state.

        Raises:
            RuntimeStateError: Contexts created by this runtime are still alive
        """
        with self._lock:
            alive = len(self._contexts)
        if alive:
            raise RuntimeStateError(f"{alive} context(s) still alive; clean them up first")
        self._active = False

    def create_context(self, address: str, port: int = DEFAULT_PORT, username: str = '',
                       debug_sink: DebugSink | None = None, debug_level: int = MSG_ERR,
                       **kwargs) -> HueRestContext | None:
        """Create a context for one bridge.

        Args:
            address: IP address or host name of the bridge
            port: HTTPS port, 1-65535
            username: App username, empty if the app is not registered yet
            debug_sink: Callable receiving (level, message)
            debug_level: One of MSG_OFF, MSG_ERR, MSG_INFO, MSG_DEBUG
            **kwargs: clientkey, app_name, device_name, timeout (see HueRestContext)

        Returns:
            New context with empty caches and buffers, or None if the
            arguments are malformed or the context could not be created

        Raises:
            RuntimeStateError: Runtime not initialised
        """
        if not self._active:
            raise RuntimeStateError("Runtime not initialised; call init() first")

        report_level = debug_level if debug_level in tuple(DebugLevel) else MSG_ERR
        error = validate_context_args(address, port, username, debug_level)
        if error:
            Debugger(debug_sink, report_level).error(error)
            return None

        try:
            ctx = HueRestContext(address, port, username, debug_sink, debug_level,
                                 runtime=self, **kwargs)
        except (OSError, ValueError, TypeError) as e:
            Debugger(debug_sink, report_level).error(f"Failed to create context for {address}:{port}: {e}")
            return None

        with self._lock:
            self._contexts.append(ctx)
        ctx.debugger.debug(f"Context for {address}:{port} created")
        return ctx

    def forget(self, ctx: HueRestContext) -> None:
        """Stop tracking a context (called by HueRestContext.cleanup())."""
        with self._lock:
            if ctx in self._contexts:
                self._contexts.remove(ctx)


def process_init() -> HueRestRuntime | None:
    """Initialise process-wide state. Returns the runtime, or None on failure."""
    runtime = HueRestRuntime()
    return runtime if runtime.init() else None


def process_cleanup(runtime: HueRestRuntime) -> None:
    runtime.cleanup()


def context_init(runtime: HueRestRuntime, address: str, port: int = DEFAULT_PORT,
                 username: str = '', debug_sink: DebugSink | None = None,
                 debug_level: int = MSG_ERR, **kwargs) -> HueRestContext | None:
    return runtime.create_context(address, port, username, debug_sink, debug_level, **kwargs)


def context_cleanup(ctx: HueRestContext) -> None:
    ctx.cleanup()
