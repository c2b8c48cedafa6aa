"""Verb execution engine.

Performs exactly one request/response exchange against the bridge and
classifies the outcome as ``Success``, ``BridgeError`` or ``TransportFailure``.
No retries are attempted here; retry policy belongs to the caller.
"""

import json
import re
from typing import TYPE_CHECKING, Any

import requests

from hue_rest.models.outcome import BridgeError, Outcome, Success, TransportFailure

if TYPE_CHECKING:
    from hue_rest.core.controller import HueRestContext

VERBS = ('GET', 'PUT', 'POST', 'DELETE')

_CLIENTKEY_PATTERN = re.compile(r'("clientkey"\s*:\s*")[^"]*(")')


def _redact(text: str) -> str:
    """Mask client keys before a body reaches the debug sink."""
    return _CLIENTKEY_PATTERN.sub(r'\1***\2', text)


def encode_body(body: Any) -> bytes | None:
    """Serialize a request body to the bytes placed in the request buffer."""
    if body is None:
        return None
    if isinstance(body, bytes):
        return body
    return json.dumps(body).encode('utf-8')


def _error_from_item(item: Any) -> Outcome | None:
    """Map one response item to a BridgeError if it is error-shaped.

    Accepts both ``{"error": {"type": N, ...}}`` and the bare
    ``{"type": N, "description": ...}`` form. An ``error`` key without a
    numeric type is a protocol violation.
    """
    if not isinstance(item, dict):
        return None
    if 'error' in item:
        error = item['error']
        if not isinstance(error, dict):
            return TransportFailure("Malformed error object in response")
    elif 'description' in item and 'type' in item:
        error = item
    else:
        return None

    code = error.get('type')
    if isinstance(code, bool) or not isinstance(code, int):
        return TransportFailure("Error object without numeric type in response")
    return BridgeError(code, str(error.get('description', '')))


def _unwrap_success(document: Any) -> Any:
    """Strip the ``[{"success": X}, ...]`` envelope used by write operations."""
    if (isinstance(document, list) and document
            and all(isinstance(item, dict) and list(item) == ['success'] for item in document)):
        values = [item['success'] for item in document]
        return values[0] if len(values) == 1 else values
    return document


def decode_response(status_code: int, raw: bytes | None) -> Outcome:
    """Classify a raw bridge response.

    Args:
        status_code: HTTP status of the response
        raw: Response body bytes

    Returns:
        BridgeError if the body carries an error object, Success with the
        decoded payload for any other JSON object or array on a 2xx status,
        TransportFailure for everything else
    """
    if not raw:
        return TransportFailure(f"Empty response body (HTTP {status_code})")

    try:
        document = json.loads(raw.decode('utf-8'))
    except ValueError as e:
        return TransportFailure(f"Malformed response body: {e}")

    if not isinstance(document, (dict, list)):
        return TransportFailure(f"Unexpected response shape: {type(document).__name__}")

    # Any error item fails the whole request; partial success is not reported
    if isinstance(document, list):
        items = document
    else:
        items = [document] if 'error' in document else []
    for item in items:
        error = _error_from_item(item)
        if error is not None:
            return error

    if not 200 <= status_code < 300:
        return TransportFailure(f"HTTP {status_code}")

    return Success(_unwrap_success(document))


def _send(ctx: 'HueRestContext', verb: str, url: str, data: bytes | None) -> requests.Response:
    headers = {'Content-Type': 'application/json'} if data is not None else None

    if verb == 'GET':
        return ctx.session.get(url, timeout=ctx.timeout, verify=False)
    elif verb == 'PUT':
        return ctx.session.put(url, data=data, headers=headers, timeout=ctx.timeout, verify=False)
    elif verb == 'POST':
        return ctx.session.post(url, data=data, headers=headers, timeout=ctx.timeout, verify=False)
    else:
        return ctx.session.delete(url, data=data, headers=headers, timeout=ctx.timeout, verify=False)


def execute(ctx: 'HueRestContext', verb: str, path: str, body: Any = None) -> Outcome:
    """Perform one exchange with the bridge.

    Args:
        ctx: Open connection context; must not be in use by another call
        verb: One of GET, PUT, POST, DELETE
        path: Bridge-relative path appended to ``/api`` (e.g. '/<user>/groups')
        body: Optional JSON-serialisable request body (or pre-encoded bytes)

    Returns:
        Outcome of the exchange

    Raises:
        ValueError: Unsupported verb
        ContextClosedError: Context already cleaned up
        ContextBusyError: Another exchange is in flight on this context
    """
    verb = verb.upper()
    if verb not in VERBS:
        raise ValueError(f"Unsupported verb: {verb}")

    with ctx.exclusive():
        url = f"{ctx.base_url}{path}"
        data = encode_body(body)
        ctx.buffers.load_request(data)

        if data is not None:
            ctx.debugger.debug(f"{verb} {url} {_redact(data.decode('utf-8', errors='replace'))}")
        else:
            ctx.debugger.debug(f"{verb} {url}")

        try:
            response = _send(ctx, verb, url, data)
        except requests.exceptions.RequestException as e:
            ctx.debugger.error(f"{verb} {url} failed: {e}")
            return TransportFailure(str(e))

        raw = response.content
        ctx.buffers.store_response(raw)
        ctx.debugger.debug(
            f"HTTP {response.status_code}: {_redact((raw or b'').decode('utf-8', errors='replace'))}"
        )

        outcome = decode_response(response.status_code, raw)
        if isinstance(outcome, BridgeError):
            ctx.debugger.info(f"{verb} {path} refused by bridge: {outcome.code} {outcome.description}")
        elif isinstance(outcome, TransportFailure):
            ctx.debugger.error(f"{verb} {path}: {outcome.reason}")
        return outcome
