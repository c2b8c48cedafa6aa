"""Bridge operations built on the verb execution engine.

Each operation returns an ``Outcome``. Success payloads:
- register: Credentials dict with 'username' and 'clientkey'
- list_entertainment_groups: tuple of EntertainmentArea (the new cache view)
- list_whitelist: tuple of WhitelistEntry (the new cache view)
- activate_stream / deactivate_stream / delete_user: the bridge's success value

Context state (credentials, result cache) only changes when an operation
fully succeeds, including decoding its payload.
"""

from typing import TYPE_CHECKING, Any
from urllib.parse import quote

from hue_rest.core.engine import execute
from hue_rest.models.outcome import Outcome, Success, TransportFailure
from hue_rest.models.types import (
    AREA_NAME_MAX_LEN,
    MAX_LIGHTS_PER_AREA,
    Credentials,
    EntertainmentArea,
    WhitelistEntry,
)

if TYPE_CHECKING:
    from hue_rest.core.controller import HueRestContext

ENTERTAINMENT_GROUP_TYPE = 'Entertainment'


def _user_path(ctx: 'HueRestContext', *parts: Any) -> str:
    segments = [ctx.username] + [str(part) for part in parts]
    return '/' + '/'.join(quote(segment, safe='') for segment in segments)


def _protocol_violation(ctx: 'HueRestContext', what: str, error: Exception) -> TransportFailure:
    ctx.debugger.error(f"Failed to decode {what}: {error}")
    return TransportFailure(f"Unexpected {what} payload: {error}")


def decode_credentials(payload: Any) -> Credentials:
    """Extract username and client key from a registration response.

    Raises:
        ValueError: Payload lacks either credential
    """
    if not isinstance(payload, dict):
        raise ValueError(f"expected object, got {type(payload).__name__}")

    username = payload.get('username')
    clientkey = payload.get('clientkey')
    if not isinstance(username, str) or not username:
        raise ValueError("missing username")
    if not isinstance(clientkey, str) or not clientkey:
        raise ValueError("missing clientkey")

    return {'username': username, 'clientkey': clientkey}


def decode_entertainment_areas(payload: Any) -> list[EntertainmentArea]:
    """Decode the groups resource into entertainment areas.

    Non-entertainment groups (rooms, zones, ...) are skipped. Names are
    truncated to AREA_NAME_MAX_LEN and light lists to MAX_LIGHTS_PER_AREA.

    Raises:
        ValueError: Payload is not a groups object or an entry is malformed
    """
    if not isinstance(payload, dict):
        raise ValueError(f"expected object, got {type(payload).__name__}")

    areas = []
    for group_id, group in payload.items():
        if not isinstance(group, dict) or group.get('type') != ENTERTAINMENT_GROUP_TYPE:
            continue

        name = group.get('name', '')
        lights = group.get('lights', [])
        if not isinstance(name, str):
            raise ValueError(f"group {group_id} has non-string name")
        if not isinstance(lights, list):
            raise ValueError(f"group {group_id} has no light list")

        areas.append(EntertainmentArea(
            area_id=int(group_id),
            name=name[:AREA_NAME_MAX_LEN],
            light_ids=tuple(int(light_id) for light_id in lights[:MAX_LIGHTS_PER_AREA]),
        ))

    return areas


def decode_whitelist(payload: Any) -> list[WhitelistEntry]:
    """Decode the whitelist section of the bridge config resource.

    Raises:
        ValueError: Payload has no whitelist object or an entry is malformed
    """
    whitelist = payload.get('whitelist') if isinstance(payload, dict) else None
    if not isinstance(whitelist, dict):
        raise ValueError("config has no whitelist")

    entries = []
    for username, record in whitelist.items():
        if not isinstance(record, dict):
            raise ValueError(f"whitelist entry {username} is not an object")
        entries.append(WhitelistEntry(
            username=username,
            created_date=record.get('create date'),
            last_use_date=record.get('last use date'),
            name=str(record.get('name', '')),
        ))

    return entries


def register(ctx: 'HueRestContext') -> Outcome:
    """Create a new user on the bridge.

    The bridge's link button must have been pressed within the last 30 seconds.
    On success the issued username and client key are stored on the context
    and used by every later operation. On failure the context's credentials
    are left as they were; LINK_BUTTON_NOT_PUSHED is the usual bridge error.
    """
    outcome = execute(ctx, 'POST', '', {'devicetype': ctx.devicetype, 'generateclientkey': True})
    if not isinstance(outcome, Success):
        return outcome

    try:
        credentials = decode_credentials(outcome.payload)
    except ValueError as e:
        return _protocol_violation(ctx, 'registration', e)

    ctx.username = credentials['username']
    ctx.clientkey = credentials['clientkey']
    ctx.debugger.info(f"Registered as {ctx.devicetype}")
    return Success(credentials)


def list_entertainment_groups(ctx: 'HueRestContext') -> Outcome:
    """Get the entertainment groups configured on the bridge.

    Replaces the context's cached area list; the returned tuple is that cache.
    """
    outcome = execute(ctx, 'GET', _user_path(ctx, 'groups'))
    if not isinstance(outcome, Success):
        return outcome

    try:
        areas = decode_entertainment_areas(outcome.payload)
    except (TypeError, ValueError) as e:
        return _protocol_violation(ctx, 'groups', e)

    return Success(ctx.cache.replace_areas(areas))


def _set_stream(ctx: 'HueRestContext', group_id: int, active: bool) -> Outcome:
    return execute(ctx, 'PUT', _user_path(ctx, 'groups', group_id), {'stream': {'active': active}})


def activate_stream(ctx: 'HueRestContext', group_id: int) -> Outcome:
    """Instruct the bridge to enable streaming for an entertainment group.

    Once enabled, a DTLS connection using the context's client key must be
    made within 10 seconds or the bridge disables streaming again. That window
    is kept by the bridge; nothing here tracks it. Unknown groups are rejected
    by the bridge, not checked locally.
    """
    return _set_stream(ctx, group_id, True)


def deactivate_stream(ctx: 'HueRestContext', group_id: int) -> Outcome:
    """Instruct the bridge to disable streaming for an entertainment group."""
    return _set_stream(ctx, group_id, False)


def list_whitelist(ctx: 'HueRestContext') -> Outcome:
    """Get the applications registered on the bridge.

    Replaces the context's cached whitelist; the returned tuple is that cache.
    """
    outcome = execute(ctx, 'GET', _user_path(ctx, 'config'))
    if not isinstance(outcome, Success):
        return outcome

    try:
        entries = decode_whitelist(outcome.payload)
    except (TypeError, ValueError) as e:
        return _protocol_violation(ctx, 'whitelist', e)

    return Success(ctx.cache.replace_whitelist(entries))


def delete_user(ctx: 'HueRestContext', username: str) -> Outcome:
    """Remove an application from the bridge whitelist.

    Which entries may be deleted is bridge policy; refusals come back as a
    BridgeError.
    """
    if not username:
        raise ValueError("username to delete must not be empty")
    return execute(ctx, 'DELETE', _user_path(ctx, 'config', 'whitelist', username))
