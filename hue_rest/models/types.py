"""Type definitions for the Hue REST client.

Listing results are frozen dataclasses so callers get read-only views of the
context's result cache; configuration records are TypedDicts like the rest of
the loosely structured data read from disk or the environment.
"""

from dataclasses import dataclass
from typing import TypedDict

AREA_NAME_MAX_LEN = 32
MAX_LIGHTS_PER_AREA = 10


@dataclass(frozen=True)
class EntertainmentArea:
    """One entertainment group configured on the bridge."""
    area_id: int
    name: str
    light_ids: tuple[int, ...] = ()


@dataclass(frozen=True)
class WhitelistEntry:
    """One application registered on the bridge."""
    username: str
    created_date: str | None
    last_use_date: str | None
    name: str


class BridgeSettings(TypedDict):
    """Connection settings for one bridge, as loaded from env/config file."""
    address: str
    port: int
    username: str
    clientkey: str


class Credentials(TypedDict):
    """Credentials issued by the bridge on registration."""
    username: str
    clientkey: str
