"""Result cache for listing operations.

Each context owns one ``ResultCache``. A listing call replaces its slot
wholesale (never merges) and hands the caller the new tuple. Tuples of frozen
records are immutable, so a view returned by an earlier call stays valid for
the caller even after the cache moves on; it is simply no longer the cache.
"""

from typing import Iterable

from hue_rest.models.types import EntertainmentArea, WhitelistEntry


class ResultCache:
    """Context-owned storage for the latest entertainment-area and whitelist listings."""

    def __init__(self):
        self._areas: tuple[EntertainmentArea, ...] = ()
        self._whitelist: tuple[WhitelistEntry, ...] = ()

    @property
    def areas(self) -> tuple[EntertainmentArea, ...]:
        return self._areas

    @property
    def whitelist(self) -> tuple[WhitelistEntry, ...]:
        return self._whitelist

    def replace_areas(self, areas: Iterable[EntertainmentArea]) -> tuple[EntertainmentArea, ...]:
        """Supersede the cached areas and return the new view."""
        self._areas = tuple(areas)
        return self._areas

    def replace_whitelist(self, entries: Iterable[WhitelistEntry]) -> tuple[WhitelistEntry, ...]:
        """Supersede the cached whitelist and return the new view."""
        self._whitelist = tuple(entries)
        return self._whitelist

    def clear(self) -> None:
        self._areas = ()
        self._whitelist = ()

    def info(self) -> dict:
        """Get information about the current cache.

        Returns:
            Dictionary with counts of cached resources
        """
        return {
            'counts': {
                'areas': len(self._areas),
                'whitelist': len(self._whitelist),
            }
        }
