"""Bridge connection settings.

This module handles:
- Loading bridge address/port/credentials from environment variables
- Loading and saving them in the user config file

Only settings are persisted here; listing results are never written to disk.
"""

import json
import os
from pathlib import Path

import click

from hue_rest.core.controller import DEFAULT_PORT
from hue_rest.models.types import BridgeSettings

# User configuration file location
USER_CONFIG_FILE = Path.home() / '.hue_rest' / 'config.json'

ENV_ADDRESS = 'HUE_BRIDGE_ADDRESS'
ENV_PORT = 'HUE_BRIDGE_PORT'
ENV_USERNAME = 'HUE_USERNAME'
ENV_CLIENTKEY = 'HUE_CLIENTKEY'


def _parse_port(value) -> int | None:
    try:
        port = int(value)
    except (TypeError, ValueError):
        return None
    return port if 1 <= port <= 65535 else None


def load_settings_from_env() -> BridgeSettings | None:
    """Load bridge settings from HUE_BRIDGE_ADDRESS and friends.

    Returns:
        Settings dict, or None if HUE_BRIDGE_ADDRESS is not set
    """
    address = os.getenv(ENV_ADDRESS, '').strip()
    if not address:
        return None

    port = _parse_port(os.getenv(ENV_PORT, DEFAULT_PORT))
    if port is None:
        click.echo(f"Warning: Ignoring invalid {ENV_PORT}, using {DEFAULT_PORT}", err=True)
        port = DEFAULT_PORT

    return {
        'address': address,
        'port': port,
        'username': os.getenv(ENV_USERNAME, ''),
        'clientkey': os.getenv(ENV_CLIENTKEY, ''),
    }


def load_settings_from_user_config(path: Path | None = None) -> BridgeSettings | None:
    """Load bridge settings from the user config file.

    Returns:
        Settings dict, or None if the file is missing, unreadable or has no address
    """
    path = path or USER_CONFIG_FILE
    try:
        if not path.exists():
            return None

        with open(path, 'r', encoding='utf-8') as f:
            config = json.load(f)

        address = config.get('address') if isinstance(config, dict) else None
        if not address or not isinstance(address, str):
            return None

        return {
            'address': address,
            'port': _parse_port(config.get('port', DEFAULT_PORT)) or DEFAULT_PORT,
            'username': str(config.get('username') or ''),
            'clientkey': str(config.get('clientkey') or ''),
        }

    except (ValueError, IOError) as e:
        click.echo(f"Warning: Failed to load config from {path}: {e}", err=True)
        return None


def load_settings(path: Path | None = None) -> BridgeSettings | None:
    """Get bridge settings using priority system.

    Priority order:
    1. Environment variables
    2. Local config file (~/.hue_rest/config.json)
    """
    settings = load_settings_from_env()
    if settings:
        return settings
    return load_settings_from_user_config(path)


def save_credentials(address: str, username: str, clientkey: str, port: int = DEFAULT_PORT,
                     path: Path | None = None) -> bool:
    """Save bridge address and credentials to the user config file.

    Creates the config directory if it doesn't exist and sets secure
    file permissions (600 - user read/write only).

    Returns:
        True if saved successfully, False otherwise
    """
    path = path or USER_CONFIG_FILE
    try:
        path.parent.mkdir(parents=True, exist_ok=True)

        # Keep unrelated keys from an existing file
        config = {}
        if path.exists():
            try:
                with open(path, 'r', encoding='utf-8') as f:
                    config = json.load(f)
            except (ValueError, IOError):
                config = {}
            if not isinstance(config, dict):
                config = {}

        config.update({
            'address': address,
            'port': port,
            'username': username,
            'clientkey': clientkey,
        })

        # Created 0600; fchmod tightens a file that already existed
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            os.fchmod(f.fileno(), 0o600)
            json.dump(config, f, indent=2)

        return True

    except (IOError, OSError) as e:
        click.echo(f"Error: Failed to save config to {path}: {e}", err=True)
        return False
