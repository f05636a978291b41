"""Message links: parsing and "open in new tab"."""

from __future__ import annotations

from .constants import DM_GUILD, MESSAGE_LINK_RE
from .models import LocationReference
from .tabs import TabSession


def parse_message_link(url: str) -> tuple[LocationReference, str | bool] | None:
    """Parse a channel or message link.

    Returns the location and the message to jump to (``True`` for the latest
    message when the link names no message), or ``None`` if *url* is not a
    channel link.
    """
    match = MESSAGE_LINK_RE.match(url.strip())
    if match is None:
        return None
    guild_id, channel_id, message_id = match.groups()
    location = LocationReference(
        channel_id=channel_id,
        guild_id=None if guild_id == DM_GUILD else guild_id,
    )
    return location, message_id or True


def parse_address(text: str) -> LocationReference | None:
    """Parse a bare ``guild/channel`` (or ``@me/channel``) address."""
    parts = [p for p in text.strip().strip("/").split("/") if p]
    if len(parts) != 2:
        return None
    guild_id, channel_id = parts
    if not channel_id.isdigit():
        return None
    if guild_id != DM_GUILD and not guild_id.isdigit():
        return None
    return LocationReference(
        channel_id=channel_id,
        guild_id=None if guild_id == DM_GUILD else guild_id,
    )


def open_link_in_tab(session: TabSession, url: str) -> str | None:
    """Open the location named by *url* in a tab; return the tab id."""
    parsed = parse_message_link(url)
    if parsed is None:
        return None
    location, message_id = parsed
    return session.create_tab(location, message_id)
