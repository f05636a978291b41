"""Tests for message-link parsing and opening links in tabs."""

from __future__ import annotations

import pytest

from channel_tabs.links import open_link_in_tab, parse_address, parse_message_link
from channel_tabs.models import LocationReference

GUILD = "123456789012345678"
CHANNEL = "223456789012345678"
MESSAGE = "323456789012345678"


class TestParseMessageLink:
    def test_message_link(self):
        loc, message = parse_message_link(
            f"https://discord.com/channels/{GUILD}/{CHANNEL}/{MESSAGE}"
        )
        assert loc == LocationReference(CHANNEL, GUILD)
        assert message == MESSAGE

    def test_channel_link_jumps_to_latest(self):
        _, message = parse_message_link(f"https://discord.com/channels/{GUILD}/{CHANNEL}")
        assert message is True

    def test_dm_link(self):
        loc, _ = parse_message_link(f"https://ptb.discordapp.com/channels/@me/{CHANNEL}")
        assert loc.guild_id is None

    @pytest.mark.parametrize(
        "url",
        [
            "https://example.com/channels/1/2",
            f"https://discord.com/channels/{GUILD}",
            f"https://discord.com/channels/abc/{CHANNEL}",
            "not a link",
        ],
    )
    def test_rejects(self, url):
        assert parse_message_link(url) is None


class TestParseAddress:
    def test_guild_channel(self):
        assert parse_address("1/2") == LocationReference("2", "1")

    def test_dm(self):
        assert parse_address("@me/2") == LocationReference("2")

    @pytest.mark.parametrize("text", ["", "1", "1/2/3", "a/2", "1/b"])
    def test_rejects(self, text):
        assert parse_address(text) is None


class TestOpenLinkInTab:
    def test_opens_tab(self, tabs, navigate):
        tab_id = open_link_in_tab(tabs, f"https://discord.com/channels/{GUILD}/{CHANNEL}/{MESSAGE}")
        assert tabs.active_tab_id == tab_id
        navigate.assert_called_once_with(LocationReference(CHANNEL, GUILD), MESSAGE)

    def test_dedupes(self, tabs):
        url = f"https://discord.com/channels/{GUILD}/{CHANNEL}"
        assert open_link_in_tab(tabs, url) == open_link_in_tab(tabs, url)
        assert len(tabs) == 1

    def test_invalid_link(self, tabs):
        assert open_link_in_tab(tabs, "nope") is None
        assert len(tabs) == 0
