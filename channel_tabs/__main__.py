"""Entry point: run the channel tabs host app for the local user."""

from __future__ import annotations

import os

from .app import ChannelTabsApp


def main() -> None:
    ChannelTabsApp(user_id=os.environ.get("CHANNEL_TABS_USER", "local")).run()


if __name__ == "__main__":
    main()
