"""Package logger shared by sessions, stores and widgets."""

from __future__ import annotations

import logging

logger = logging.getLogger("channel_tabs")
