# SPDX-License-Identifier: LGPL-3.0-or-later
# nicpower/modes/inventory_mode.py
from __future__ import annotations

import argparse
import logging
from typing import Optional

from rich.console import Console

from ..core.utils import U
from .common import NO_MEDIA_MESSAGE, close_all, load_media, make_console, print_media_list


class InventoryMode:
    """
    Read-only listing of adapter instances (--list).
    With --json the instances are printed as a JSON array instead.
    """

    def __init__(self, logger: logging.Logger, args: argparse.Namespace, *, console: Optional[Console] = None):
        self.logger = logger
        self.args = args
        self.console = console or make_console()

    def run(self) -> int:
        media = load_media(self.logger, self.args)
        try:
            if getattr(self.args, "json", False):
                print(U.json_dump([mi.to_dict() for mi in media]))
            elif media:
                print_media_list(self.console, media)

            if not media:
                self.logger.warning(NO_MEDIA_MESSAGE)
            return 0
        finally:
            close_all(media)
