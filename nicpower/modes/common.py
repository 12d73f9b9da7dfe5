# SPDX-License-Identifier: LGPL-3.0-or-later
# nicpower/modes/common.py
from __future__ import annotations

import argparse
import logging
from typing import List, Sequence

from rich.console import Console

from ..devices import MediaInfo, PowerSettings, scan_media_instances
from ..registry import root_key

NO_MEDIA_MESSAGE = "No media instances found!"


def make_console() -> Console:
    return Console(highlight=False, soft_wrap=True)


def load_media(logger: logging.Logger, args: argparse.Namespace) -> List[MediaInfo]:
    return scan_media_instances(logger, root=root_key(args.root), class_path=args.class_path)


def target_from_args(args: argparse.Namespace) -> PowerSettings:
    return PowerSettings(
        conservation_idle_time=args.conservation_idle_time,
        performance_idle_time=args.performance_idle_time,
        idle_power_state=args.idle_power_state,
    )


def print_media_list(console: Console, media: Sequence[MediaInfo]) -> None:
    console.print(f"Found {len(media)} media instances:\n", style="bold", markup=False)
    for mi in media:
        console.print(mi.description(), markup=False)
        for line in mi.power.lines():
            console.print(line, markup=False)
        console.print()


def close_all(media: Sequence[MediaInfo]) -> None:
    for mi in media:
        mi.close()
