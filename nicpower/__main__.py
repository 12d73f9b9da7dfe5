# SPDX-License-Identifier: LGPL-3.0-or-later
#!/usr/bin/env python3
# -*- coding: utf-8 -*-
from __future__ import annotations

import sys
import traceback
from typing import List, Optional

from .cli.args import parse_args_with_config
from .core.exceptions import Fatal, format_exception_for_cli
from .modes import InventoryMode, TuneMode


def _print_stderr(msg: str) -> None:
    print(msg, file=sys.stderr)


def run(argv: Optional[List[str]] = None) -> int:
    # Phase 1: parse (Fatal can happen here)
    try:
        args, _conf, logger = parse_args_with_config(argv)
    except Fatal as e:
        # Config loading reports through U.die(); validators raise silently.
        if not e.context.get("logged"):
            _print_stderr(f"💥 ERROR    {format_exception_for_cli(e)}")
        return e.code
    except KeyboardInterrupt:
        _print_stderr("Interrupted by user (Ctrl+C).")
        return 130

    # Phase 2: run the selected mode
    try:
        mode = InventoryMode(logger, args) if args.list else TuneMode(logger, args)
        return mode.run()
    except Fatal as e:
        # U.die() already logged; anything else raised Fatal directly.
        if not e.context.get("logged"):
            logger.error(format_exception_for_cli(e, verbose=args.verbose))
        return e.code
    except KeyboardInterrupt:
        logger.warning("Interrupted by user (Ctrl+C).")
        return 130
    except Exception as e:
        logger.error("💥 UNHANDLED %s: %s", type(e).__name__, e)
        logger.debug(traceback.format_exc())
        return 1


def main() -> None:
    raise SystemExit(run())


if __name__ == "__main__":
    main()
