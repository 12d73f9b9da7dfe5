# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# nicpower/modes/tune_mode.py
"""
Interactive tuning: list instances, pick one, confirm, write the target
power settings. --select/--yes answer the prompts, --dry-run stops before
writing.
"""
from __future__ import annotations

import argparse
import logging
from typing import Callable, Optional

from rich.console import Console

from ..core.exceptions import Fatal
from ..devices import MediaInfo, PowerSettings, apply_power_settings
from .common import (
    NO_MEDIA_MESSAGE,
    close_all,
    load_media,
    make_console,
    print_media_list,
    target_from_args,
)

InputFn = Callable[[str], str]


class TuneMode:
    def __init__(
        self,
        logger: logging.Logger,
        args: argparse.Namespace,
        *,
        console: Optional[Console] = None,
        input_fn: Optional[InputFn] = None,
    ):
        self.logger = logger
        self.args = args
        self.console = console or make_console()
        self.input_fn: InputFn = input_fn or (lambda prompt: self.console.input(prompt, markup=False))

    def _ask(self, prompt: str) -> str:
        try:
            return self.input_fn(prompt).strip()
        except EOFError:
            self.console.print()
            raise Fatal(1, "Aborting: no more input")

    def _choose(self, count: int) -> int:
        sel = getattr(self.args, "select", None)
        if sel is not None:
            if not 0 <= sel < count:
                raise Fatal(2, f"--select {sel} out of range (0-{count - 1})")
            return sel

        prompt = f"Select media instance (0-{count - 1}) >> "
        while True:
            answer = self._ask(prompt)
            if answer.isascii() and answer.isdigit() and int(answer) < count:
                return int(answer)

    def _confirm(self) -> bool:
        if getattr(self.args, "yes", False):
            return True
        while True:
            answer = self._ask("Do you want to proceed? (y/n) >> ")
            if answer in ("y", "n"):
                return answer == "y"

    def _print_plan(self, mi: MediaInfo, target: PowerSettings) -> None:
        self.console.print(f"Selected {mi.description()}", markup=False)
        self.console.print(
            "The program is about to update device's power settings to the following values:", markup=False
        )
        for line in mi.power.diff_lines(target):
            self.console.print(line, markup=False)
        self.console.print()

    def run(self) -> int:
        media = load_media(self.logger, self.args)
        try:
            if not media:
                self.logger.warning(NO_MEDIA_MESSAGE)
                return 0

            print_media_list(self.console, media)

            mi = media[self._choose(len(media))]
            target = target_from_args(self.args)
            self._print_plan(mi, target)

            if getattr(self.args, "dry_run", False):
                self.console.print("Dry run: nothing written", markup=False)
                return 0

            if not self._confirm():
                self.console.print("Aborting", markup=False)
                return 0

            report = apply_power_settings(self.logger, mi, target)
            if report.ok:
                self.console.print("Settings have been updated", style="bold green", markup=False)
            else:
                total = len(report.written) + len(report.failed)
                self.console.print(
                    f"Settings have been partially updated ({len(report.failed)} of {total} values failed)",
                    style="bold yellow",
                    markup=False,
                )
            return 0
        finally:
            close_all(media)
