# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# nicpower/config/config_loader.py
"""
Config files for nicpower.

  - --config may be given several times; each entry may be a file, a
    directory (all *.yaml/*.yml/*.json inside, sorted) or a glob.
  - YAML (PyYAML safe_load) or JSON, picked by suffix.
  - Later files deep-merge over earlier ones.
  - Top level must be a mapping; keys are CLI destinations (dashes allowed).
"""
from __future__ import annotations

import argparse
import glob
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Sequence

import yaml

from ..core.utils import U

CONFIG_SUFFIXES = (".yaml", ".yml", ".json")


def _norm_key(k: Any) -> str:
    return str(k).strip().replace("-", "_")


def deep_merge(base: Dict[str, Any], over: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(base)
    for k, v in over.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = deep_merge(out[k], v)
        else:
            out[k] = v
    return out


class Config:
    @staticmethod
    def expand_configs(logger: logging.Logger, cfgs: Sequence[str]) -> List[Path]:
        out: List[Path] = []
        for raw in cfgs:
            p = Path(raw).expanduser()
            if p.is_dir():
                found = sorted(x for x in p.iterdir() if x.suffix.lower() in CONFIG_SUFFIXES and x.is_file())
                logger.debug("Config dir %s -> %d file(s)", p, len(found))
                out.extend(found)
            elif any(ch in raw for ch in "*?["):
                matches = sorted(Path(m) for m in glob.glob(str(p)))
                if not matches:
                    U.die(logger, f"Config glob matched nothing: {raw}", 2)
                out.extend(matches)
            elif p.is_file():
                out.append(p)
            else:
                U.die(logger, f"Config file not found: {raw}", 2)
        return out

    @staticmethod
    def load_one(logger: logging.Logger, path: Path) -> Dict[str, Any]:
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as e:
            U.die(logger, f"Cannot read config {path}: {e}", 2)

        try:
            if path.suffix.lower() == ".json":
                data = json.loads(raw) if raw.strip() else {}
            else:
                data = yaml.safe_load(raw) or {}
        except (yaml.YAMLError, ValueError) as e:
            U.die(logger, f"Invalid config {path}: {e}", 2)

        if not isinstance(data, dict):
            U.die(logger, f"Config {path} must contain a mapping at top level (got {type(data).__name__})", 2)

        logger.debug("Loaded config %s (%d key(s))", path, len(data))
        return {_norm_key(k): v for k, v in data.items()}

    @staticmethod
    def load_many(logger: logging.Logger, paths: Sequence[Path]) -> Dict[str, Any]:
        merged: Dict[str, Any] = {}
        for p in paths:
            merged = deep_merge(merged, Config.load_one(logger, Path(p)))
        return merged

    @staticmethod
    def apply_as_defaults(logger: logging.Logger, parser: argparse.ArgumentParser, conf: Dict[str, Any]) -> None:
        """Install config values as parser defaults so explicit CLI flags still win."""
        dests = {a.dest for a in parser._actions}
        known = {k: v for k, v in conf.items() if k in dests}
        for k in sorted(set(conf) - set(known)):
            logger.warning("Ignoring unknown config key: %s", k)
        if known:
            parser.set_defaults(**known)

    @staticmethod
    def dump(conf: Dict[str, Any]) -> str:
        return yaml.safe_dump(conf, sort_keys=True, default_flow_style=False)
