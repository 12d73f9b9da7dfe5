# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# nicpower/cli/help_texts.py
from __future__ import annotations

# Pure help text for the argparse epilog; keep it copy/paste runnable.

YAML_EXAMPLE = r"""# nicpower configuration (YAML)
#
# Run (elevated prompt, registry writes need Administrator):
#   nicpower --config nicpower.yaml
#
# Merge multiple configs (later overrides earlier):
#   nicpower --config base.yaml --config overrides.yaml
#
# Keys are the CLI option names (dashes or underscores both work).
# CLI flags override anything set here.

root: HKEY_LOCAL_MACHINE
class_path: SYSTEM\CurrentControlSet\Control\Class\{4d36e96c-e325-11ce-bfc1-08002be10318}

# Values written to <instance>\PowerSettings (4-byte little-endian REG_BINARY)
conservation_idle_time: 0xffffffff
performance_idle_time: 0xffffffff
idle_power_state: 0x3

# Non-interactive run: pick instance #1 and do not ask for confirmation
# select: 1
# yes: true
# dry_run: true

# Logging
# verbose: 2
# log_file: ./nicpower.log
# json_logs: false
"""

FEATURE_SUMMARY = r"""
  - Lists every network adapter instance with driver metadata and idle power settings
  - Rewrites ConservationIdleTime / PerformanceIdleTime / IdlePowerState of one instance
  - --list [--json] for read-only inventory, --dry-run to preview writes
  - Exit status: 0 ok (also when no instances exist), 1 registry access failed, 2 bad usage/config
"""
