# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# nicpower/devices/discovery.py
"""
Scan the network-adapter device class for adapter instances.

Failing to open the class key or to count its children is fatal. Anything
that goes wrong with a single instance is logged and that instance skipped.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from ..core.logger import Log
from ..core.logging_utils import log_step
from ..core.utils import U
from ..registry import Key, LocalMachine, RegError
from .models import (
    NETWORK_ADAPTER_CLASS_PATH,
    POWER_SETTINGS_SUBKEY,
    DriverInfo,
    MediaInfo,
    PowerSettings,
)


def _skip(log: logging.LoggerAdapter, err: RegError, *keys: Key) -> None:
    log.error("%s", err)
    for k in keys:
        k.close()


def _read_instance(log: logging.LoggerAdapter, class_key: Key, index: int, next_id: int) -> Optional[MediaInfo]:
    name_res = class_key.enum_subkey_names(index)
    if not name_res.ok:
        log.error("%s", name_res.error)
        return None

    main_key = Key(class_key, name_res.value)
    if not main_key.valid:
        log.error("Could not open a key '%s'", main_key.path, extra={"ctx": {"status": main_key.error.code}})
        return None

    ps_key = Key(main_key, POWER_SETTINGS_SUBKEY)
    if not ps_key.valid:
        log.error("Could not open a key '%s'", ps_key.path, extra={"ctx": {"status": ps_key.error.code}})
        main_key.close()
        return None

    ps_res = ps_key.read_u32_values(PowerSettings.VALUE_NAMES)
    if not ps_res.ok:
        return _skip(log, ps_res.error, ps_key, main_key)

    drv_res = main_key.read_string_values(DriverInfo.VALUE_NAMES)
    if not drv_res.ok:
        return _skip(log, drv_res.error, ps_key, main_key)

    return MediaInfo(
        id=next_id,
        main_key=main_key.take(),
        ps_key=ps_key.take(),
        driver=DriverInfo.from_values(drv_res.value),
        power=PowerSettings.from_values(ps_res.value),
    )


def scan_media_instances(
    logger: logging.Logger,
    root: Key = LocalMachine,
    class_path: str = NETWORK_ADAPTER_CLASS_PATH,
) -> List[MediaInfo]:
    """
    Return every readable adapter instance below `root`\\`class_path`, numbered
    from 0 in enumeration order. Raises Fatal(1) if the class key cannot be
    opened or its subkeys cannot be counted.
    """
    with Key(root, class_path) as class_key:
        if not class_key.valid:
            U.die(logger, f"Could not open a key {class_key.path} ({class_key.error.detail})")

        count_res = class_key.get_subkeys_count()
        if not count_res.ok:
            U.die(logger, str(count_res.error))

        media: List[MediaInfo] = []
        with log_step(logger, f"Scanning {count_res.value} subkeys of {class_key.path}"):
            for index in range(count_res.value):
                log = Log.bind(logger, index=index)
                mi = _read_instance(log, class_key, index, len(media))
                if mi is not None:
                    log.debug("Found %s", mi.main_key.path)
                    media.append(mi)
        return media
