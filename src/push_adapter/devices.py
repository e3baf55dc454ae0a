"""Installation classification by platform."""

import logging
from typing import Iterable, Union

from src.push_adapter.models import Installation

logger = logging.getLogger(__name__)


def coerce_installation(installation: Union[Installation, dict]) -> Installation:
    """Accept either an Installation or a raw installation dict."""
    if isinstance(installation, Installation):
        return installation
    return Installation.from_dict(installation)


def classify_installations(
    installations: Iterable[Union[Installation, dict]],
    valid_push_types: Iterable[str],
) -> dict[str, list[Installation]]:
    """Group installations by platform.

    Every valid push type gets a key, even when no installation matches.
    Installations on other platforms are dropped. Input order is kept
    within each group.
    """
    device_map: dict[str, list[Installation]] = {
        push_type.lower(): [] for push_type in valid_push_types
    }
    dropped = 0

    for item in installations:
        installation = coerce_installation(item)
        group = device_map.get((installation.platform or "").lower())
        if group is None:
            dropped += 1
            continue
        group.append(installation)

    if dropped:
        logger.debug(f"Ignored {dropped} installations on unsupported platforms")
    return device_map
