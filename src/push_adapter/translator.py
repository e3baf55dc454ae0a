"""Translation of generic payload data into OneSignal platform bodies.

Recognized keys are consumed and mapped to OneSignal fields. Every
other key is passed through untouched in the body's ``data`` field.
The caller's dict is deep-copied and never modified.
"""

import copy
from typing import Any, Callable

from src.push_adapter.config import TOKEN_FIELDS, BadgeType, Platform
from src.push_adapter.models import PlatformBody

INCREMENT_BADGE = "Increment"


def _pop(data: dict, key: str) -> Any:
    """Remove a recognized key. A None value counts as unset: the key is consumed but not mapped."""
    return data.pop(key, None)


def translate_ios(data: dict[str, Any]) -> PlatformBody:
    """Build the iOS (APNs via OneSignal) body."""
    data = copy.deepcopy(data or {})
    fields: dict[str, Any] = {}

    badge = _pop(data, "badge")
    if badge is not None:
        if badge == INCREMENT_BADGE:
            fields["ios_badgeType"] = BadgeType.INCREASE.value
            fields["ios_badgeCount"] = 1
        else:
            fields["ios_badgeType"] = BadgeType.SET_TO.value
            fields["ios_badgeCount"] = badge

    alert = _pop(data, "alert")
    if alert is not None:
        fields["contents"] = {"en": alert}

    sound = _pop(data, "sound")
    if sound is not None:
        fields["ios_sound"] = sound

    # Only a literal 1 is a content-available flag; anything else passes through
    if data.get("content-available") == 1:
        del data["content-available"]
        fields["content_available"] = True

    return PlatformBody(
        platform=Platform.IOS,
        token_field=TOKEN_FIELDS[Platform.IOS],
        fields=fields,
        data=data,
    )


def translate_android(data: dict[str, Any]) -> PlatformBody:
    """Build the Android (FCM via OneSignal) body."""
    data = copy.deepcopy(data or {})
    fields: dict[str, Any] = {}

    alert = _pop(data, "alert")
    if alert is not None:
        fields["contents"] = {"en": alert}

    title = _pop(data, "title")
    if title is not None:
        fields["title"] = {"en": title}

    uri = _pop(data, "uri")
    if uri is not None:
        fields["url"] = uri

    return PlatformBody(
        platform=Platform.ANDROID,
        token_field=TOKEN_FIELDS[Platform.ANDROID],
        fields=fields,
        data=data,
    )


TRANSLATORS: dict[Platform, Callable[[dict[str, Any]], PlatformBody]] = {
    Platform.IOS: translate_ios,
    Platform.ANDROID: translate_android,
}
