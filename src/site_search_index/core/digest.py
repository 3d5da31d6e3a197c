"""
Content digests used for change detection and cache keying.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any, Union


def digest(content: Union[str, bytes]) -> str:
    """
    Return the hex MD5 digest of ``content``.

    Strings are encoded as UTF-8 first.
    """
    if isinstance(content, str):
        content = content.encode("utf-8")
    return hashlib.md5(content).hexdigest()


def serialize(value: Any) -> str:
    """
    Stable JSON serialization fed to ``digest``.
    """
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
