from __future__ import annotations

import os
from typing import Mapping, Optional


def get_env_stripped(name: str, default: str = "", env: Optional[Mapping[str, str]] = None) -> str:
    source = os.environ if env is None else env
    val = source.get(name)
    if val is None:
        return default
    s = val.strip()
    if (s.startswith("'") and s.endswith("'")) or (s.startswith('"') and s.endswith('"')):
        s = s[1:-1]
    return s
