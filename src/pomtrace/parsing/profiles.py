"""
Active profile list parsing.

Reads the console output of ``mvn help:active-profiles``:

    Active Profiles for Project 'com.acme:app:jar:1.0.0':

    The following profiles are active:

     - dev (source: com.acme:app:1.0.0)
     - jdk17 (source: com.acme:parent:1.0.0)
"""

import re
from typing import List

_PROFILE_LINE = re.compile(r"^\s*-\s*([^\s(]+)")
_LOG_PREFIX = re.compile(r"^\[[A-Z]+\]\s*")


def parse_active_profiles(output: str) -> List[str]:
    """Return profile ids in order of appearance, without duplicates."""
    profiles: List[str] = []
    for raw in output.splitlines():
        line = _LOG_PREFIX.sub("", raw)
        match = _PROFILE_LINE.match(line)
        if match:
            profile_id = match.group(1).strip()
            if profile_id and profile_id not in profiles:
                profiles.append(profile_id)
    return profiles
