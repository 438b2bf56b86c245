import os
from pathlib import Path
from typing import Dict


def _parse_line(raw_line: str):
    line = raw_line.strip()
    if not line or line.startswith("#") or "=" not in line:
        return None
    if line.startswith("export "):
        line = line[len("export "):]
    key, value = line.split("=", 1)
    key = key.strip()
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
        value = value[1:-1]
    return key, value


def load_environments(env_path: str = ".env") -> Dict[str, str]:
    """Copy KEY=value pairs from ``env_path`` into ``os.environ``.

    Variables already present in the process environment are left alone.
    Returns the pairs that were actually applied.
    """
    env_file = Path(env_path)
    if not env_file.is_file():
        return {}

    applied: Dict[str, str] = {}
    for raw_line in env_file.read_text(encoding="utf-8").splitlines():
        parsed = _parse_line(raw_line)
        if parsed is None:
            continue
        key, value = parsed
        if key and key not in os.environ:
            os.environ[key] = value
            applied[key] = value
    return applied
