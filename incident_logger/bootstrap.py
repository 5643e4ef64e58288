from __future__ import annotations

import os
from pathlib import Path


def load_dotenv(path: str = ".env") -> int:
    """Export KEY=VALUE lines from ``path``; variables already set win. Returns the count applied."""
    env_path = Path(path)
    if not env_path.exists():
        return 0

    applied = 0
    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if line.startswith("export "):
            line = line[len("export "):].lstrip()
        if not line or line.startswith("#") or "=" not in line:
            continue

        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key in os.environ:
            continue
        os.environ[key] = value
        applied += 1
    return applied
