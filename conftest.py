"""Root conftest: seed the environment before chama_chat.config is imported."""
from __future__ import annotations

import os
from pathlib import Path

_ROOT = Path(__file__).resolve().parent


def _read_env_file(path: Path) -> dict[str, str]:
    values: dict[str, str] = {}
    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if sep:
            values[key.strip()] = value.strip()
    return values


_env_test = _ROOT / ".env.test"
if _env_test.exists():
    for _key, _value in _read_env_file(_env_test).items():
        os.environ.setdefault(_key, _value)

for _key, _value in {
    "POSTGRES_USER": "chama",
    "POSTGRES_PASSWORD": "chama",
    "POSTGRES_DB": "chama_test",
}.items():
    os.environ.setdefault(_key, _value)
