import os
import platform
from collections.abc import Mapping

from fastapi import APIRouter

router = APIRouter()

SAFE_PREFIXES = ("APP_", "DB_HOST", "DB_PORT", "DB_NAME")
SAFE_KEYS = {"PORT", "LOG_LEVEL"}


def filter_injected_vars(environ: Mapping[str, str]) -> dict[str, str]:
    """Keep only variables that are safe to echo back to a caller."""
    return {
        key: value
        for key, value in sorted(environ.items())
        if key.startswith(SAFE_PREFIXES) or key in SAFE_KEYS
    }


@router.get("")
async def injected_env():
    return {
        "python_version": platform.python_version(),
        "platform": platform.system().lower(),
        "injected_vars": filter_injected_vars(os.environ),
    }
