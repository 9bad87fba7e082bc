"""
smartjump: multi-monitor cursor edge jumping and window fill for X11
Warps the cursor across misaligned displays and fills moved windows
"""

import subprocess
from pathlib import Path

RELEASE = "0.4.0"


def _gitRevision_get(checkout: Path) -> str:
    """
    Short commit id of a source checkout

    Args:
        checkout: Directory inside the working tree

    Returns:
        Seven-character revision, or "dev" outside git or without a git binary
    """
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--short=7", "HEAD"],
            cwd=checkout,
            capture_output=True,
            text=True,
            timeout=1,
            check=True,
        )
    except (OSError, subprocess.SubprocessError):
        return "dev"
    return result.stdout.strip() or "dev"


__version__ = f"{RELEASE}.{_gitRevision_get(Path(__file__).resolve().parent)}"
