"""Environment and .env configuration for hdrcolor.

Precedence (first wins):
  1. Variables already in the OS environment. These are never overwritten.
  2. The .env file named by --env-file, if given.
  3. The nearest .env walking up from the working directory. The walk ends
     at the first directory containing .git, so a .env outside the
     repository is never read.

Recognised variables:
  HDRCOLOR_PALETTE       path to a JSON palette file
  HDRCOLOR_SWATCH_SIZE   swatch square size in pixels (default 64)
"""

import os
from collections.abc import Mapping
from pathlib import Path

from hdrcolor.core.types import DEFAULT_SWATCH_SIZE, Settings

PALETTE_VAR = 'HDRCOLOR_PALETTE'
SWATCH_SIZE_VAR = 'HDRCOLOR_SWATCH_SIZE'


def _find_dotenv(start: Path) -> Path | None:
    """Nearest .env at or above start, without crossing a .git boundary."""
    start = start.resolve()
    for directory in (start, *start.parents):
        candidate = directory / '.env'
        if candidate.is_file():
            return candidate
        # .git is a directory in a clone and a file in a worktree
        if (directory / '.git').exists():
            break
    return None


def _parse_dotenv(path: Path) -> dict[str, str]:
    """KEY=value lines; quotes around values are dropped, # lines skipped."""
    values: dict[str, str] = {}
    with open(path, encoding='utf-8') as f:
        for raw in f:
            line = raw.strip()
            if not line or line.startswith('#') or '=' not in line:
                continue
            key, _, value = line.partition('=')
            key = key.strip()
            if key.startswith('export '):
                key = key[len('export ') :].strip()
            if key:
                values[key] = value.strip().strip('"').strip("'")
    return values


def load_env(env_file: str | None = None) -> Path | None:
    """Fill unset os.environ keys from a .env file.

    Returns the file that was read, or None.
    """
    path = Path(env_file) if env_file else _find_dotenv(Path.cwd())
    if path is None or not path.is_file():
        return None

    for key, value in _parse_dotenv(path).items():
        os.environ.setdefault(key, value)
    return path


def settings_from_env(environ: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from environment variables.

    A missing, non-integer or non-positive swatch size falls back to the default.
    """
    environ = os.environ if environ is None else environ

    palette = environ.get(PALETTE_VAR, '').strip()
    try:
        size = int(environ.get(SWATCH_SIZE_VAR, ''))
    except ValueError:
        size = DEFAULT_SWATCH_SIZE
    if size <= 0:
        size = DEFAULT_SWATCH_SIZE

    return Settings(
        palette_path=Path(palette) if palette else None,
        swatch_size=size,
    )


def load_settings(env_file: str | None = None) -> tuple[Settings, Path | None]:
    """Load .env (if any) and return the resulting Settings and the .env path."""
    env_path = load_env(env_file)
    return settings_from_env(), env_path
