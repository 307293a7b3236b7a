"""Named colours and JSON palette files.

A palette file is a JSON object mapping names to hex strings:

    {"sky": "#87ceeb", "ember": "f40"}

Each value must be a JSON string holding a bare hex colour (`#fff`,
`87ceeb`). The decoded string is re-encoded as its JSON token and handed
to `unmarshal_text`, so quotes inside the value itself are not stripped
and are rejected.
"""

import json
from pathlib import Path

from hdrcolor.core.color import BLACK, PINK, YELLOW, Color, ColorParseError, unmarshal_text

BUILTIN: dict[str, Color] = {
    'black': BLACK,
    'pink': PINK,
    'yellow': YELLOW,
    'white': Color(1.0, 1.0, 1.0),
    'red': Color(1.0, 0.0, 0.0),
    'green': Color(0.0, 1.0, 0.0),
    'blue': Color(0.0, 0.0, 1.0),
}


class PaletteError(ValueError):
    """A palette file that is not a JSON object of colour strings."""


def load_palette(path: str | Path) -> dict[str, Color]:
    """Load a palette file from disk."""
    with open(path, encoding='utf-8') as f:
        text = f.read()
    return parse_palette(text, source=str(path))


def parse_palette(text: str, source: str = '<string>') -> dict[str, Color]:
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as err:
        raise PaletteError(f'{source}: invalid JSON: {err}') from err
    if not isinstance(raw, dict):
        raise PaletteError(f'{source}: expected a JSON object of name -> colour')

    palette: dict[str, Color] = {}
    for name, value in raw.items():
        if not isinstance(value, str):
            raise PaletteError(f'{source}: {name}: expected a string, got {type(value).__name__}')
        try:
            # Hand the hook the raw JSON token, quotes included
            palette[name] = unmarshal_text(json.dumps(value).encode('utf-8'))
        except ColorParseError as err:
            raise PaletteError(f'{source}: {name}: {err}') from err
    return palette


def resolve(value: str, palette: dict[str, Color] | None = None) -> Color:
    """Resolve a palette name or hex string to a Color.

    Names in `palette` shadow the built-in names. Anything else is parsed as
    a hex colour, optionally wrapped in double quotes.
    """
    if palette and value in palette:
        return palette[value]
    if value in BUILTIN:
        return BUILTIN[value]
    return unmarshal_text(value)
