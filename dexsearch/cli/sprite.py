"""Sprite lookup, download and terminal rendering."""

import io
import logging
import re
import unicodedata
from typing import Optional

import httpx
from PIL import Image, UnidentifiedImageError
from rich.align import Align
from rich.console import Console
from rich.style import Style
from rich.text import Text

logger = logging.getLogger(__name__)

SPRITE_BASE_URL = "https://raw.githubusercontent.com/itsjavi/pokemon-assets/master/assets/img/pokemon"

MEGA_PATTERN = re.compile(r"^mega-(?P<name>.+?)(?P<xy>-x|-y)?$")

# Pixels at or below this alpha are drawn as empty cells
ALPHA_THRESHOLD = 16

HALF_BLOCK = "▀"


class SpriteError(Exception):
    """Raised when a sprite cannot be downloaded or decoded."""

    pass


def _strip_accents(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(c for c in decomposed if not unicodedata.combining(c))


def sprite_name_slug(name: str) -> str:
    """Convert a display name into the asset file name used for sprites.

    Example:
        >>> sprite_name_slug("Mega Charizard X")
        'charizard-mega-x'
    """
    slug = (
        name.lower()
        .replace(" ", "-")
        .replace(".", "")
        .replace(":", "")
        .replace("'", "")
        .replace("♀", "-f")
        .replace("♂", "-m")
    )
    slug = _strip_accents(slug)
    return MEGA_PATTERN.sub(r"\g<name>-mega\g<xy>", slug)


def sprite_url(name: str, base_url: str = SPRITE_BASE_URL) -> str:
    return f"{base_url.rstrip('/')}/{sprite_name_slug(name)}.png"


def download_sprite(url: str, timeout: float = 10.0, client: Optional[httpx.Client] = None) -> bytes:
    """Fetch sprite bytes over HTTP.

    Args:
        url: Sprite URL
        timeout: Request timeout in seconds
        client: Optional httpx client (a short-lived one is created otherwise)

    Returns:
        Raw image bytes

    Raises:
        SpriteError: On transport errors or a non-success status
    """
    logger.info(f'downloading image from "{url}"')

    try:
        if client is None:
            with httpx.Client(timeout=timeout, follow_redirects=True) as owned:
                response = owned.get(url)
        else:
            response = client.get(url, timeout=timeout)
    except httpx.HTTPError as e:
        raise SpriteError(str(e)) from e

    if not response.is_success:
        raise SpriteError(f"{response.status_code} {response.reason_phrase}")
    return response.content


def _cell_color(pixel) -> Optional[str]:
    r, g, b, a = pixel
    if a <= ALPHA_THRESHOLD:
        return None
    return f"rgb({r},{g},{b})"


def sprite_to_text(image: Image.Image, width: int) -> Text:
    """Draw an image as rows of half blocks, two pixel rows per line."""
    image = image.convert("RGBA")
    width = max(1, width)
    height = max(2, round(image.height * width / image.width))
    image = image.resize((width, height + height % 2), Image.Resampling.NEAREST)

    pixels = image.load()
    text = Text()
    for y in range(0, image.height, 2):
        for x in range(image.width):
            top = _cell_color(pixels[x, y])
            bottom = _cell_color(pixels[x, y + 1])
            if top is None and bottom is None:
                text.append(" ")
            elif top is None:
                # Transparent top half
                text.append("▄", style=Style(color=bottom))
            else:
                text.append(HALF_BLOCK, style=Style(color=top, bgcolor=bottom))
        if y + 2 < image.height:
            text.append("\n")
    return text


def render_sprite(data: bytes, width: int = 68, console_width: int = 80) -> str:
    """Decode sprite bytes and render them centred for the terminal.

    Raises:
        SpriteError: If the bytes are not a readable image
    """
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except (UnidentifiedImageError, OSError) as e:
        raise SpriteError(f"Could not decode image: {e}") from e

    text = sprite_to_text(image, min(width, console_width))

    buffer = io.StringIO()
    console = Console(file=buffer, force_terminal=True, color_system="truecolor", width=console_width)
    console.print(Align.center(text, width=console_width))
    return buffer.getvalue().rstrip("\n")
