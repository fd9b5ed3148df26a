"""Generate the system-tray icon (64×64 PIL Image, in-memory)."""

from __future__ import annotations

from datetime import date

from PIL import Image, ImageDraw, ImageFont

from locale_utils import MONTHS

SIZE = 64
BAND = 18
ACCENT = "#0078D4"


def _fit_font(draw: ImageDraw.ImageDraw, text: str, max_w: int, max_h: int,
              start: int) -> ImageFont.ImageFont:
    size = start
    while size > 6:
        try:
            font = ImageFont.truetype("DejaVuSans-Bold.ttf", size)
        except OSError:
            return ImageFont.load_default()
        bbox = draw.textbbox((0, 0), text, font=font)
        if bbox[2] - bbox[0] <= max_w and bbox[3] - bbox[1] <= max_h:
            return font
        size -= 1
    return font


def _centre(draw: ImageDraw.ImageDraw, text: str, font, top: int, height: int,
            fill: str) -> None:
    bbox = draw.textbbox((0, 0), text, font=font)
    x = (SIZE - (bbox[2] - bbox[0])) / 2 - bbox[0]
    y = top + (height - (bbox[3] - bbox[1])) / 2 - bbox[1]
    draw.text((x, y), text, fill=fill, font=font)


def create_icon_image(today: date | None = None) -> Image.Image:
    """Return a tear-off calendar page: month abbreviation band over the day number."""
    today = today or date.today()
    img = Image.new("RGBA", (SIZE, SIZE), "white")
    draw = ImageDraw.Draw(img)

    draw.rectangle((0, 0, SIZE - 1, BAND - 1), fill=ACCENT)
    month_abbr = MONTHS[today.month - 1][:3].upper()
    _centre(draw, month_abbr, _fit_font(draw, month_abbr, SIZE - 8, BAND - 4, 16),
            0, BAND, "white")

    day_text = str(today.day)
    _centre(draw, day_text, _fit_font(draw, day_text, SIZE - 4, SIZE - BAND - 4, 60),
            BAND, SIZE - BAND, "black")
    draw.rectangle((0, 0, SIZE - 1, SIZE - 1), outline=ACCENT)
    return img
