"""
Vertical news video: one Pillow-drawn frame (solid background + text overlays)
held for the whole duration, with the voice-over as soundtrack when present.
"""

import os
import textwrap
import uuid
from typing import List, Optional

import numpy as np
from moviepy import AudioFileClip, ImageClip
from PIL import Image, ImageColor, ImageDraw, ImageFont

from global_news_bot.domain.models import OverlayText
from global_news_bot.ports.interfaces import IMediaEncoder

FONT_CANDIDATES = (
    "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
    "/System/Library/Fonts/Helvetica.ttc",
    "/System/Library/Fonts/Supplemental/Arial Bold.ttf",
    "C:\\Windows\\Fonts\\arialbd.ttf",
)

MARGIN = 40
BOX_PADDING = 12
LINE_SPACING = 8


def load_font(size: int) -> ImageFont.ImageFont:
    for path in FONT_CANDIDATES:
        try:
            return ImageFont.truetype(path, size)
        except OSError:
            continue
    return ImageFont.load_default(size=size)


class MoviePyEncoder(IMediaEncoder):
    """Pillow renders the frame, MoviePy muxes it with audio into an H.264/AAC mp4."""

    def __init__(
        self,
        *,
        output_dir: str = "output",
        width: int = 720,
        height: int = 1280,
        fps: int = 30,
    ):
        self.output_dir = output_dir
        self.width = width
        self.height = height
        self.fps = fps
        os.makedirs(self.output_dir, exist_ok=True)

    def render_frame(self, background: str, overlays: List[OverlayText]) -> Image.Image:
        base = Image.new("RGBA", (self.width, self.height), ImageColor.getrgb(background) + (255,))
        layer = Image.new("RGBA", (self.width, self.height), (0, 0, 0, 0))
        draw = ImageDraw.Draw(layer)

        for overlay in overlays:
            font = load_font(overlay.font_size)
            lines = self._wrap(draw, overlay.text, font)
            widths = [draw.textlength(line, font=font) for line in lines]
            line_h = overlay.font_size + LINE_SPACING
            block_w = max(widths, default=0)
            block_h = line_h * len(lines)

            if overlay.box_opacity > 0:
                box_x = self._x(overlay.align, block_w)
                draw.rectangle(
                    [(box_x - BOX_PADDING, overlay.y - BOX_PADDING),
                     (box_x + block_w + BOX_PADDING, overlay.y + block_h + BOX_PADDING)],
                    fill=(0, 0, 0, int(255 * overlay.box_opacity)),
                )

            for i, (line, line_w) in enumerate(zip(lines, widths)):
                x = self._x(overlay.align, line_w)
                y = overlay.y + i * line_h
                # Shadow for readability on bright backgrounds
                draw.text((x + 2, y + 2), line, font=font, fill=(0, 0, 0, 180))
                draw.text((x, y), line, font=font, fill=overlay.color)

        return Image.alpha_composite(base, layer).convert("RGB")

    def render(
        self,
        background: str,
        overlays: List[OverlayText],
        audio_path: Optional[str],
        duration_seconds: int,
    ) -> str:
        output_path = os.path.join(self.output_dir, f"news_{uuid.uuid4().hex}.mp4")
        frame = self.render_frame(background, overlays)

        clip = ImageClip(np.array(frame)).with_duration(duration_seconds)
        audio = None
        try:
            if audio_path:
                audio = AudioFileClip(audio_path)
                if audio.duration > duration_seconds:
                    audio = audio.subclipped(0, duration_seconds)
                clip = clip.with_audio(audio)
            print(f"  🎞️  Rendering {duration_seconds}s video at {self.width}x{self.height}...")
            try:
                clip.write_videofile(
                    output_path,
                    fps=self.fps,
                    codec="libx264",
                    audio_codec="aac",
                    preset="fast",
                    audio_bitrate="192k",
                    threads=4,
                    logger=None,
                )
            except Exception:
                if os.path.exists(output_path):
                    os.remove(output_path)
                raise
        finally:
            clip.close()
            if audio is not None:
                audio.close()
        return output_path

    def _wrap(self, draw: ImageDraw.ImageDraw, text: str, font: ImageFont.ImageFont) -> List[str]:
        max_width = self.width - 2 * MARGIN
        if draw.textlength(text, font=font) <= max_width:
            return [text]
        avg_char = max(draw.textlength("x", font=font), 1)
        return textwrap.wrap(text, width=max(int(max_width // avg_char), 1)) or [text]

    def _x(self, align: str, text_width: float) -> int:
        if align == "left":
            return MARGIN
        if align == "right":
            return int(self.width - MARGIN - text_width)
        return int((self.width - text_width) // 2)
