"""Display renditions of stored originals."""

from __future__ import annotations

import io
import os
from pathlib import Path

from PIL import Image, ImageOps, UnidentifiedImageError

from picvoter.core.errors import DecodeError

RENDITION_SIZE = 1080
JPEG_QUALITY = 85
RENDITION_EXT = "jpg"


class Transcoder:
    """Produces one square JPEG per original.

    Renditions are cropped to fill: the image is scaled with Lanczos until it
    covers the square, then the centre is cut out. Aspect ratio is kept and
    the output is always exactly ``size`` x ``size``.
    """

    def __init__(
        self,
        resized_root: Path,
        *,
        size: int = RENDITION_SIZE,
        quality: int = JPEG_QUALITY,
    ) -> None:
        self.resized_root = Path(resized_root)
        self.size = size
        self.quality = quality

    def rendition_path(self, content_hash: str) -> Path:
        """Return where the rendition for a hash is stored."""
        return self.resized_root / f"{content_hash}.{RENDITION_EXT}"

    def render(self, raw_path: Path) -> bytes:
        """Decode ``raw_path`` and return the encoded rendition.

        Raises:
            DecodeError: If the file is not a decodable raster image.
            OSError: If the file cannot be read.
        """
        try:
            with Image.open(raw_path) as img:
                img = ImageOps.exif_transpose(img)
                img.load()
                rgb = img.convert("RGB")
        except (UnidentifiedImageError, Image.DecompressionBombError) as exc:
            raise DecodeError(f"Cannot decode {raw_path.name}: {exc}") from exc
        except (SyntaxError, ValueError) as exc:
            # Pillow plugins report malformed headers this way.
            raise DecodeError(f"Cannot decode {raw_path.name}: {exc}") from exc
        except OSError as exc:
            if not raw_path.exists():
                raise
            raise DecodeError(f"Cannot decode {raw_path.name}: {exc}") from exc

        fitted = ImageOps.fit(
            rgb,
            (self.size, self.size),
            method=Image.Resampling.LANCZOS,
            centering=(0.5, 0.5),
        )
        buffer = io.BytesIO()
        fitted.save(buffer, format="JPEG", quality=self.quality, optimize=True)
        return buffer.getvalue()

    def write(self, content_hash: str, raw_path: Path) -> Path:
        """Render ``raw_path`` and store it under the hash's rendition path."""
        data = self.render(raw_path)
        target = self.rendition_path(content_hash)
        self.resized_root.mkdir(parents=True, exist_ok=True)
        tmp = target.with_name(f".{target.name}.tmp")
        try:
            tmp.write_bytes(data)
            os.replace(tmp, target)
        except OSError:
            tmp.unlink(missing_ok=True)
            raise
        return target

    def remove(self, content_hash: str) -> None:
        """Delete a rendition, if present."""
        self.rendition_path(content_hash).unlink(missing_ok=True)
