from __future__ import annotations

from io import BytesIO

from .base import CodecError, run_sync

PIL_FORMATS: dict[str, str] = {
    "jpeg": "JPEG",
    "jpg": "JPEG",
    "png": "PNG",
    "webp": "WEBP",
}


def to_pil_quality(quality: float) -> int:
    """Map a 0-1 quality onto Pillow's 1-100 JPEG scale."""
    if not 0.0 < quality <= 1.0:
        raise CodecError(f"quality must be in (0, 1], got {quality!r}")
    return max(1, min(100, round(quality * 100)))


class PillowHeifCodec:
    """Decode HEIC through pillow-heif and re-encode with Pillow."""

    name = "pillow"

    def __init__(self) -> None:
        try:
            from pillow_heif import register_heif_opener
        except ModuleNotFoundError as exc:  # pragma: no cover - import guard
            raise RuntimeError("pillow-heif is required to decode HEIC images") from exc

        register_heif_opener()

    def encode(self, payload: bytes, *, target_format: str, quality: float) -> bytes:
        from PIL import Image, ImageOps, UnidentifiedImageError

        pil_format = PIL_FORMATS.get(target_format.lower())
        if pil_format is None:
            raise CodecError(f"Unsupported target format: {target_format}")
        save_kwargs: dict[str, object] = {}
        if pil_format in {"JPEG", "WEBP"}:
            save_kwargs["quality"] = to_pil_quality(quality)

        try:
            with Image.open(BytesIO(payload)) as img:
                img = ImageOps.exif_transpose(img)
                # JPEG has no alpha channel
                if pil_format == "JPEG" and img.mode != "RGB":
                    img = img.convert("RGB")
                buffer = BytesIO()
                img.save(buffer, format=pil_format, **save_kwargs)
        except (UnidentifiedImageError, OSError, ValueError) as exc:
            raise CodecError(f"Cannot convert payload: {exc}") from exc
        return buffer.getvalue()

    async def convert(self, payload: bytes, *, target_format: str, quality: float) -> bytes:
        return await run_sync(self.encode, payload, target_format=target_format, quality=quality)


__all__ = ["PillowHeifCodec", "to_pil_quality"]
