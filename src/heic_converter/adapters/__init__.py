from __future__ import annotations

from functools import lru_cache
from typing import Callable, Dict

from .base import Codec, CodecError, run_sync
from .pillow import PillowHeifCodec

_CODEC_FACTORIES: Dict[str, Callable[[], Codec]] = {
    PillowHeifCodec.name: PillowHeifCodec,
}


def register_codec(name: str, factory: Callable[[], Codec]) -> None:
    _CODEC_FACTORIES[name] = factory
    get_codec.cache_clear()


@lru_cache(maxsize=None)
def get_codec(name: str = PillowHeifCodec.name) -> Codec:
    factory = _CODEC_FACTORIES.get(name)
    if not factory:
        raise KeyError(f"No codec registered under {name!r}")
    return factory()


__all__ = [
    "Codec",
    "CodecError",
    "PillowHeifCodec",
    "get_codec",
    "register_codec",
    "run_sync",
]
