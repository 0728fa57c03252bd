"""Ephemeris adapters (optional).

Thin wrappers around skyfield, used only by the ephemeris diagnostics.
Install with:
  pip install "lunarcal[ephemeris]"
"""

from __future__ import annotations

from typing import Any, Optional, Tuple

from lunarcal.config import Settings

DEFAULT_KERNEL = "de421.bsp"


def require_ephemeris():
    """Raise a clear error if ephemeris extras aren't installed."""
    try:
        import skyfield  # noqa: F401
    except ImportError as e:
        raise RuntimeError('Ephemeris support requires: pip install "lunarcal[ephemeris]"') from e


def load_ephemeris(kernel: str = DEFAULT_KERNEL, settings: Optional[Settings] = None) -> Tuple[Any, Any]:
    """
    (timescale, ephemeris) from skyfield. Kernels are downloaded on first use
    into the lunarcal cache directory.
    """
    require_ephemeris()
    from skyfield.api import Loader

    settings = settings if settings is not None else Settings.from_env()
    load = Loader(str(settings.cache_dir / "ephemeris"))
    return load.timescale(), load(kernel)
