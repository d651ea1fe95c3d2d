"""Graphic Packs Updater - keeps a local Cemu graphicPacks folder current.

Provides:
* Release page lookup for the newest graphic packs archive
* Archive download
* Path-traversal safe, name-filtered ZIP extraction
* Thin CLI wrapper (`gfxpack-updater`)
"""

from .common.config import UpdaterSettings  # noqa: F401
from .common.logging_config import configure_logging  # noqa: F401
from .core.extractor import SafeExtractor  # noqa: F401
from .core.updater import GraphicPacksUpdater, UpdateResult, UpdateState  # noqa: F401

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "configure_logging",
    "UpdaterSettings",
    "SafeExtractor",
    "GraphicPacksUpdater",
    "UpdateResult",
    "UpdateState",
]
