"""pkgscout: export lookup and source retrieval for locally installed UI packages."""

from __future__ import annotations

__version__ = "0.1.0"
