# tactician/__init__.py
from __future__ import annotations

from .core import Tactician
from .session import DuelResult, DuelSession

__all__ = ["Tactician", "DuelResult", "DuelSession"]
