from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_DEFAULT_CATALOG = Path(__file__).resolve().parent.parent / "data" / "catalog.csv"


@dataclass(frozen=True)
class CatalogConfig:
    """
    Configuration for loading the content catalog.
    """

    catalog_path: Path = field(
        default_factory=lambda: Path(os.getenv("MIXMIND_CATALOG_PATH", str(_DEFAULT_CATALOG)))
    )
    list_separator: str = "|"


DEFAULT_CATALOG_CONFIG = CatalogConfig()
