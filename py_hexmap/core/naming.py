"""
Province naming from a finite list of names.

Names are drawn at random and removed from the pool, so no name is ever used
twice. Once the pool runs dry, provinces get synthetic ``Number #<id>`` labels.
"""

from pathlib import Path
from typing import Iterable, List, Optional, Set, Union

import structlog

from .alea_prng import AleaPRNG

logger = structlog.get_logger()

DEFAULT_NAMES_FILE = Path(__file__).resolve().parent.parent / "data" / "province_names.txt"


def load_province_names(path: Optional[Union[str, Path]] = None) -> List[str]:
    """
    Read province names, one per line.

    A missing or unreadable file is logged and yields an empty list, which
    makes every generated province fall back to a synthetic name.

    Args:
        path: Names file, defaults to the packaged list

    Returns:
        Names in file order
    """
    names_file = Path(path) if path is not None else DEFAULT_NAMES_FILE
    try:
        text = names_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Can't load province names", path=str(names_file), error=str(e))
        return []
    return [line.strip() for line in text.splitlines() if line.strip()]


class ProvinceNamer:
    """Hands out unique province names."""

    def __init__(self, names: Iterable[str], prng: AleaPRNG):
        # dict.fromkeys drops duplicates and keeps order
        self.pool: List[str] = list(dict.fromkeys(n for n in names if n))
        self.prng = prng
        self.used: Set[str] = set()

    @property
    def remaining(self) -> int:
        return len(self.pool)

    def reserve(self, name: str) -> None:
        """Mark a name taken by some other means, e.g. kept from a template."""
        self.used.add(name)
        if name in self.pool:
            self.pool.remove(name)

    def create_name(self, province_id: int) -> str:
        """
        Consume a random pool name, or build a synthetic one.

        Args:
            province_id: Id of the province being named

        Returns:
            A name not handed out before
        """
        while self.pool:
            name = self.pool.pop(self.prng.pick_index(len(self.pool)))
            if name not in self.used:
                self.used.add(name)
                return name

        name = f"Number #{province_id}"
        suffix = 1
        while name in self.used:
            suffix += 1
            name = f"Number #{province_id}-{suffix}"
        self.used.add(name)
        return name
