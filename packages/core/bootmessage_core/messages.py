"""Message resource lookup and the one-time classification of what to display."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, Union


class MessageCategory(str, Enum):
    SPINNER_REQUIRED = "SpinnerRequired"
    STATIC = "Static"


# Long-running operations that get the animated spinner next to their text.
SPINNER_MESSAGES = frozenset(
    {
        "enter_dev1_virtual",
        "leave_dev",
        "power_wash",
        "self_repair",
        "update_firmware",
    }
)


@dataclass(frozen=True)
class TextSource:
    path: Path
    locale: str


@dataclass(frozen=True)
class MarkupSource:
    path: Path


@dataclass(frozen=True)
class ImageSource:
    path: Path


MessageSource = Union[TextSource, MarkupSource, ImageSource]


def classify(message_id: str, force_spinner: bool = False) -> MessageCategory:
    if force_spinner or message_id in SPINNER_MESSAGES:
        return MessageCategory.SPINNER_REQUIRED
    return MessageCategory.STATIC


def split_locales(locale_candidates: str | Iterable[str]) -> list[str]:
    if isinstance(locale_candidates, str):
        return locale_candidates.split()
    return [loc for loc in locale_candidates if loc]


class MessageCatalog:
    """Localized text files laid out as ``<root>/<locale>/<message_id>.txt``."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def path_for(self, message_id: str, locale: str) -> Path:
        return self.root / locale / f"{message_id}.txt"

    def locate(self, message_id: str, locale: str) -> TextSource | None:
        path = self.path_for(message_id, locale)
        if not path.is_file():
            return None
        return TextSource(path=path, locale=locale)
