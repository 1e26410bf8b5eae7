from __future__ import annotations
from importlib import resources

try:
    from importlib.resources.abc import Traversable
except ImportError:  # pragma: no cover
    from importlib.abc import Traversable

# Resource names generated into the package at wheel build time.
TEXT_NAME = "pci.ids"
MANIFEST_NAME = "manifest.json"


def text_resource() -> Traversable:
    return resources.files(__package__).joinpath(TEXT_NAME)


def manifest_resource() -> Traversable:
    return resources.files(__package__).joinpath(MANIFEST_NAME)


def bundled_text_available() -> bool:
    try:
        return text_resource().is_file()
    except OSError:  # pragma: no cover
        return False
