from __future__ import annotations
from dataclasses import dataclass
import logging
import os
import weakref
from pathlib import Path
from typing import Callable, List, Optional, Sequence
from importlib import resources
from ..types import PciDb
from .textdb import PciDbText
from ..data import text_resource, bundled_text_available

log = logging.getLogger(__name__)

SYSTEM_PCI_IDS = (
    "/usr/share/hwdata/pci.ids",
    "/usr/share/misc/pci.ids",
    "/usr/share/pci.ids",
)


@dataclass(frozen=True)
class Candidate:
    """Represents a potential DB source in the discovery order."""

    kind: str  # "path", "env", "system", "bundled"
    ref: str  # path or resource name for debugging
    opener: Callable[[], PciDb]  # returns an opened DB instance, or raises


def _open_text(p: str) -> PciDb:
    if not Path(p).is_file():
        raise FileNotFoundError(p)
    return PciDbText(p)


def _open_bundled() -> PciDb:
    # as_file() may extract to a temp file; release it together with the DB.
    cm = resources.as_file(text_resource())
    p = cm.__enter__()
    try:
        db = PciDbText(str(p))
    except Exception:
        cm.__exit__(None, None, None)
        raise

    _orig_close = db.close

    def _close_and_release() -> None:
        try:
            _orig_close()
        finally:
            cm.__exit__(None, None, None)

    db.close = _close_and_release  # type: ignore[method-assign]
    weakref.finalize(db, cm.__exit__, None, None, None)
    return db


def _resolve_candidates(
    *,
    explicit_path: Optional[str],
    env_path: Optional[str],
    system_paths: Sequence[str],
    allow_bundled: bool,
    allow_system: bool,
) -> List[Candidate]:
    """
    Build an ordered list of candidates. Pure function -> easy to unit test:
    an explicit path short-circuits everything else.
    """
    if explicit_path:
        p = str(explicit_path)
        return [Candidate("path", p, lambda: _open_text(p))]

    cands: List[Candidate] = []
    if env_path:
        cands.append(Candidate("env", env_path, lambda p=env_path: _open_text(p)))

    if allow_system:
        for sp in system_paths:
            cands.append(Candidate("system", sp, lambda p=sp: _open_text(p)))

    if allow_bundled and bundled_text_available():
        cands.append(Candidate("bundled", "<pkg>/pci.ids", _open_bundled))

    return cands


# -------- public entry --------


def discover_db(path: Optional[str] = None) -> PciDb:
    cands = _resolve_candidates(
        explicit_path=path,
        env_path=os.getenv("PCISCAN_IDS"),
        system_paths=SYSTEM_PCI_IDS,
        allow_bundled=os.getenv("PCISCAN_NO_BUNDLED") != "1",
        allow_system=os.getenv("PCISCAN_NO_SYSTEM") != "1",
    )

    last_err: Optional[Exception] = None
    for c in cands:
        try:
            db = c.opener()
        except (OSError, ValueError) as e:
            log.debug("pci.ids candidate %s (%s) unusable: %s", c.kind, c.ref, e)
            last_err = e
            continue
        log.debug("using pci.ids from %s (%s)", c.kind, c.ref)
        return db

    raise FileNotFoundError(
        "No PCI ID database found. "
        "Set PCISCAN_IDS, install hwdata, or allow bundled resources."
    ) from last_err
