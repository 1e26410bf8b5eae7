# hatch_build.py
from __future__ import annotations

import gzip
import hashlib
import json
import os
import sys
import urllib.request
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from hatchling.builders.hooks.plugin.interface import BuildHookInterface

PCI_IDS_URL_GZ = "https://pci-ids.ucw.cz/v2.2/pci.ids.gz"
SYSTEM_PCI_IDS = (
    "/usr/share/hwdata/pci.ids",
    "/usr/share/misc/pci.ids",
    "/usr/share/pci.ids",
)


def _sha256(p: Path) -> str:
    h = hashlib.sha256()
    with p.open("rb") as f:
        for chunk in iter(lambda: f.read(1 << 20), b""):
            h.update(chunk)
    return h.hexdigest()


def _system_pci_ids() -> Optional[Path]:
    for p in SYSTEM_PCI_IDS:
        if Path(p).is_file():
            return Path(p)
    return None


class CustomBuildHook(BuildHookInterface):
    """
    During a wheel build, write pciscan/data/pci.ids from:
      1) the first system copy found (hwdata / pciutils), or
      2) pci-ids.ucw.cz, only when PCISCAN_FORCE_DOWNLOAD=1
    plus pciscan/data/manifest.json. With no source available the wheel is
    built without a bundled table; discovery then relies on system copies.
    """

    def _generate(self) -> list[Path]:
        root = Path(self.root).resolve()
        data_dir = root / "pciscan" / "data"
        text_out = data_dir / "pci.ids"
        manifest_out = data_dir / "manifest.json"

        system = _system_pci_ids()
        if os.getenv("PCISCAN_FORCE_DOWNLOAD") == "1":
            with urllib.request.urlopen(PCI_IDS_URL_GZ) as r:
                raw = gzip.decompress(r.read())
            text_out.write_bytes(raw)
            source = {"method": "download", "url": PCI_IDS_URL_GZ}
        elif system is not None:
            text_out.write_bytes(system.read_bytes())
            source = {"method": "system", "path": str(system)}
        elif text_out.is_file():
            return [text_out]
        else:
            self.app.display_warning(
                "no pci.ids found; building without a bundled identifier table"
            )
            return []

        manifest = {
            "generated_at_utc": datetime.now(timezone.utc).strftime(
                "%Y-%m-%dT%H:%M:%SZ"
            ),
            "source": source,
            "text": {"sha256": _sha256(text_out), "size": text_out.stat().st_size},
            "python": sys.version.split()[0],
            "tool": "hatch_build.py",
        }
        manifest_out.write_text(json.dumps(manifest, indent=2) + "\n", encoding="utf-8")
        return [text_out, manifest_out]

    def initialize(self, version: str, build_data: dict) -> None:
        generated = self._generate()
        # Editable installs read straight from the source tree.
        if version == "editable":
            return
        build_data.setdefault("force_include", {})
        for p in generated:
            build_data["force_include"][str(p)] = str(
                p.relative_to(Path(self.root).resolve())
            )
