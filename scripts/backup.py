"""Backup the local record store.

Note: Only the JSON backend is handled here. For the mysql backend use
`mysqldump` or MySQL Workbench.
"""

from __future__ import annotations

import importlib
import shutil
import sys
from datetime import datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    if settings.STORE_BACKEND != "json":
        raise SystemExit("STORE_BACKEND is not 'json'; back up the database with mysqldump instead.")

    src = Path(settings.STORE_PATH)
    if not src.exists():
        raise SystemExit(f"Nothing to back up: {src} does not exist.")

    out_dir = REPO_ROOT / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)

    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    out_file = out_dir / f"{src.stem}_{ts}{src.suffix}"
    shutil.copy2(src, out_file)
    print(f"OK: Backup created: {out_file}")


if __name__ == "__main__":
    main()
