"""Export every stored record to an .xlsx work report (no web server needed)."""

from __future__ import annotations

import argparse
import asyncio
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.factory_worklog.factory_worklog.container import build_record_store
from src.factory_worklog.factory_worklog.export.service import WorkReportExporter


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--out-dir", default=str(REPO_ROOT / "exports"))
    args = parser.parse_args()

    settings = importlib.import_module(get_settings_module())
    store, _ = build_record_store(settings)
    records = asyncio.run(store.fetch_all())

    export = WorkReportExporter().build(records)
    out_dir = Path(args.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    out_file = out_dir / export.filename
    out_file.write_bytes(export.content)
    print(f"OK: Exported {len(records)} record(s) -> {out_file}")


if __name__ == "__main__":
    main()
