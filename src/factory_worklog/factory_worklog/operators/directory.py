from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, List, Optional

from ..common.validators import normalize_digits
from ..core.exceptions import ConfigurationError
from .model import Operator

logger = logging.getLogger(__name__)

DEFAULT_OPERATORS_FILE = Path(__file__).resolve().parents[1] / "data" / "operators.json"


class OperatorDirectory:
    """Static lookup table keyed by operator code.

    Codes typed with Persian or Arabic-Indic digits match their ASCII form.
    """

    def __init__(self, operators: Iterable[Operator]):
        self._by_code = {normalize_digits(op.code).strip(): op for op in operators}

    def __len__(self) -> int:
        return len(self._by_code)

    def lookup(self, code: str) -> Optional[Operator]:
        return self._by_code.get(normalize_digits((code or "").strip()))

    def all(self) -> List[Operator]:
        return list(self._by_code.values())


def load_operators(path: str | Path | None = None) -> OperatorDirectory:
    """Load the lookup table from a JSON list of {code, name, machine} rows."""
    path = Path(path) if path else DEFAULT_OPERATORS_FILE
    try:
        rows = json.loads(path.read_text(encoding="utf-8"))
        operators = [
            Operator(code=str(r["code"]), full_name=str(r["name"]), machine_code=str(r["machine"]))
            for r in rows
        ]
    except (OSError, ValueError, KeyError, TypeError) as e:
        raise ConfigurationError(f"Operator table {path} is invalid: {e}") from e

    logger.info("Loaded %d operators from %s", len(operators), path)
    return OperatorDirectory(operators)
