from __future__ import annotations

import json
from typing import Any


def dumps(obj: Any) -> str:
    """
    Minimal JSON dumper for CLI responses.
    No prettify; ensure_ascii=False; the trailing newline is the CLI's business.
    """
    return json.dumps(obj, ensure_ascii=False)
