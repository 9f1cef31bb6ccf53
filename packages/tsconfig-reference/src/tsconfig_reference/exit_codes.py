from __future__ import annotations

OK = 0
ERR_CATALOG = 3
ERR_CONTENT = 4
ERR_METADATA = 5
ERR_DRIFT = 6
ERR_INTERNAL = 99
