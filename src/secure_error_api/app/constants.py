from __future__ import annotations

REQUEST_ID_HEADER = "X-Request-Id"
