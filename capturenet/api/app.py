"""capturenet — default ASGI application.

Importing this module builds the graph from ``CAPTURENET_DATASET_PATH``
(or the bundled dataset) straight away.

Usage:
    uvicorn capturenet.api.app:app --host 0.0.0.0 --port 8000 --workers 4
"""

from __future__ import annotations

from capturenet.api.factory import create_app

app = create_app()
