"""FastAPI REST API for the sprint namer.

Example:
    ```python
    import uvicorn
    from sprintnamer.api import create_app

    app = create_app()
    uvicorn.run(app, host="0.0.0.0", port=3000)
    ```

Or run directly:
    ```bash
    uvicorn sprintnamer.api:app --reload
    ```
"""

from .app import app, create_app
from .router import router, system_router

__all__ = [
    "app",
    "create_app",
    "router",
    "system_router",
]
