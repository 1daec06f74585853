"""Application entry point for the Players API service."""

import uvicorn
from players_api.core import get_settings

if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "players_api.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=settings.web_server_port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
