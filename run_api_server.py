"""
Run the ai-diagnose API server
"""
import logging

import uvicorn

from api_routes import create_app
from core.config import load_settings

if __name__ == "__main__":
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    print("Starting Curable AI Diagnose API...")
    print(f"Server running at: http://localhost:{settings.port}")
    print(f"API docs at: http://localhost:{settings.port}/docs")
    print(f"Health check at: http://localhost:{settings.port}/api/health")
    print("\nPress CTRL+C to stop the server")

    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port)
