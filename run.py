#!/usr/bin/env python3
"""
Simple launcher script for Weekplanner API.
Run this from the root directory to start the application.
"""

import uvicorn

from weekplanner.config import API_HOST, API_PORT, LOG_LEVEL

if __name__ == "__main__":
    print("🚀 Starting Weekplanner API with auto-reload...")
    print(f"📖 API Documentation: http://localhost:{API_PORT}/docs")
    print(f"🔍 Health Check: http://localhost:{API_PORT}/health")
    print("🛑 Press Ctrl+C to stop the server")
    print("-" * 50)

    # Use import string format for reload to work properly
    uvicorn.run(
        "weekplanner.main:app",
        host=API_HOST,
        port=API_PORT,
        reload=True,
        reload_dirs=["weekplanner"],
        log_level=LOG_LEVEL.lower()
    )
