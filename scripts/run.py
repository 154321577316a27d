#!/usr/bin/env python3
"""
useMovies Startup Script
"""

import asyncio
import sys
from pathlib import Path

# Add package to path
sys.path.insert(0, str(Path(__file__).parent.parent))


def generate_env_file():
    """Generate .env file if it doesn't exist"""
    env_path = Path(__file__).parent.parent / ".env"
    env_example = Path(__file__).parent.parent / ".env.example"

    if not env_path.exists():
        if env_example.exists():
            env_path.write_text(env_example.read_text())
            print("Generated .env file from .env.example, set OMDB_API_KEY in it")
        else:
            print("Warning: .env.example not found, using default configuration")


async def run_server():
    """Run main API server"""
    import uvicorn
    from usemovies.config import settings

    print(f"useMovies API starting on http://{settings.HOST}:{settings.PORT}")

    config = uvicorn.Config(
        "usemovies.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=False,
        log_level="info",
        access_log=True,
    )
    server = uvicorn.Server(config)
    await server.serve()


async def main():
    generate_env_file()

    from usemovies.config import settings

    print(f"""
    ╔══════════════════════════════════════╗
    ║               useMovies              ║
    ╚══════════════════════════════════════╝

      API Server:          http://{settings.HOST}:{settings.PORT}
       - Session API:       http://{settings.HOST}:{settings.PORT}/api/session
       - API Documentation: http://{settings.HOST}:{settings.PORT}/docs
       - OMDb key:          {"configured" if settings.OMDB_API_KEY else "MISSING (set OMDB_API_KEY)"}

    Press CTRL+C to stop the server
    """)

    await run_server()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
