#!/usr/bin/env python3
"""
Development startup script for Beacon Tool Navigator
"""

import sys
from pathlib import Path


def main():
    """Main startup function"""
    print("🚀 Starting Beacon Tool Navigator...")

    if not Path(".env").exists():
        print("⚠️  .env file not found. Set GEMINI_API_KEY (or AI_PROVIDER=openai and OPENAI_API_KEY);")
        print("   without a key Beacon serves reference and fallback data only.")

    # Check if virtual environment is activated
    if not (hasattr(sys, 'base_prefix') and sys.base_prefix != sys.prefix):
        print("⚠️  Virtual environment not detected. Consider using venv or conda.")

    print("🌟 Starting FastAPI server...")
    print("🧭 Navigator: http://localhost:8000/")
    print("📚 API Documentation: http://localhost:8000/api/v1/docs")
    print("🏥 Health Check: http://localhost:8000/api/v1/health")
    print("🔄 Use Ctrl+C to stop the server")

    try:
        import uvicorn
        uvicorn.run(
            "main:app",
            host="0.0.0.0",
            port=8000,
            reload=True,
            log_level="info"
        )
    except KeyboardInterrupt:
        print("\n👋 Server stopped by user")
    except Exception as e:
        print(f"❌ Error starting server: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
