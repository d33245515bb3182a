#!/usr/bin/env python3
"""
Development startup script.

Starts the storefront API in development mode with auto-reload.
"""

import secrets
import shutil
import subprocess
import sys
from pathlib import Path

# Project root
PROJECT_ROOT = Path(__file__).parent.parent
ENV_FILE = PROJECT_ROOT / "config" / ".env"
ENV_EXAMPLE = PROJECT_ROOT / "config" / ".env.example"


def check_dependencies():
    """Check if required dependencies are installed."""
    try:
        import fastapi
        import uvicorn
        import httpx
        import jwt
        import cryptography
        print("✓ All core dependencies installed")
        return True
    except ImportError as e:
        print(f"✗ Missing dependency: {e.name}")
        print("\nRun: pip install -e .")
        return False


def check_env():
    """Check if .env file exists."""
    if ENV_FILE.exists():
        print("✓ Configuration file found")
        return True
    elif ENV_EXAMPLE.exists():
        print("! Configuration file not found, copying from example...")
        shutil.copy(ENV_EXAMPLE, ENV_FILE)
        print("✓ Created config/.env from example")
        return True
    else:
        print("✗ No configuration file found")
        return False


def check_secret():
    """Make sure bearer tokens are not signed with the placeholder secret."""
    lines = ENV_FILE.read_text(encoding="utf-8").splitlines()
    for line in lines:
        key, _, value = line.partition("=")
        if key.strip() == "STOREFRONT_SECRET_KEY" and value.strip() not in ("", "change-me-in-production"):
            print("✓ Token secret configured")
            return

    lines = [line for line in lines if not line.startswith("STOREFRONT_SECRET_KEY")]
    lines.append(f"STOREFRONT_SECRET_KEY={secrets.token_urlsafe(48)}")
    ENV_FILE.write_text("\n".join(lines) + "\n", encoding="utf-8")
    print("✓ Generated a token secret in config/.env")


def start_storefront():
    """Run the storefront until interrupted."""
    print("\n🐾 Starting TinyPaws Storefront on http://localhost:8001 ...")
    print("📍 API docs: http://localhost:8001/docs")
    print("\nPress Ctrl+C to stop")

    process = subprocess.Popen(
        [
            sys.executable, "-m", "uvicorn",
            "storefront.main:app",
            "--reload",
            "--host", "0.0.0.0",
            "--port", "8001",
        ],
        cwd=PROJECT_ROOT,
    )
    try:
        process.wait()
    except KeyboardInterrupt:
        print("\n\nShutting down...")
        process.terminate()
        process.wait()
        print("Storefront stopped.")


def main():
    print("=" * 60)
    print("TinyPaws Storefront - Development Server")
    print("=" * 60)

    print("\nRunning pre-flight checks...")

    if not check_dependencies():
        sys.exit(1)

    if not check_env():
        sys.exit(1)

    check_secret()

    print("\n✓ All checks passed!")
    start_storefront()


if __name__ == "__main__":
    main()
