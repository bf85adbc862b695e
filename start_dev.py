#!/usr/bin/env python3
"""
Development startup script for Fake News Detection Backend
This script checks the development environment and starts the server
"""

import asyncio
import importlib.util
import subprocess
import sys
import time
from pathlib import Path

import httpx

REQUIRED_PACKAGES = {
    'fastapi': 'fastapi',
    'uvicorn': 'uvicorn',
    'httpx': 'httpx',
    'pydantic': 'pydantic',
    'slowapi': 'slowapi',
    'dotenv': 'python-dotenv',
    'loguru': 'loguru',
    'pandas': 'pandas',
}

def check_python_version():
    """Check if Python version is compatible."""
    if sys.version_info < (3, 10):
        print("❌ Python 3.10+ is required")
        print(f"   Current version: {sys.version}")
        return False
    print(f"✅ Python version: {sys.version.split()[0]}")
    return True

def check_dependencies():
    """Check if required packages are installed."""
    missing_packages = []

    for module_name, package in REQUIRED_PACKAGES.items():
        if importlib.util.find_spec(module_name) is None:
            missing_packages.append(package)
            print(f"❌ {package} (missing)")
        else:
            print(f"✅ {package}")

    if missing_packages:
        print(f"\n📦 Install missing packages:")
        print(f"   pip install {' '.join(missing_packages)}")
        return False

    return True

def check_env_file():
    """Check if .env file exists and create from template if needed."""
    env_file = Path('.env')
    env_example = Path('env.example')

    if env_file.exists():
        print("✅ .env file exists")
        return True

    if not env_example.exists():
        print("❌ No .env file found and no template available")
        return False

    print("📝 Creating .env file from template...")
    try:
        env_file.write_text(env_example.read_text())
    except OSError as e:
        print(f"❌ Failed to create .env file: {e}")
        return False

    print("✅ .env file created")
    print("⚠️  Set OPENAI_API_KEY in .env to enable AI analysis")
    return True

def check_datasets():
    """Report which sample datasets are available."""
    from samples import dataset_availability

    available = dataset_availability()
    for name, present in available.items():
        marker = "✅" if present else "⚠️ "
        print(f"{marker} {name}.csv{'' if present else ' (not found, GET /detect returns an empty list)'}")
    return any(available.values())

async def test_backend(base_url: str = "http://localhost:8000"):
    """Test if the backend is responding."""
    try:
        async with httpx.AsyncClient(timeout=5.0) as client:
            response = await client.get(f"{base_url}/health")
            if response.status_code == 200:
                print("✅ Backend is responding")
                return True
            print(f"❌ Backend responded with status {response.status_code}")
            return False
    except httpx.HTTPError as e:
        print(f"❌ Backend not responding: {e}")
        return False

def start_backend():
    """Start the backend server."""
    print("🚀 Starting Fake News Detection Backend...")

    try:
        process = subprocess.Popen([sys.executable, 'app.py'])
    except OSError as e:
        print(f"❌ Failed to start backend: {e}")
        return False

    # Wait a bit for startup
    time.sleep(3)

    if process.poll() is not None:
        print(f"❌ Backend exited with code {process.returncode}")
        return False

    print("✅ Backend started successfully")
    print("   URL: http://localhost:8000")
    print("   Health: http://localhost:8000/health")
    print("\n   Press Ctrl+C to stop the backend")

    try:
        process.wait()
    except KeyboardInterrupt:
        print("\n🛑 Stopping backend...")
        process.terminate()
        process.wait()
        print("✅ Backend stopped")

    return True

def main():
    """Main startup function."""
    print("🚀 Fake News Detection Backend - Development Setup")
    print("=" * 60)

    if not check_python_version():
        return 1

    print("\n📦 Checking dependencies...")
    if not check_dependencies():
        print("\n💡 Install dependencies first:")
        print("   pip install -e .")
        return 1

    print("\n🔧 Checking environment...")
    if not check_env_file():
        return 1

    print("\n🗂️ Checking datasets...")
    check_datasets()

    print("\n🧪 Testing backend...")
    if asyncio.run(test_backend()):
        print("✅ Backend is already running")
        return 0

    print("\n🚀 Starting backend...")
    return 0 if start_backend() else 1

if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\n🛑 Setup interrupted")
        sys.exit(1)
