#!/usr/bin/env python3
"""
Arsip Server - Setup and Deployment Script

This script initializes the Arsip server for deployment:
1. Creates SQLite database with schema
2. Creates the admin account (and demo accounts when configured)
3. Populates default runtime settings
4. Initializes attachment storage

Paths and seeding options come from the ARSIP_* environment variables
(see config.py).

Usage:
    python setup_server.py
"""

import sys
from pathlib import Path

# Ensure we can import from the same directory
sys.path.insert(0, str(Path(__file__).parent))

from config import settings
from managers.database_manager import DatabaseManager, DEMO_USERS
from file_storage import InitializeStorage, ATTACHMENT_DIR


def print_header():
    """Print script header"""
    print("=" * 70)
    print("Arsip Server - Setup and Deployment Script")
    print("=" * 70)
    print()


def print_section(title):
    """Print section header"""
    print()
    print("-" * 70)
    print(f"  {title}")
    print("-" * 70)


def initialize_database():
    """
    Initialize the SQLite database with schema and default data

    Returns:
        str or None: Admin password if created, None otherwise
    """
    print_section("Database Initialization")

    db_path = Path(settings.database_path)

    if db_path.exists():
        print(f"[OK] Database file found at: {db_path.absolute()}")
        print("  Existing database will be updated with any missing tables/settings.")
    else:
        print(f"-> Creating new database at: {db_path.absolute()}")

    print()

    try:
        db_manager = DatabaseManager(settings.database_path)
        admin_password = db_manager.InitializeDatabase(
            admin_password=settings.admin_password,
            seed_demo_users=settings.seed_demo_users
        )

        print("[OK] Database initialization complete!")
        return admin_password

    except Exception as e:
        print(f"[ERROR] Database initialization failed: {str(e)}")
        raise


def initialize_storage():
    """Initialize the attachment storage directory"""
    print_section("Storage Directory Initialization")

    storage_path = Path(settings.storage_root)
    print(f"-> Initializing storage at: {storage_path.absolute()}")
    print()

    try:
        InitializeStorage(settings.storage_root)
        print("[OK] Storage directories created:")
        print(f"  - {(storage_path / ATTACHMENT_DIR).absolute()}")

    except Exception as e:
        print(f"[ERROR] Storage initialization failed: {str(e)}")
        raise


def print_admin_credentials(admin_password):
    """Display the seeded accounts"""
    print()
    print("=" * 70)
    print("  ADMIN ACCOUNT CREATED")
    print("=" * 70)
    print("  Username: admin")
    print(f"  Password: {admin_password}")
    print()
    print("  SAVE THIS PASSWORD - IT WILL NOT BE SHOWN AGAIN!")

    if settings.seed_demo_users:
        print()
        print("  Demo accounts:")
        for username, password, role, full_name in DEMO_USERS:
            print(f"    {username} / {password} ({role.value}, {full_name})")
    print("=" * 70)


def print_next_steps():
    """Print post-setup instructions"""
    print("""
Next Steps:

1. Start the server:

   python server.py

   Or with uvicorn directly:

   uvicorn server:app --host 0.0.0.0 --port 8000

2. Set a fixed signing key so sessions survive restarts:

   export ARSIP_SECRET_KEY=<long random string>

3. Serve over HTTPS in production and set ARSIP_COOKIE_SECURE=true.

4. Set the office time zone used for the year in letter numbers:

   export ARSIP_OFFICE_TIMEZONE=Asia/Jakarta

5. Log in as admin and create accounts for staff and leadership.
""")


def main():
    """Main setup script entry point"""
    print_header()

    print("This script will set up the Arsip server for deployment.")
    print("It will initialize the database and create storage directories.")
    print()

    try:
        response = input("Continue with setup? (Y/n): ")
        if response.lower() == 'n':
            print("\nSetup cancelled.")
            sys.exit(0)
    except KeyboardInterrupt:
        print("\n\nSetup cancelled.")
        sys.exit(0)

    try:
        admin_password = initialize_database()
    except Exception:
        print("\n[ERROR] Setup failed during database initialization")
        sys.exit(1)

    try:
        initialize_storage()
    except Exception:
        print("\n[ERROR] Setup failed during storage initialization")
        sys.exit(1)

    print()
    print("=" * 70)
    print("[OK] Arsip Server Setup Complete!")
    print("=" * 70)

    if admin_password:
        print_admin_credentials(admin_password)
    else:
        print()
        print("  Database already contained users - no new admin account created.")
        print()

    print_next_steps()


if __name__ == "__main__":
    main()
