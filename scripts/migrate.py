"""Script to run database migrations."""

import sys

from alembic import command
from alembic.config import Config


def _config() -> Config:
    return Config("alembic.ini")


def run_migrations(target: str = "head") -> None:
    """Upgrade the database to the given revision."""
    try:
        print(f"Running database migrations up to {target}...")
        command.upgrade(_config(), target)
        print("✓ Migrations completed successfully!")
    except Exception as e:
        print(f"✗ Migration failed: {e}", file=sys.stderr)
        sys.exit(1)


def rollback_migration(target: str = "-1") -> None:
    """Downgrade the database to the given revision."""
    try:
        print(f"Rolling back database to {target}...")
        command.downgrade(_config(), target)
        print("✓ Rollback completed successfully!")
    except Exception as e:
        print(f"✗ Rollback failed: {e}", file=sys.stderr)
        sys.exit(1)


def create_migration(message: str) -> None:
    """Create a new migration."""
    try:
        print(f"Creating migration: {message}")
        command.revision(_config(), message=message, autogenerate=True)
        print("✓ Migration created successfully!")
    except Exception as e:
        print(f"✗ Migration creation failed: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    args = sys.argv[1:]
    if not args:
        run_migrations()
    elif args[0] == "create" and len(args) > 1:
        create_migration(" ".join(args[1:]))
    elif args[0] == "downgrade":
        rollback_migration(args[1] if len(args) > 1 else "-1")
    elif args[0] == "upgrade":
        run_migrations(args[1] if len(args) > 1 else "head")
    else:
        print("Usage: python scripts/migrate.py [upgrade [rev] | downgrade [rev] | create <message>]")
