"""Database initialization script."""

import sys

from dotenv import load_dotenv


def main(argv=None):
    """Create, reset or drop the post and comment tables."""
    load_dotenv()

    from .. import config
    from .base import create_engine_for_url
    from .database import drop_db, init_db, reset_db

    argv = sys.argv[1:] if argv is None else argv
    engine = create_engine_for_url(config.DATABASE_URL)

    print("Threadstore Database Initialization")
    print(f"Database: {config.mask_database_url(config.DATABASE_URL)}")
    print("-" * 40)

    try:
        if argv:
            command = argv[0].lower()

            if command == "reset":
                confirm = input("⚠️  This will DELETE all posts and comments. Are you sure? (yes/no): ")
                if confirm.lower() == "yes":
                    reset_db(engine)
                    print("Database reset complete!")
                else:
                    print("Reset cancelled.")

            elif command == "drop":
                confirm = input("⚠️  This will DROP all tables. Are you sure? (yes/no): ")
                if confirm.lower() == "yes":
                    drop_db(engine)
                    print("All tables dropped!")
                else:
                    print("Drop cancelled.")

            else:
                print(f"Unknown command: {command}")
                print("Usage:")
                print("  threadstore-db        - Create tables (safe, won't drop existing)")
                print("  threadstore-db reset  - Drop and recreate all tables")
                print("  threadstore-db drop   - Drop all tables")
                return 1
        else:
            # Default action: create tables (safe)
            init_db(engine)
            print("Database initialized successfully!")
            print("\nTo reset the database, run: threadstore-db reset")
    finally:
        engine.dispose()

    return 0


if __name__ == "__main__":
    sys.exit(main())
