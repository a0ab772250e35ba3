"""
Setup Database Indexes

Run this script to create all MongoDB indexes for optimal query performance.

Usage:
    uv run python scripts/setup_indexes.py
"""
import logging
import sys

from legisync.config.settings import settings
from legisync.database import MongoStore, create_all_indexes, get_database


def main():
    logging.basicConfig(level=settings.LOG_LEVEL, format=settings.LOG_FORMAT)
    
    print("🔧 legisync - Database Index Setup")
    print("=" * 60)
    
    try:
        created = create_all_indexes(MongoStore(get_database()))
    except Exception as e:
        print(f"\n❌ Error: {e}")
        logging.exception("Index setup failed")
        sys.exit(1)
    
    for collection, names in created.items():
        print(f"   • {collection}: {', '.join(names)}")
    print("\n✅ Index setup complete!")


if __name__ == "__main__":
    main()
