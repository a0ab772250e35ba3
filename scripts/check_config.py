"""
Check that the .env configuration works before a first sync.

Pings MongoDB and makes sure the GovTrack mirror answers.

Usage:
    uv run python scripts/check_config.py
"""
import sys

import httpx
from pymongo.errors import PyMongoError

from legisync.config.constants import COLLECTION_LEGISLATORS, CURRENT_SESSION
from legisync.config.settings import settings
from legisync.database import close_client, get_database, test_connection


def check_mongodb() -> bool:
    print("🔍 Checking MongoDB connection...")
    print(f"   URI: {settings.MONGODB_URI}")
    print(f"   Database: {settings.MONGODB_DATABASE}")
    
    try:
        test_connection()
        count = get_database()[COLLECTION_LEGISLATORS].count_documents({})
    except PyMongoError as e:
        print(f"   ❌ MongoDB connection failed: {e}")
        return False
    finally:
        close_client()
    
    print("   ✅ MongoDB connection successful!")
    if count:
        print(f"   👥 {count} legislators loaded")
    else:
        print("   ⚠️  No legislators yet: sponsors and voters will be reported as missing")
    return True


def check_mirror() -> bool:
    url = f"{settings.SOURCE_MIRROR_URL.rstrip('/')}/{CURRENT_SESSION}/bills/"
    print(f"\n🔍 Checking GovTrack mirror...")
    print(f"   URL: {url}")
    
    try:
        response = httpx.get(url, timeout=10.0, follow_redirects=True)
    except httpx.TimeoutException:
        print("   ❌ Request timed out - check your internet connection")
        return False
    except httpx.HTTPError as e:
        print(f"   ❌ Mirror check failed: {e}")
        return False
    
    if response.status_code == 200:
        print("   ✅ Mirror is reachable!")
        return True
    print(f"   ⚠️  Unexpected response: {response.status_code}")
    return False


def main() -> int:
    print("=" * 60)
    print("legisync - Configuration Check")
    print("=" * 60)
    
    mongo_ok = check_mongodb()
    mirror_ok = check_mirror()
    
    print("\n" + "=" * 60)
    print(f"MongoDB:  {'✅ PASS' if mongo_ok else '❌ FAIL'}")
    print(f"GovTrack: {'✅ PASS' if mirror_ok else '⚠️  WARNING (use --no-fetch with local files)'}")
    
    if mongo_ok:
        print("\n🎉 Ready to run: uv run python scripts/sync_session.py")
        return 0
    
    print("\n❌ Please check your .env file (see .env.example).")
    return 1


if __name__ == "__main__":
    sys.exit(main())
