"""
Sync a session's bills and roll call votes from GovTrack.

Usage:
    uv run python scripts/sync_session.py                    # Current session, bills then rolls
    uv run python scripts/sync_session.py --session 111      # A past session
    uv run python scripts/sync_session.py --only rolls       # Rolls only
    uv run python scripts/sync_session.py --no-fetch         # Use files already in DATA_DIR
    uv run python scripts/sync_session.py --force-unlock     # After a killed run left its lock behind
"""
import argparse
import logging
import sys

from legisync.config.constants import CURRENT_SESSION
from legisync.config.settings import settings
from legisync.database import MongoStore, get_database
from legisync.ingestion import (
    INGESTERS,
    HttpMirrorFetcher,
    LocalDirectoryFetcher,
    MongoReportSink,
    sync_session,
)


def main():
    parser = argparse.ArgumentParser(
        description="Sync bills and roll call votes from GovTrack"
    )
    parser.add_argument(
        "--session",
        type=int,
        default=CURRENT_SESSION,
        help=f"Session of Congress (default: {CURRENT_SESSION})"
    )
    parser.add_argument(
        "--only",
        choices=list(INGESTERS),
        help="Sync only bills or only rolls"
    )
    parser.add_argument(
        "--no-fetch",
        action="store_true",
        help="Don't mirror from GovTrack, use files already in DATA_DIR"
    )
    parser.add_argument(
        "--force-unlock",
        action="store_true",
        help="Clear the run locks first (after a run was killed mid-sync)"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging"
    )
    
    args = parser.parse_args()
    
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.LOG_LEVEL,
        format=settings.LOG_FORMAT
    )
    
    store = MongoStore(get_database())
    fetcher = LocalDirectoryFetcher() if args.no_fetch else HttpMirrorFetcher()
    kinds = [args.only] if args.only else None
    
    print(f"🗳️  Syncing session {args.session} from GovTrack...")
    print("=" * 60)
    
    try:
        reports = sync_session(
            store, fetcher, MongoReportSink(store), args.session, kinds,
            force_unlock=args.force_unlock
        )
    except KeyboardInterrupt:
        print("\n\n⚠️  Sync interrupted")
        sys.exit(1)
    
    for report in reports:
        print(f"📊 {report.source}:")
        print(f"   • Saved:       {report.count} ({report.inserted} new, {report.updated} updated)")
        print(f"   • Failed:      {len(report.failed)}")
        print(f"   • Missing IDs: {len(report.missing_ids)}")
        if report.aborted:
            print(f"   ❌ Aborted: {report.error['message']}")
    
    sys.exit(1 if any(report.aborted or report.failed for report in reports) else 0)


if __name__ == "__main__":
    main()
