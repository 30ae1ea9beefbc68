"""Create or drop the Tally Stage tables without running migrations."""
from __future__ import annotations

import argparse
import sys

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError

from tally_stage.core.settings import settings
from tally_stage.db.session import Base


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create or reset the Tally Stage tables")
    parser.add_argument(
        "--drop-tables",
        action="store_true",
        help="Drop every table before creating them again.",
    )
    parser.add_argument(
        "--url",
        default=None,
        help="Override database URL (defaults to effective settings URL)",
    )
    args = parser.parse_args(argv)

    engine = create_engine(args.url or settings.database_url_sync)
    try:
        if args.drop_tables:
            Base.metadata.drop_all(bind=engine)
            print("[init_db] dropped all tables")
        Base.metadata.create_all(bind=engine)
        print("[init_db] tables ready")
    except SQLAlchemyError as exc:
        print(f"[init_db] ERROR: {exc}", file=sys.stderr)
        return 1
    finally:
        engine.dispose()
    return 0


if __name__ == "__main__":
    sys.exit(main())
