# riseup/cli.py
"""
Command-line access to the saved/applied/completed state:
  riseup init-db
  riseup show --role user
  riseup complete 1 --role user
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

from riseup.config import SETTINGS
from riseup.core.catalog import TRAINING_CATALOG
from riseup.core.keys import ROLES
from riseup.core.saved_state import SavedStateManager

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="riseup", description="RiseUp saved-state tools")
    parser.add_argument("--log-level", default=SETTINGS.log_level, help="Logging level (default from RISEUP_LOG_LEVEL)")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init-db", help="Create the storage tables")
    sub.add_parser("catalog", help="List the training catalog")

    role_parent = argparse.ArgumentParser(add_help=False)
    role_parent.add_argument("--role", choices=ROLES, default="user", help="Role-context to act in")

    sub.add_parser("show", parents=[role_parent], help="Print the persisted state of a role-context")
    sub.add_parser("clear", parents=[role_parent], help="Delete every persisted collection of a role-context")

    for name, help_text in (
        ("complete", "Mark a training video as completed"),
        ("apply", "Record an application to a job"),
        ("withdraw", "Withdraw a job application"),
    ):
        p = sub.add_parser(name, parents=[role_parent], help=help_text)
        p.add_argument("item_id", help="Video or job id")
    return parser


def _manager() -> SavedStateManager:
    from riseup.db.store import KeyValueStore

    return SavedStateManager(KeyValueStore())


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, str(args.log_level).upper(), logging.INFO))

    if args.command == "init-db":
        from riseup.db.models import Base
        from riseup.db.session import ENGINE, current_engine_url

        logger.info("Initializing database schema at %s ...", current_engine_url())
        Base.metadata.create_all(bind=ENGINE)
        logger.info("Database schema initialized successfully.")
        return 0

    if args.command == "catalog":
        for video in TRAINING_CATALOG:
            print(f"{video.id}\t{video.title}\t{video.category}\t{video.duration}")
        return 0

    manager = _manager()

    if args.command == "clear":
        if not manager.clear(args.role):
            logger.error("could not clear role=%s; run `riseup init-db` if the storage tables are missing", args.role)
            return 1
        print(f"Cleared persisted state for role={args.role}")
        return 0

    if args.command == "complete":
        manager.complete_video(args.role, args.item_id)
    elif args.command == "apply":
        manager.apply_to_job(args.role, args.item_id)
    elif args.command == "withdraw":
        manager.withdraw_job_application(args.role, args.item_id)

    state = manager.context(args.role)
    if state.dropped_writes:
        logger.error("%s was not persisted; run `riseup init-db` if the storage tables are missing", args.command)
        return 1
    snapshot = {"role": state.role, **state.snapshot(), "trainingSkills": state.training_skills()}
    print(json.dumps(snapshot, indent=2))
    return 0


if __name__ == "__main__":
    # When executed as `python -m riseup.cli ...`
    sys.exit(main())
