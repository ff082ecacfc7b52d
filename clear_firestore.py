# python .\clear_firestore.py
# Wipes the root-level collections used by the app (bookings, users, ...) so a
# test environment starts from an empty database. Sub-collections are left alone.

from __future__ import annotations

import sys
import logging
import argparse
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, TextIO, Tuple

from firestore_db import MISSING_CREDENTIALS_HELP, init_db, resolve_credentials_path

logger = logging.getLogger(__name__)

# Config
COLLECTIONS_TO_CLEAR = (
    "bookings",
    "departments",
    "employers",
    "hotels",
    "roles",
    "services",
    "shift_presets",
    "shifts",
    "users",
)

# Firestore rejects commits with more writes than this
MAX_BATCH_WRITES = 500

DELETED, EMPTY, FAILED = "deleted", "empty", "failed"

EXIT_OK = 0
EXIT_MISSING_CREDENTIALS = 1
EXIT_PARTIAL_FAILURE = 2


@dataclass(frozen=True)
class CollectionOutcome:
    name: str
    status: str
    deleted: int = 0
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.status == FAILED

    def report_line(self) -> str:
        if self.status == EMPTY:
            return f"  {self.name}: (empty)"
        if self.status == FAILED:
            return f"  {self.name}: error - {self.error}"
        return f"  {self.name}: deleted {self.deleted} doc(s)"


# ---------- Eraser ----------
def delete_collection(db, name: str) -> CollectionOutcome:
    """
    Deletes every document present in `name` at fetch time with a single batch.
    Documents written after the fetch survive. Errors propagate to the caller.
    """
    docs = list(db.collection(name).stream())
    if not docs:
        return CollectionOutcome(name, EMPTY)

    if len(docs) > MAX_BATCH_WRITES:
        logger.warning("%s: %d docs exceed the %d-write batch limit, commit will likely fail",
                       name, len(docs), MAX_BATCH_WRITES)

    batch = db.batch()
    for snap in docs:
        batch.delete(snap.reference)
    logger.debug("%s: committing batch with %d delete(s)", name, len(docs))
    batch.commit()
    return CollectionOutcome(name, DELETED, deleted=len(docs))


# ---------- Driver ----------
def clear_collections(
    db,
    names: Iterable[str],
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> List[CollectionOutcome]:
    if out is None:
        out = sys.stdout
    if err is None:
        err = sys.stderr
    outcomes: List[CollectionOutcome] = []
    for name in names:
        try:
            outcome = delete_collection(db, name)
        except Exception as e:
            logger.debug("%s: delete failed", name, exc_info=True)
            outcome = CollectionOutcome(name, FAILED, error=str(e) or type(e).__name__)
        print(outcome.report_line(), file=err if outcome.failed else out, flush=True)
        outcomes.append(outcome)
    return outcomes

def summarize(outcomes: Sequence[CollectionOutcome]) -> Tuple[int, List[str]]:
    total = sum(o.deleted for o in outcomes)
    failed = [o.name for o in outcomes if o.failed]
    return total, failed


# ---------- CLI ----------
def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        description="Deletes every document of the app's root Firestore collections: "
                    + ", ".join(COLLECTIONS_TO_CLEAR)
    )
    ap.add_argument("--credentials", help="Service account JSON (default: serviceAccountKey.json or GOOGLE_APPLICATION_CREDENTIALS)")
    ap.add_argument("--strict", action="store_true", help="Exit with code 2 if any collection failed")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return ap

def main(argv: Optional[Sequence[str]] = None, db=None,
         collections: Sequence[str] = COLLECTIONS_TO_CLEAR) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if db is None:
        cred_path = resolve_credentials_path(args.credentials)
        try:
            db = init_db(cred_path)
        except FileNotFoundError:
            print(f"Missing {cred_path}", file=sys.stderr)
            print(MISSING_CREDENTIALS_HELP, file=sys.stderr)
            return EXIT_MISSING_CREDENTIALS
        except ValueError as e:
            # Certificate() rejects unreadable or non service-account JSON
            print(f"Invalid credential file {cred_path}: {e}", file=sys.stderr)
            print(MISSING_CREDENTIALS_HELP, file=sys.stderr)
            return EXIT_MISSING_CREDENTIALS

    print("Clearing root-level Firestore collections...\n", flush=True)
    outcomes = clear_collections(db, collections)
    total, failed = summarize(outcomes)
    logger.info("deleted %d doc(s) across %d collection(s)", total, len(outcomes))

    print("\nDone. Firestore root data cleared.", flush=True)
    if failed:
        print(f"Failed collections: {', '.join(failed)}", file=sys.stderr)
        if args.strict:
            return EXIT_PARTIAL_FAILURE
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
