"""Re-embed a user's contacts into rag_docs.

Existing contact_note documents are refreshed in place, new contacts are
inserted.

Usage:
    python scripts/backfill_rag_contacts.py <user_id>
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

# Ensure app is importable
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))


async def backfill(user_id: str) -> None:
    from app.core.rag_indexing import vectorize_contacts

    print(f"Vectorizing contacts for user {user_id}...")
    result = await vectorize_contacts(user_id)
    print(f"  Processed {result['processed']}/{result['total']} contacts")


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("user_id", help="Owner of the contacts")
    args = parser.parse_args()

    asyncio.run(backfill(args.user_id))


if __name__ == "__main__":
    main()
