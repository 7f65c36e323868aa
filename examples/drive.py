"""
drive.py - List recent Drive files with the direct OAuth2 adapter.

Reads DRIVE_CLIENT_ID, DRIVE_CLIENT_SECRET, DRIVE_REDIRECT_URI and
DRIVE_REFRESH_TOKEN from the environment (or .env).

Usage:
    python examples/drive.py
    python examples/drive.py --query "mimeType = 'application/pdf'"
"""

import argparse
import asyncio
import json
import logging
from typing import Optional

from crew_tools import DirectDriveSearch, DirectListDriveFiles, get_settings


async def run(query: Optional[str], page_size: str) -> dict:
    state = get_settings().to_state()
    if query:
        return await DirectDriveSearch(state=state).invoke({"query": query})
    return await DirectListDriveFiles(state=state).invoke({"pageSize": page_size})


def main() -> None:
    parser = argparse.ArgumentParser(description="Print Drive file fields as JSON.")
    parser.add_argument("--query", default=None, help="Drive search expression")
    parser.add_argument("--page-size", default="10")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    result = asyncio.run(run(args.query, args.page_size))
    for f in result["files"]:
        print(f"{f.get('name')} ({f.get('mimeType')}) modified {f.get('modifiedTime')}")
    print(json.dumps({"count": len(result["files"]), "nextPageToken": result["nextPageToken"]}))


if __name__ == "__main__":
    main()
