"""
wordpress_post.py - Post a draft through the registry, the way a crew would.

Credentials come from a crew state bag seeded here from WORDPRESS_URL,
WORDPRESS_USERNAME and WORDPRESS_PASSWORD.

Usage:
    python examples/wordpress_post.py --title "Hello" --content "<p>World</p>"
"""

import argparse
import asyncio
import json
import logging
import os

from crew_tools import SharedState, build_registry

# Mutable crew state; adapters read it on every call.
crew_state = {"env": {}}


async def run(title: str, content: str) -> dict:
    crew_state["env"].update({
        key: os.environ[key]
        for key in ("WORDPRESS_URL", "WORDPRESS_USERNAME", "WORDPRESS_PASSWORD")
        if key in os.environ
    })
    registry = build_registry(state=SharedState(crew_state))
    return await registry.invoke("PostToWordPress", {"title": title, "content": content})


def main() -> None:
    parser = argparse.ArgumentParser(description="Create a WordPress draft.")
    parser.add_argument("--title", required=True)
    parser.add_argument("--content", required=True, help="HTML body, sent as-is")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    print(json.dumps(asyncio.run(run(args.title, args.content)), indent=2))


if __name__ == "__main__":
    main()
