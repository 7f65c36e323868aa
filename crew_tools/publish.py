"""Publish every package under a packages directory.

For each subdirectory that holds a ``pyproject.toml`` (in name order):

1. abort the whole run if git reports uncommitted changes in it
2. bump the patch component of ``[project].version`` (no git tag)
3. ``uv build`` then ``uv publish``

A publish token must be available before any package is touched. Every
external command is killed after ``--timeout`` seconds, and the first failure
stops the run.

Usage:
    crew-tools-publish --packages-dir packages
    crew-tools-publish --packages-dir packages --timeout 300 --publish-url https://test.pypi.org/legacy/
"""

import argparse
import asyncio
import logging
import os
import re
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Awaitable, Callable, Dict, List, Optional, Sequence, Tuple

from .config import get_settings

logger = logging.getLogger(__name__)

MANIFEST = "pyproject.toml"
TOKEN_ENV = "UV_PUBLISH_TOKEN"

_SEMVER = re.compile(r"^(\d+)\.(\d+)\.(\d+)$")
_VERSION_LINE = re.compile(r"^(\s*version\s*=\s*)([\"'])([^\"']*)([\"'])")
_TABLE_HEADER = re.compile(r"^\[\[?\s*([^\]]*?)\s*\]\]?\s*(?:#.*)?$")


class PublishError(Exception):
    """A package could not be published; the run stops."""


@dataclass
class Package:
    name: str
    path: Path

    @property
    def manifest(self) -> Path:
        return self.path / MANIFEST


Runner = Callable[..., Awaitable[str]]


def discover_packages(packages_dir: Path) -> List[Package]:
    """Subdirectories of ``packages_dir`` that contain a manifest, sorted by name."""
    if not packages_dir.is_dir():
        raise PublishError(f"Packages directory not found: {packages_dir}")
    return [
        Package(name=entry.name, path=entry)
        for entry in sorted(packages_dir.iterdir())
        if entry.is_dir() and (entry / MANIFEST).is_file()
    ]


def bump_patch(version: str) -> str:
    """``1.2.3`` -> ``1.2.4``. Only plain MAJOR.MINOR.PATCH versions are accepted."""
    match = _SEMVER.match(version)
    if not match:
        raise PublishError(f"Cannot bump non-semver version '{version}'")
    major, minor, patch = match.groups()
    return f"{major}.{minor}.{int(patch) + 1}"


def bump_manifest_version(manifest: Path) -> Tuple[str, str]:
    """
    Rewrite the ``[project]`` version line of a pyproject.toml in place.

    Returns:
        Tuple of (old_version, new_version)
    """
    text = manifest.read_text(encoding="utf-8")
    project = tomllib.loads(text).get("project", {})
    old_version = project.get("version")
    if not old_version:
        raise PublishError(f"{manifest} has no static [project] version")
    new_version = bump_patch(old_version)

    lines = text.splitlines(keepends=True)
    table = None
    replaced = False
    for i, line in enumerate(lines):
        header = _TABLE_HEADER.match(line.strip())
        if header:
            table = header.group(1)
            continue
        if table == "project":
            match = _VERSION_LINE.match(line)
            if match:
                lines[i] = _VERSION_LINE.sub(
                    lambda m: f"{m.group(1)}{m.group(2)}{new_version}{m.group(4)}", line, count=1
                )
                replaced = True
                break

    if not replaced:
        raise PublishError(f"Could not find the [project] version line in {manifest}")

    manifest.write_text("".join(lines), encoding="utf-8")
    return old_version, new_version


async def run_command(
    cmd: Sequence[str],
    cwd: Path,
    timeout: float,
    env: Optional[Dict[str, str]] = None,
) -> str:
    """
    Run a command and return its combined output.

    Raises:
        PublishError: On a non-zero exit, a missing executable or a timeout
    """
    command = " ".join(cmd)
    logger.debug(f"Running '{command}' in {cwd}")

    try:
        process = await asyncio.create_subprocess_exec(
            *cmd,
            cwd=str(cwd),
            env=env,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.STDOUT,
        )
    except FileNotFoundError as e:
        raise PublishError(f"Command not found: {cmd[0]}") from e

    try:
        stdout, _ = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        raise PublishError(f"'{command}' timed out after {timeout}s")

    output = stdout.decode("utf-8", errors="replace")
    if process.returncode != 0:
        raise PublishError(f"'{command}' exited with status {process.returncode}: {output.strip()}")
    return output


class PackagePublisher:
    """Bump and publish packages one by one, stopping at the first failure."""

    def __init__(
        self,
        packages_dir: Path,
        timeout: float = 120,
        token: Optional[str] = None,
        publish_url: Optional[str] = None,
        runner: Runner = run_command,
    ):
        self.packages_dir = Path(packages_dir)
        self.timeout = timeout
        self.token = token or os.environ.get(TOKEN_ENV)
        self.publish_url = publish_url
        self._run = runner

    def check_auth(self) -> None:
        """Fail before touching any package when no publish token is available."""
        if not self.token:
            raise PublishError(f"No publish token found. Set {TOKEN_ENV} or pass --token.")

    async def ensure_clean(self, package: Package) -> None:
        status = await self._run(["git", "status", "--porcelain", "--", "."], package.path, self.timeout)
        if status.strip():
            raise PublishError(f"{package.name} has uncommitted changes:\n{status.rstrip()}")

    async def publish_package(self, package: Package) -> str:
        """Publish one package and return its new version."""
        await self.ensure_clean(package)

        old_version, new_version = bump_manifest_version(package.manifest)
        logger.info(f"{package.name}: {old_version} -> {new_version}")

        await self._run(["uv", "build"], package.path, self.timeout)

        cmd = ["uv", "publish"]
        if self.publish_url:
            cmd += ["--publish-url", self.publish_url]
        env = {**os.environ, TOKEN_ENV: self.token}
        await self._run(cmd, package.path, self.timeout, env=env)

        return new_version

    async def publish_all(self) -> List[Package]:
        self.check_auth()

        packages = discover_packages(self.packages_dir)
        if not packages:
            logger.warning(f"No packages with a {MANIFEST} under {self.packages_dir}")
            return []
        logger.info(f"Publishing packages: {', '.join(p.name for p in packages)}")

        for package in packages:
            logger.info(f"Publishing {package.name}...")
            await self.publish_package(package)

        return packages


def main(argv: Optional[Sequence[str]] = None) -> int:
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Bump and publish every package in a directory.")
    parser.add_argument(
        "--packages-dir", default=settings.packages_dir, metavar="PATH",
        help="Directory whose subdirectories are packages (default: %(default)s)."
    )
    parser.add_argument(
        "--timeout", type=float, default=settings.publish_timeout_seconds, metavar="SECONDS",
        help="Kill any external command after this many seconds (default: %(default)s)."
    )
    parser.add_argument("--token", default=None, help=f"Publish token (default: ${TOKEN_ENV}).")
    parser.add_argument("--publish-url", default=None, help="Upload endpoint of the package index.")
    parser.add_argument("--debug", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    publisher = PackagePublisher(
        Path(args.packages_dir),
        timeout=args.timeout,
        token=args.token,
        publish_url=args.publish_url,
    )

    try:
        asyncio.run(publisher.publish_all())
    except PublishError as e:
        logger.error(f"Failed to publish all packages: {e}")
        return 1

    logger.info("All packages published successfully!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
