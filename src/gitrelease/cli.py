"""
Command line interface for the gitrelease tool.

This module defines the ``main`` function which is used as the entry
point when executing the ``gitrelease`` command. It loads the
configuration, reads the commits between the previous tag and the
requested one, renders them as a changelog and either prints it or
publishes it as a GitHub release. Exit codes are listed below.

Only the changelog is written to standard output; status messages go to
standard error so that ``gitrelease --print > NOTES.md`` stays clean.
"""

from __future__ import annotations

import contextlib
import logging
import signal
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

import click

from gitrelease import __version__
from gitrelease._version import version_string
from gitrelease.changelog.renderer import parse_groups
from gitrelease.config.loader import ConfigError, load_config
from gitrelease.github.release_client import (
    ReleaseClient,
    ReleaseError,
    ReleaseExistsError,
    ReleaseRequest,
)
from gitrelease.vcs.git_client import GitClient, GitError

# Create a module-level logger. Attach a null handler and disable
# propagation to avoid logging errors when the root logger's stream is
# closed (such as during unit tests). When logging is configured by
# the CLI, root handlers will be added and messages will propagate.
logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------
EXIT_SUCCESS = 0
EXIT_GENERIC_ERROR = 1
EXIT_INVALID_USAGE = 2
EXIT_NO_REPO = 3
EXIT_CONFIG_ERROR = 4
EXIT_VCS_FAILURE = 5
EXIT_RELEASE_FAILURE = 6
EXIT_RELEASE_EXISTS = 7
EXIT_INTERRUPTED = 130


# ---------------------------------------------------------------------------
# Status display utilities
# ---------------------------------------------------------------------------

def print_info(message: str, indent: int = 0):
    """Print an info message."""
    prefix = "  " * indent
    click.echo(f"{prefix}ℹ {message}", err=True)


def print_success(message: str, indent: int = 0):
    """Print a success message."""
    prefix = "  " * indent
    click.echo(f"{prefix}✓ {message}", err=True)


def print_warning(message: str, indent: int = 0):
    """Print a warning message."""
    prefix = "  " * indent
    click.echo(f"{prefix}⚠ {message}", err=True)


def print_error(message: str, indent: int = 0):
    """Print an error message."""
    prefix = "  " * indent
    click.echo(f"{prefix}✗ {message}", err=True)


# ---------------------------------------------------------------------------
# Signal handling
# ---------------------------------------------------------------------------

def _raise_interrupt(signum, frame):
    raise KeyboardInterrupt(f"received signal {signum}")


@contextlib.contextmanager
def interrupt_on_signals() -> Iterator[None]:
    """Turn SIGTERM and SIGHUP into ``KeyboardInterrupt`` while active.

    SIGINT already raises ``KeyboardInterrupt``. Handlers can only be
    installed from the main thread; elsewhere this is a no-op.
    """
    signums: List[int] = [signal.SIGTERM]
    if hasattr(signal, "SIGHUP"):
        signums.append(signal.SIGHUP)
    previous = {}
    try:
        for signum in signums:
            previous[signum] = signal.signal(signum, _raise_interrupt)
    except ValueError:
        logger.debug("Not in the main thread; signal handlers not installed")
    try:
        yield
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler)


# ---------------------------------------------------------------------------
# Core functionality
# ---------------------------------------------------------------------------

def detect_repo(start_dir: Path) -> Path:
    """Return the root of the Git repository containing ``start_dir``.

    Raises
    ------
    click.exceptions.Exit
        With code EXIT_NO_REPO if no repository is found.
    """
    repo_root = GitClient.find_repo_root(start_dir)
    if repo_root is None:
        print_error("No Git repository found in current directory or parent directories.")
        raise click.exceptions.Exit(EXIT_NO_REPO)
    logger.debug("Found Git repository at: %s", repo_root)
    return repo_root


def build_changelog(client: GitClient, tag: str) -> str:
    """Render the changelog for the commits between ``tag`` and its predecessor."""
    previous = client.previous_tag(tag)
    logger.debug("Previous tag of %s is %s", tag, previous)
    logs = client.commits(previous, tag)
    print_info(f"Found {len(logs)} commit{'s' if len(logs) != 1 else ''} since {previous}")
    return parse_groups(logs)


def publish(client: GitClient, config: Dict[str, Any], tag: str, changelog: str,
            draft: bool = False, prerelease: bool = False) -> Dict[str, Any]:
    """Publish ``changelog`` as the release of ``tag``."""
    user, repo = client.repo_info()
    release_client = ReleaseClient(
        config["token"],
        api_url=config["api_url"],
        request_timeout=config["request_timeout"],
    )
    request = ReleaseRequest(tag_name=tag, body=changelog, draft=draft, prerelease=prerelease)
    print_info(f"Publishing release {tag} to {user}/{repo}")
    return release_client.create_release(user, repo, request)


@click.command()
@click.argument("command", required=False, type=click.Choice(["version"]))
@click.option("--tag", "-t", default="@", show_default=True,
              help="Tag to produce the logs for. Leave as @ for the current tag.")
@click.option("--print", "-p", "print_mode", is_flag=True, help="Only print the changelog, do not release!")
@click.option("--remote", "-r", default="origin", show_default=True, help="Use a different remote.")
@click.option("--draft", is_flag=True, help="Create the release as a draft.")
@click.option("--prerelease", is_flag=True, help="Mark the release as a pre-release.")
@click.option("--verbose", is_flag=True, help="Enable verbose (debug) output.")
@click.version_option(version=__version__, prog_name="gitrelease")
def main(command: Optional[str], tag: str, print_mode: bool, remote: str,
         draft: bool, prerelease: bool, verbose: bool) -> None:
    """Release commit information of a tag to GitHub.

    Run ``gitrelease version`` to print the binary version information.
    """
    # Configure logging. Use force=True to ensure handlers are reconfigured
    # on subsequent invocations (important for tests).
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
        force=True,
    )

    if command == "version":
        click.echo(version_string())
        raise click.exceptions.Exit(EXIT_SUCCESS)

    ctx = click.get_current_context(silent=True)

    try:
        with interrupt_on_signals():
            try:
                config = load_config()
            except ConfigError as exc:
                print_error(f"Configuration error: {exc}")
                raise click.exceptions.Exit(EXIT_CONFIG_ERROR)

            repo_root = detect_repo(Path.cwd())
            client = GitClient(repo_root, remote=remote)

            try:
                changelog = build_changelog(client, tag)
                if tag == "@":
                    tag = client.latest_tag()
            except GitError as exc:
                print_error(f"Git error: {exc}")
                raise click.exceptions.Exit(EXIT_VCS_FAILURE)

            if print_mode:
                click.echo(changelog)
                raise click.exceptions.Exit(EXIT_SUCCESS)

            if not changelog:
                print_warning(f"No commits to describe for {tag}; publishing an empty release body.")

            try:
                release = publish(client, config, tag, changelog, draft=draft, prerelease=prerelease)
            except GitError as exc:
                print_error(f"Can't get repo name: {exc}")
                raise click.exceptions.Exit(EXIT_VCS_FAILURE)
            except ReleaseExistsError as exc:
                print_error(f"Release error: {exc}")
                raise click.exceptions.Exit(EXIT_RELEASE_EXISTS)
            except ReleaseError as exc:
                print_error(f"Release error: {exc}")
                raise click.exceptions.Exit(EXIT_RELEASE_FAILURE)

            print_success(f"Released {tag}")
            if release.get("html_url"):
                print_info(release["html_url"], indent=1)
            raise click.exceptions.Exit(EXIT_SUCCESS)

    except click.exceptions.Exit:
        # Click uses its own Exit exception; re-raise to let Click handle it
        raise
    except KeyboardInterrupt:
        print_error("Interrupted")
        raise click.exceptions.Exit(EXIT_INTERRUPTED)
    except Exception as exc:
        # Catch any other unhandled errors
        logging.exception("Unhandled error: %s", exc)
        print_error(f"Unexpected error: {exc}")
        ctx.exit(EXIT_GENERIC_ERROR)
