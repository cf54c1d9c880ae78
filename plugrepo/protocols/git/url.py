"""Repository identifier parsing and git URL building.

Accepted identifier forms, tried in this order:

1. ``git@host:user/name``               (SSH shorthand)
2. ``scheme://[login@]host/user/name``  (explicit scheme)
3. ``[host/]user/name``                 (bare shorthand, host defaults to the hub site)

Only the ``https`` and ``ssh`` protocols produce a URL.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from plugrepo.models.config import VALID_PROTOCOLS

SSH_PATTERN = re.compile(r"^(?P<login>[^@/:]+)@(?P<host>[^:/]+):(?P<user>[^/]+)/(?P<name>.+)")
SCHEME_PATTERN = re.compile(
    r"^(?P<protocol>[^:/]+)://(?:(?P<login>[^@/]+)@)?(?P<host>[^/]+)/(?P<user>[^/]+)/(?P<name>.+)"
)
BARE_PATTERN = re.compile(r"^(?:(?P<host>[^/]+)/)?(?P<user>[^/]+)/(?P<name>.+)")

RAW_URL_PATTERN = re.compile(r"//(raw|gist)\.githubusercontent\.com/|/archive/[^/]+\.zip$")

# git.sr.ht does not serve repositories under a ".git" URL
NO_SUFFIX_HOSTS = frozenset({"git.sr.ht"})

BROWSE_HOSTS = ("github.com", "gitlab.com", "codeberg.org", "bitbucket.org", "git.sr.ht")

DEFAULT_LOGIN = "git"


@dataclass(frozen=True)
class ParsedIdentifier:
    """Components of a repository identifier."""

    protocol: str
    host: str
    user: str
    name: str
    login: str = DEFAULT_LOGIN

    @property
    def is_ssh(self) -> bool:
        return self.protocol == "ssh"


def is_raw_url(repo: str) -> bool:
    """Raw file or archive download URLs are used as-is."""
    return RAW_URL_PATTERN.search(repo) is not None


def is_local_path(repo: str) -> bool:
    """Absolute paths and home-relative paths may denote local repositories."""
    return os.path.isabs(repo) or repo.startswith("~")


def parse_identifier(
    repo: str,
    default_hub_site: str,
    default_protocol: str,
    on_invalid_protocol: Callable[[str], None] | None = None,
) -> ParsedIdentifier | None:
    """Parse a repository identifier.

    The first grammar that matches decides the result; a later grammar is
    never tried as a fallback. Returns ``None`` when nothing matches, when
    ``user`` or ``name`` is empty or contains a slash, or when the protocol
    is neither ``https`` nor ``ssh`` (``on_invalid_protocol`` is called with
    the offending protocol in that case).
    """
    if not repo or "/" not in repo:
        return None

    parsed: ParsedIdentifier | None = None
    if match := SSH_PATTERN.match(repo):
        parsed = ParsedIdentifier(
            protocol="ssh",
            host=match["host"],
            user=match["user"],
            name=match["name"],
            login=match["login"],
        )
    elif match := SCHEME_PATTERN.match(repo):
        parsed = ParsedIdentifier(
            protocol=match["protocol"],
            host=match["host"],
            user=match["user"],
            name=match["name"],
            login=match["login"] or DEFAULT_LOGIN,
        )
    elif match := BARE_PATTERN.match(repo):
        parsed = ParsedIdentifier(
            protocol=default_protocol,
            host=match["host"] or default_hub_site,
            user=match["user"],
            name=match["name"],
        )

    if parsed is None:
        return None

    if not parsed.user or not parsed.name or "/" in parsed.name:
        return None

    if parsed.protocol not in VALID_PROTOCOLS:
        if on_invalid_protocol is not None:
            on_invalid_protocol(parsed.protocol)
        return None

    return parsed


def build_url(parsed: ParsedIdentifier) -> str:
    """Build the clone URL for a parsed identifier.

    ``.git`` is appended unless the host rejects it or it is already there,
    so building from a URL this function produced returns it unchanged.
    """
    if parsed.is_ssh:
        url = f"{parsed.login}@{parsed.host}:{parsed.user}/{parsed.name}"
    else:
        url = f"{parsed.protocol}://{parsed.host}/{parsed.user}/{parsed.name}"

    if parsed.host in NO_SUFFIX_HOSTS or url.endswith(".git"):
        return url
    return url + ".git"


def get_git_url(
    repo: str,
    default_hub_site: str,
    default_protocol: str,
    on_invalid_protocol: Callable[[str], None] | None = None,
) -> str:
    """Clone URL for ``repo``, or an empty string when none can be built."""
    parsed = parse_identifier(repo, default_hub_site, default_protocol, on_invalid_protocol)
    if parsed is None:
        return ""
    return build_url(parsed)


def local_directory(url: str) -> str:
    """Relative on-disk directory for a clone URL.

    ``https://github.com/user/name.git`` and ``git@github.com:user/name.git``
    both map to ``github.com/user/name``.
    """
    directory = re.sub(r"\.git$", "", url)
    # Mirror/acceleration URLs may embed "https://" again after the prefix
    directory = re.sub(r"https:/+", "", directory)
    directory = re.sub(r"^[^@/:]+@", "", directory)
    return directory.replace(":", "/", 1)


def repository_path(base_path: str, url: str) -> str:
    """Canonical working tree path for ``url`` under ``base_path``."""
    return str(Path(base_path) / "repos" / local_directory(url))


def browse_url(url: str) -> str:
    """Web URL for a clone URL, for display only."""
    for host in BROWSE_HOSTS:
        prefix = f"{DEFAULT_LOGIN}@{host}:"
        if url.startswith(prefix):
            url = f"https://{host}/" + url[len(prefix):]
            break
    return re.sub(r"\.git$", "", url)
