"""Git protocol backend."""

from plugrepo.protocols.git.protocol import GitProtocol
from plugrepo.protocols.git.revision import read_revision
from plugrepo.protocols.git.url import (
    ParsedIdentifier,
    browse_url,
    build_url,
    get_git_url,
    local_directory,
    parse_identifier,
)

__all__ = [
    "GitProtocol",
    "ParsedIdentifier",
    "browse_url",
    "build_url",
    "get_git_url",
    "local_directory",
    "parse_identifier",
    "read_revision",
]
