"""Display names for previous Linux installations.

Reads ``/etc/os-release`` below a mounted root, as described in
https://www.freedesktop.org/software/systemd/man/os-release.html

Only a narrow subset of the format is understood:

- blank lines and lines starting with ``#`` are ignored
- every other line is split on the first ``=`` into key and value
- one leading and one trailing double quote are stripped from the value

Shell-style escaping and single quotes are not interpreted.
"""

import logging
import re
from pathlib import Path

from sshimport.core.errors import SshReadError
from sshimport.core.paths import os_release_file

logger = logging.getLogger(__name__)

# Label used when no better name can be found
DEFAULT_NAME = "Linux"

_LEADING_QUOTE = re.compile(r'^\s*"')
_TRAILING_QUOTE = re.compile(r'"\s*$')


def parse_os_release(path: Path) -> dict[str, str]:
    """Parse an os-release style ``KEY=VALUE`` file.

    Args:
        path: File to parse.

    Returns:
        Mapping of keys to (unquoted) values. Later duplicates win.

    Raises:
        FileNotFoundError: If the file does not exist.
        SshReadError: If the file exists but cannot be read.
    """
    try:
        lines = path.read_text(encoding="utf-8", errors="replace").splitlines()
    except FileNotFoundError:
        raise
    except OSError as e:
        raise SshReadError(f"Cannot read {path}: {e}") from e

    content: dict[str, str] = {}
    for raw_line in lines:
        line = raw_line.lstrip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            logger.debug("Ignoring malformed line in %s: %r", path, raw_line)
            continue
        key, value = line.split("=", 1)
        value = _LEADING_QUOTE.sub("", value, count=1)
        value = _TRAILING_QUOTE.sub("", value, count=1)
        content[key] = value
    return content


def name_for(mount_root: Path) -> str:
    """Find out a speaking name for a previous Linux installation.

    ``PRETTY_NAME`` is preferred. When it is missing, empty or just
    ``"Linux"``, the name is built by appending ``VERSION`` to ``NAME``
    without any separator (``NAME="Foo"`` + ``VERSION="1.0"`` gives
    ``"Foo1.0"``).

    Args:
        mount_root: Path where the original "/" is mounted.

    Returns:
        Name of the installation, ``DEFAULT_NAME`` if there is no os-release file.

    Raises:
        SshReadError: If the os-release file exists but cannot be read.
    """
    path = os_release_file(mount_root)
    try:
        os_release = parse_os_release(path)
    except FileNotFoundError:
        logger.debug("No os-release found at %s, using %r", path, DEFAULT_NAME)
        return DEFAULT_NAME

    name = os_release.get("PRETTY_NAME", "")
    if not name or name == DEFAULT_NAME:
        # TODO: add a space between NAME and VERSION once the naming
        # change is accepted for the installer proposal.
        name = os_release.get("NAME") or DEFAULT_NAME
        name += os_release.get("VERSION", "")
    return name
