"""Shared types and utilities for CLI commands."""

from dataclasses import dataclass
from pathlib import Path

import typer


@dataclass(frozen=True, slots=True)
class SourceSpec:
    """A mounted partition given on the command line as ``ROOT[:DEVICE]``.

    Attributes:
        root: Path where the partition is mounted.
        device: Device name, defaults to the mount path when omitted.
    """

    root: Path
    device: str


def parse_source(value: str) -> SourceSpec:
    """Parse a ``ROOT[:DEVICE]`` command line value.

    Args:
        value: Raw command line value, e.g. ``/mnt/sda2:/dev/sda2``.

    Returns:
        Parsed SourceSpec.

    Raises:
        typer.BadParameter: If the root part is empty.
    """
    root, _, device = value.partition(":")
    if not root:
        msg = f"Missing mount path in {value!r} (expected ROOT[:DEVICE])"
        raise typer.BadParameter(msg)
    return SourceSpec(root=Path(root), device=device or root)


def parse_sources(values: list[str]) -> list[SourceSpec]:
    """Parse several ``ROOT[:DEVICE]`` values, keeping their order."""
    return [parse_source(value) for value in values]
