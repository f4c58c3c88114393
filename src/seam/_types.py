"""Shared type definitions for seam."""

from typing import Literal

# How an input file is handled by the builder
type FileKind = Literal["page", "asset"]

# What happened to a file during a build pass
type BuildAction = Literal["render", "copy_asset", "skip", "clean", "write_marker"]

# Which watched tree a change came from
type ChangeCategory = Literal["page", "asset", "partial"]

# Filesystem change kind
type ChangeKind = Literal["created", "modified", "deleted"]
