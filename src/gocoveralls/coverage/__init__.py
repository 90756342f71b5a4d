"""Go coverage profile parsing, merging and line projection.

This package provides:
- Profile parsing (``go test -coverprofile`` text format)
- Additive merge across runs
- Projection of block coverage onto per-line arrays
- Source file resolution and the SourceFile pipeline

Usage:
    from gocoveralls.coverage import parse_profiles, merge, project

    runs = [parse_profiles(text) for text in texts]
    profiles = merge(*runs)
    source_file = project(profiles[0], Path("pkg/a.go").read_bytes())
"""

from gocoveralls.coverage.ignore import is_ignored, split_patterns
from gocoveralls.coverage.merge import merge, merge_profiles
from gocoveralls.coverage.models import (
    CoverageBlock,
    Profile,
    ProfileMode,
    SourceFile,
    source_digest,
)
from gocoveralls.coverage.parser import parse_profiles, read_profiles
from gocoveralls.coverage.projector import count_lines, project
from gocoveralls.coverage.report import (
    build_source_files,
    build_summary,
    build_text_summary,
    compute_file_stats,
)
from gocoveralls.coverage.resolver import SourceResolver, read_module_path

__all__ = [
    # Models
    "CoverageBlock",
    "Profile",
    "ProfileMode",
    "SourceFile",
    "source_digest",
    # Parsing
    "parse_profiles",
    "read_profiles",
    # Merge
    "merge",
    "merge_profiles",
    # Projection
    "count_lines",
    "project",
    # Resolution
    "SourceResolver",
    "read_module_path",
    "is_ignored",
    "split_patterns",
    # Report
    "build_source_files",
    "build_summary",
    "build_text_summary",
    "compute_file_stats",
]
