# SPDX-License-Identifier: MIT
"""API route modules."""

from . import download, packages, status

__all__ = ["packages", "download", "status"]
