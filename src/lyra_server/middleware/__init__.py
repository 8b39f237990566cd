# SPDX-License-Identifier: MIT
"""API middleware components."""

from .errors import add_error_handlers

__all__ = ["add_error_handlers"]
