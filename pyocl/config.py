# pyocl/config.py
"""Tuning knobs for status-code diagnostics."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

SDK_DOCS_URL_PRE: str = "https://www.khronos.org/registry/cl/sdk/1.2/docs/man/xhtml/"
SDK_DOCS_URL_SUF: str = ".html#errors"


@dataclass(frozen=True)
class ErrorConfig:
    """Configuration consumed by :func:`pyocl.errors.translate`."""
    docs_url_prefix: str = SDK_DOCS_URL_PRE
    docs_url_suffix: str = SDK_DOCS_URL_SUF
    log_failures: bool = True

    def docs_url(self, operation_name: str) -> str:
        return f"{self.docs_url_prefix}{operation_name}{self.docs_url_suffix}"

    def validate(self) -> List[str]:
        """Return a list of validation warnings (empty if valid)."""
        warnings: List[str] = []
        if not self.docs_url_prefix:
            warnings.append("docs_url_prefix must not be empty")
        elif not self.docs_url_prefix.endswith("/"):
            warnings.append("docs_url_prefix should end with '/'")
        if not self.docs_url_suffix.startswith("."):
            warnings.append("docs_url_suffix should start with a file extension")
        return warnings


DEFAULT_CONFIG = ErrorConfig()
