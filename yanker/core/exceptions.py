# yanker/core/exceptions.py

from typing import List, Optional
from httpx import HTTPStatusError
import json

"""
Yanker domain-specific exceptions.

Library code raises these; the CLI layer catches them, prints a readable
message and exits with a non-zero status.
"""

class YankerError(Exception):
    """Base exception for all yanker errors."""
    pass

# ==============================================================
# VERSION RANGE ERRORS
# ==============================================================

class RangeParseError(YankerError):
    """Raised when the version range argument cannot be parsed."""
    def __init__(self, text: str, details: Optional[str] = None):
        self.text = text
        self.details = details
        message = f"Invalid version range '{text}'. Expected format: \"[0.1.0, 0.2.0]\""
        if details:
            message += f"\n    → {details}"
        super().__init__(message)

# ==============================================================
# MANIFEST ERRORS
# ==============================================================

class ManifestError(YankerError):
    """Base exception for Cargo.toml related errors."""
    pass

class ManifestNotFoundError(ManifestError):
    """Raised when Cargo.toml is not found."""
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"No Cargo.toml found in {path}")

class ManifestLoadError(ManifestError):
    """Raised when Cargo.toml cannot be parsed or lacks a package name."""
    def __init__(self, path: str, details: str):
        self.path = path
        self.details = details
        super().__init__(f"Failed to load {path}: {details}")

# ==============================================================
# REGISTRY ERRORS
# ==============================================================

class RegistryError(YankerError):
    """Raised when the registry answers with an error status."""

    def __init__(self, http_error: HTTPStatusError, *args: object) -> None:
        self.reason = http_error.response.reason_phrase
        self.status_code = http_error.response.status_code
        self.request_url = http_error.request.url

        status_class = http_error.response.status_code // 100
        error_types = {
            1: "Informational response",
            3: "Redirect response",
            4: "Client error",
            5: "Server error",
        }
        self.error_type = error_types.get(status_class, "Invalid status code")

        # crates.io reports failures as {"errors": [{"detail": "..."}]}
        try:
            error_data = json.loads(http_error.response.text)
            errors = error_data.get("errors") or []
            details = [e.get("detail") for e in errors if isinstance(e, dict) and e.get("detail")]
            detail = "; ".join(details) if details else str(http_error)
        except (json.JSONDecodeError, AttributeError):
            detail = str(http_error)

        super().__init__(detail)

class RegistryConnectionError(YankerError):
    """Raised when the registry cannot be reached."""
    def __init__(self, url: str, details: str):
        self.url = url
        self.details = details
        super().__init__(f"Could not reach registry at {url}: {details}")

class RegistryResponseError(YankerError):
    """Raised when the registry payload cannot be deserialized."""
    def __init__(self, url: str, details: str):
        self.url = url
        self.details = details
        super().__init__(f"Unexpected response from {url}: {details}")

# ==============================================================
# CARGO ERRORS
# ==============================================================

class CargoError(YankerError):
    """Base exception for cargo invocation errors."""
    pass

class CargoNotFoundError(CargoError):
    """Raised when the cargo executable cannot be spawned."""
    def __init__(self, command: str, details: str):
        self.command = command
        self.details = details
        super().__init__(f"Could not run '{command}': {details}")

class YankFailedError(CargoError):
    """Raised after the yank loop when one or more versions failed."""
    def __init__(self, failed: List[str], skipped: Optional[List[str]] = None):
        self.failed = failed
        self.skipped = skipped or []
        message = f"cargo yank failed for {len(failed)} version(s): {', '.join(failed)}"
        if self.skipped:
            message += f"\n    Not attempted: {', '.join(self.skipped)}"
        super().__init__(message)
