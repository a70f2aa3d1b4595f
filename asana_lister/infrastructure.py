#!/usr/bin/env python3
"""
Asana Lister Infrastructure

Shared utilities for talking to the Asana SDK:
- Configuration singleton (environment and .env driven)
- SDK client construction
- Error handling decorator
- Alert hooks (pluggable)
"""

import inspect
import json
import os
import logging
from functools import wraps
from pathlib import Path
from typing import Dict, Optional, Any, Callable

import asana
import urllib3
from asana.rest import ApiException
from dotenv import load_dotenv

from .errors import (
    AsanaTransportError,
    AsanaAuthenticationError,
    AsanaRateLimitError,
    AsanaNotFoundError,
    AsanaValidationError,
    AsanaServerError,
)

# Configure logging
logger = logging.getLogger(__name__)

# Load environment variables from .env file
load_dotenv()

DEFAULT_TOKEN_FILE = Path.home() / ".config" / "asana" / "tokens.json"

# Asana caps list endpoints at 100 results per page
MAX_PAGE_SIZE = 100


# ============================================================================
# Configuration
# ============================================================================

class AsanaListerConfig:
    """
    Global configuration for the lister.

    Values are read from the environment once, on first access:
    - ASANA_ACCESS_TOKEN: personal access token
    - ASANA_TOKEN_FILE: JSON token file consulted when no token is set
    - ASANA_WORKSPACE: default workspace (gid or name)
    - ASANA_PAGE_SIZE: results requested per page
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._init_defaults()
        return cls._instance

    def _init_defaults(self):
        self.access_token: Optional[str] = os.environ.get("ASANA_ACCESS_TOKEN") or None
        self.token_file = Path(os.environ.get("ASANA_TOKEN_FILE", str(DEFAULT_TOKEN_FILE)))
        self.workspace: Optional[str] = os.environ.get("ASANA_WORKSPACE") or None
        self.page_size = _parse_page_size(os.environ.get("ASANA_PAGE_SIZE"))

        # Alert callback: (severity, category, message, context) -> None
        self._alert_callback: Optional[Callable[[str, str, str, Optional[Dict]], None]] = None

    def reload(self):
        """Re-read configuration from the environment."""
        self._init_defaults()

    def set_alert_callback(self, callback: Optional[Callable[[str, str, str, Optional[Dict]], None]]):
        """
        Set a callback for raising alerts.

        Args:
            callback: Function that accepts (severity, category, message, context)
                     severity: 'critical', 'urgent', or 'warning'
                     category: Alert category string (e.g., 'auth_failed', 'rate_limit_hit')
                     message: Human-readable alert message
                     context: Optional dict with additional context
        """
        self._alert_callback = callback

    def get_access_token(self) -> str:
        """
        Resolve the access token: environment first, then the token file.

        Raises:
            AsanaAuthenticationError: If no token can be found
        """
        if self.access_token:
            return self.access_token

        token = _load_token_file(self.token_file)
        if token:
            return token

        raise AsanaAuthenticationError(
            "No Asana token provided.\n"
            "Options:\n"
            "  1. Set ASANA_ACCESS_TOKEN environment variable (or add it to .env)\n"
            f"  2. Store an access_token in {self.token_file}"
        )


def _parse_page_size(raw: Optional[str]) -> int:
    if not raw:
        return MAX_PAGE_SIZE
    try:
        size = int(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid ASANA_PAGE_SIZE={raw!r}")
        return MAX_PAGE_SIZE
    return max(1, min(size, MAX_PAGE_SIZE))


def _load_token_file(token_file: Path) -> Optional[str]:
    """Read access_token from a JSON token file, if present and readable."""
    if not token_file.exists():
        return None

    try:
        with open(token_file) as f:
            tokens = json.load(f)
    except (json.JSONDecodeError, IOError) as e:
        logger.warning(f"Could not read token file {token_file}: {e}")
        return None

    if not isinstance(tokens, dict):
        return None
    return tokens.get("access_token") or None


def get_config() -> AsanaListerConfig:
    """Get the global lister configuration."""
    return AsanaListerConfig()


# ============================================================================
# Alert System
# ============================================================================

def raise_alert(
    severity: str,
    category: str,
    message: str,
    context: Optional[Dict[str, Any]] = None,
) -> None:
    """
    Raise an alert for Asana client issues.

    Uses configured alert callback if available, otherwise logs.

    Args:
        severity: Alert severity - 'critical', 'urgent', or 'warning'
        category: Alert category (e.g., 'auth_failed', 'rate_limit_hit')
        message: Human-readable alert message
        context: Additional context as key-value pairs
    """
    config = get_config()

    if config._alert_callback:
        try:
            config._alert_callback(severity, category, message, context)
            logger.debug(f"Alert dispatched: [{severity}] {category}: {message}")
            return
        except Exception as e:
            logger.warning(f"Alert callback failed: {e}")

    # Fall back to logging
    log_level = {
        "critical": logging.CRITICAL,
        "urgent": logging.ERROR,
        "warning": logging.WARNING,
    }.get(severity, logging.WARNING)

    logger.log(log_level, f"[ALERT-{severity.upper()}] {category}: {message}")


# ============================================================================
# Error Handling Decorator
# ============================================================================

def with_api_error_handling(operation_fmt: str) -> Callable:
    """
    Decorator to translate SDK exceptions consistently across all operations.

    Args:
        operation_fmt: Description format string for the operation.
                      Can use {arg_name} placeholders filled from function arguments.

    Example:
        @with_api_error_handling("listing tasks of project {project_gid}")
        def tasks(self, project_gid: str) -> Page:
            ...
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            # Build operation string from function arguments
            sig = inspect.signature(func)
            bound_args = sig.bind(*args, **kwargs)
            bound_args.apply_defaults()

            try:
                operation = operation_fmt.format(**bound_args.arguments)
            except (KeyError, ValueError, AttributeError):
                operation = operation_fmt

            try:
                return func(*args, **kwargs)
            except (ValueError, TypeError):
                # Re-raise caller mistakes and decode errors without wrapping
                raise
            except ApiException as e:
                handle_api_exception(e, operation)
            except urllib3.exceptions.HTTPError as e:
                raise AsanaTransportError(
                    f"Network error during {operation}: {e}"
                ) from e

        return wrapper
    return decorator


# ============================================================================
# Asana Client Construction
# ============================================================================

def get_client(access_token: Optional[str] = None) -> "asana.ApiClient":
    """
    Get an Asana API client (v5.x) authenticated with the configured token.

    Args:
        access_token: Explicit token; falls back to the configuration

    Raises:
        AsanaAuthenticationError: If no token is available
    """
    token = access_token or get_config().get_access_token()

    configuration = asana.Configuration()
    configuration.access_token = token

    return asana.ApiClient(configuration)


# ============================================================================
# API Exception Handling
# ============================================================================

def _error_message(e: "ApiException") -> str:
    try:
        error_data = json.loads(e.body) if e.body else {}
        return error_data.get("errors", [{}])[0].get("message", str(e))
    except (json.JSONDecodeError, KeyError, IndexError, TypeError, AttributeError):
        return str(e)


def handle_api_exception(e: "ApiException", operation: str) -> None:
    """
    Convert Asana ApiException to the matching AsanaTransportError subclass.

    Also raises alerts for authentication, rate limit and server issues.

    Args:
        e: ApiException from Asana SDK
        operation: Description of operation that failed

    Raises:
        Appropriate AsanaTransportError subclass, chained to e
    """
    status = e.status or 0
    error_msg = _error_message(e)

    if status in (401, 403):
        raise_alert(
            severity="critical",
            category="auth_failed",
            message=f"Asana rejected the access token during {operation}",
            context={"endpoint": operation, "http_status": status, "error": error_msg},
        )
        if status == 401:
            raise AsanaAuthenticationError(
                f"Authentication failed during {operation}: {error_msg}\n"
                f"Check ASANA_ACCESS_TOKEN.",
                status=status,
            ) from e
        raise AsanaAuthenticationError(
            f"Permission denied during {operation}: {error_msg}\n"
            f"Check that your Asana account has access to this resource.",
            status=status,
        ) from e

    elif status == 404:
        raise AsanaNotFoundError(
            f"Resource not found during {operation}: {error_msg}\n"
            f"Verify the GID is correct and the resource exists.",
            status=status,
        ) from e

    elif status == 400:
        raise AsanaValidationError(
            f"Invalid request during {operation}: {error_msg}",
            status=status,
        ) from e

    elif status == 429:
        retry_after = None
        headers = getattr(e, "headers", None) or {}
        if "Retry-After" in headers:
            try:
                retry_after = int(headers["Retry-After"])
            except ValueError:
                pass

        raise_alert(
            severity="urgent",
            category="rate_limit_hit",
            message=f"Asana API rate limit exceeded during {operation}",
            context={
                "endpoint": operation,
                "retry_after_seconds": retry_after,
                "error": error_msg,
                "http_status": 429,
            },
        )

        raise AsanaRateLimitError(
            f"Rate limit exceeded during {operation}: {error_msg}",
            retry_after=retry_after,
        ) from e

    elif status >= 500:
        raise_alert(
            severity="warning",
            category="api_server_error",
            message=f"Asana server error (HTTP {status}) during {operation}",
            context={
                "endpoint": operation,
                "status_code": status,
                "error": error_msg,
            },
        )

        raise AsanaServerError(
            f"Server error during {operation} (HTTP {status}): {error_msg}",
            status=status,
        ) from e

    else:
        raise AsanaTransportError(
            f"Unexpected error during {operation} (HTTP {status}): {error_msg}",
            status=status or None,
        ) from e
