"""Logfire setup for the review desk.

Services log and trace through logfire directly:

    with logfire.span("analysis_service.submit", material_id=str(material_id)):
        logfire.info("Analysis submitted", material_id=str(material_id))

This module only configures the SDK and instruments the web and database
layers.
"""

from typing import Any

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from desk.config import ObservabilitySettings, Settings

# Path parameters copied onto request spans
TRACED_PATH_PARAMS = ("material_id", "session_id", "state_id", "comment_id")


def should_send(observability: ObservabilitySettings) -> bool:
    """Decide whether spans leave the process.

    An explicit OBSERVABILITY__SEND_TO_LOGFIRE wins; otherwise sending is on
    exactly when a token is configured.
    """
    if observability.send_to_logfire is not None:
        return observability.send_to_logfire
    return bool(observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire once at process start.

    Args:
        settings: Application settings
    """
    send_to_logfire = should_send(settings.observability)

    logfire.configure(
        service_name="review-desk",
        service_version=settings.git_sha,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=settings.observability.logfire_token,
        # Presence payloads and cookies carry the auth token name
        scrubbing=logfire.ScrubbingOptions(extra_patterns=["auth_token"]),
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        strict_exclusion=settings.presence.strict_exclusion,
    )


def _request_attributes(request: Any, attributes: dict[str, Any]) -> dict[str, Any]:
    result = {**attributes}

    # WebSocket connections have no method
    method = getattr(request, "method", None)
    if method:
        result["method"] = method

    path_params = getattr(request, "path_params", None) or {}
    for name in TRACED_PATH_PARAMS:
        if name in path_params:
            result[name] = str(path_params[name])

    return result


def instrument_fastapi(app: FastAPI) -> None:
    """Trace HTTP requests and the presence WebSocket.

    Headers are not captured since the session cookie travels in them.
    """
    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        request_attributes_mapper=_request_attributes,
    )
    logfire.debug("FastAPI instrumented")


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace queries of the async engine."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)
    logfire.debug("SQLAlchemy instrumented")
