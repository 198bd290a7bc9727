"""
Error pattern catalog.

Maps regex patterns from known errors to friendly, actionable messages.
Patterns are matched against "<ExceptionClass>: <message>".
When a new error is encountered in production:
  1. Capture the raw error from logs
  2. Add a regex pattern here
  3. Write a friendly response following the voice guidelines
  4. Add a unit test
"""

import re
from agent.errors.models import FriendlyError, ErrorSeverity

# Each entry: (compiled_regex, FriendlyError template)
# Order matters: first match wins.

ERROR_PATTERNS: list[tuple[re.Pattern, FriendlyError]] = [
    # ── Orchestration ─────────────────────────────────────────────────────

    (
        re.compile(r"Reached the limit of \d+ communication cycles", re.IGNORECASE),
        FriendlyError(
            message=(
                "I got stuck going back and forth with my tools and had to stop. "
                "I've cleared our conversation so we can start fresh. Try asking "
                "again, maybe a bit more directly."
            ),
            severity=ErrorSeverity.INFO,
            error_code="TOOL_LOOP_EXHAUSTED",
            action="Retry with a simpler request",
        ),
    ),

    # ── AI Provider (direct APIs) ─────────────────────────────────────────

    (
        re.compile(r"insufficient_quota|credit balance is too low", re.IGNORECASE),
        FriendlyError(
            message=(
                "My AI provider account has run out of credit. Your admin needs to "
                "top up the account or switch to another provider."
            ),
            severity=ErrorSeverity.CONFIG,
            error_code="PROVIDER_QUOTA",
            action="Top up the provider account",
            admin_required=True,
        ),
    ),
    (
        re.compile(r"HTTP 401|authentication_error|invalid.*api.key", re.IGNORECASE),
        FriendlyError(
            message=(
                "I can't authenticate with the AI provider. The API key might be "
                "invalid or expired. Check the <PROVIDER>_API_KEY in the .env file."
            ),
            severity=ErrorSeverity.CONFIG,
            error_code="PROVIDER_AUTH",
            action="Check the provider API key in .env",
            admin_required=True,
        ),
    ),
    (
        re.compile(r"context_length_exceeded|prompt is too long|maximum context length", re.IGNORECASE),
        FriendlyError(
            message=(
                "Our conversation got too long for the AI model to handle. "
                "I've cleared it, so send your message again and we'll start fresh."
            ),
            severity=ErrorSeverity.INFO,
            error_code="CONTEXT_TOO_LONG",
            action="Resend the message",
        ),
    ),
    (
        re.compile(r"HTTP 429|rate.limit|ThrottlingException", re.IGNORECASE),
        FriendlyError(
            message=(
                "I'm getting a lot of requests right now and need to slow down. "
                "Give me a moment and try again."
            ),
            severity=ErrorSeverity.INFO,
            error_code="RATE_LIMITED",
            action="Retry in a moment",
        ),
    ),
    (
        re.compile(r"HTTP 529|overloaded", re.IGNORECASE),
        FriendlyError(
            message=(
                "The AI provider is overloaded at the moment. Try again in a minute."
            ),
            severity=ErrorSeverity.INFO,
            error_code="PROVIDER_OVERLOADED",
            action="Retry in a minute",
        ),
    ),
    (
        re.compile(r"timed out|TimeoutError|ModelTimeoutException", re.IGNORECASE),
        FriendlyError(
            message=(
                "My AI model is taking longer than expected to respond. Try again, "
                "or try rephrasing with a simpler question."
            ),
            severity=ErrorSeverity.INFO,
            error_code="PROVIDER_TIMEOUT",
            action="Retry or simplify the question",
        ),
    ),
    (
        re.compile(r"HTTP 5\d\d", re.IGNORECASE),
        FriendlyError(
            message=(
                "The AI provider is having trouble on its end. Try again in a few minutes."
            ),
            severity=ErrorSeverity.INFO,
            error_code="PROVIDER_UNAVAILABLE",
            action="Retry in a few minutes",
        ),
    ),
    (
        re.compile(r"Connection refused|Name or service not known|URLError", re.IGNORECASE),
        FriendlyError(
            message=(
                "I can't reach my AI provider right now. This could be a network "
                "issue. Try again in a few minutes."
            ),
            severity=ErrorSeverity.INFO,
            error_code="PROVIDER_UNREACHABLE",
            action="Check network connectivity",
        ),
    ),

    # ── Bedrock ───────────────────────────────────────────────────────────

    (
        re.compile(r"AccessDeniedException.*bedrock|Model access is denied", re.IGNORECASE),
        FriendlyError(
            message=(
                "I don't have permission to call my AI model on Bedrock. Your admin "
                "needs to enable model access and grant bedrock:InvokeModel."
            ),
            severity=ErrorSeverity.CRITICAL,
            error_code="BEDROCK_ACCESS_DENIED",
            action="Grant Bedrock model access",
            admin_required=True,
        ),
    ),
    (
        re.compile(r"ValidationException", re.IGNORECASE),
        FriendlyError(
            message=(
                "The AI model couldn't process that request due to a validation issue. "
                "I've cleared our conversation; try sending your message again."
            ),
            severity=ErrorSeverity.CONFIG,
            error_code="BEDROCK_VALIDATION",
            action="Check model configuration",
            admin_required=True,
        ),
    ),

    # ── Conversation cache ────────────────────────────────────────────────

    (
        re.compile(r"ResourceNotFoundException.*table", re.IGNORECASE),
        FriendlyError(
            message=(
                "I can't find my conversation table. Your admin should check that "
                "the DynamoDB table exists in the configured region."
            ),
            severity=ErrorSeverity.CRITICAL,
            error_code="DYNAMODB_TABLE_MISSING",
            action="Create the DynamoDB table",
            admin_required=True,
        ),
    ),
]


# Pre-built generic fallback
GENERIC_ERROR = FriendlyError(
    message=(
        "Something unexpected went wrong. I've logged the details and reset our "
        "conversation. Try again or rephrase your message."
    ),
    severity=ErrorSeverity.INFO,
    error_code="UNKNOWN",
    action="Retry or rephrase",
)
