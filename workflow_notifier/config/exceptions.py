"""Custom exceptions for notifier configuration."""

from typing import List, Optional


class ConfigurationError(Exception):
    """
    Exception raised when notifier inputs or credentials are invalid.

    Collects every validation problem found in a single pass so the caller
    sees the full list at once, together with hints on how to fix them.
    """

    def __init__(
        self,
        message: str,
        errors: Optional[List[str]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        """
        Initialize ConfigurationError.

        Args:
            message: Primary error message
            errors: Individual validation failures
            suggestions: Hints for resolving the failures
        """
        self.message = message
        self.errors = errors or []
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Render the message, numbered errors and suggestions as one string."""
        parts = [self.message]

        if self.errors:
            parts.append("\nValidation Errors:")
            for i, error in enumerate(self.errors, 1):
                parts.append(f"  {i}. {error}")

        if self.suggestions:
            parts.append("\nSuggestions:")
            for suggestion in self.suggestions:
                parts.append(f"  - {suggestion}")

        return "\n".join(parts)
