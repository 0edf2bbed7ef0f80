"""
Custom exceptions for emlmr with user-friendly error messages
"""

from typing import Optional, List, Any


class EmlmrError(Exception):
    """Base exception class for emlmr with user-friendly messaging."""

    def __init__(self, message: str, details: Optional[str] = None, suggestions: Optional[List[str]] = None):
        """
        Initialize emlmr exception.

        Args:
            message: Main error message (user-friendly)
            details: Technical details for debugging
            suggestions: List of suggested solutions
        """
        self.message = message
        self.details = details
        self.suggestions = suggestions or []
        super().__init__(self.get_full_message())

    def get_full_message(self) -> str:
        """Get the complete error message with suggestions."""
        msg = self.message
        if self.details:
            msg += f"\n\nTechnical details: {self.details}"
        if self.suggestions:
            msg += "\n\nSuggestions:\n" + "\n".join(f"  • {s}" for s in self.suggestions)
        return msg


class MessageParseError(EmlmrError):
    """Raised when a file cannot be parsed as an email message."""

    def __init__(self, file_path: str, original_error: Optional[Exception] = None):
        message = f"Error parsing {file_path}"
        details = str(original_error) if original_error else None
        suggestions = [
            "Verify that the file is an RFC 5322 email message (.eml)",
            "Check if the file was completely downloaded or exported",
        ]
        super().__init__(message, details, suggestions)
        self.file_path = file_path


class DigestError(EmlmrError):
    """Raised when a message digest cannot be computed."""

    def __init__(self, digest_name: str, original_error: Optional[Exception] = None):
        message = f"Failed to compute {digest_name} digest"
        details = str(original_error) if original_error else None
        super().__init__(message, details)
        self.digest_name = digest_name


class OutputError(EmlmrError):
    """Raised when the report cannot be written to its destination."""

    def __init__(self, output_path: str, format_type: str, original_error: Optional[Exception] = None):
        message = f"Failed to write {format_type} output to {output_path}"
        details = str(original_error) if original_error else None
        suggestions = [
            "Check that you have write permissions to the output directory",
            "Ensure there's enough disk space available",
            "Verify that the output path is valid"
        ]
        super().__init__(message, details, suggestions)
        self.output_path = output_path
        self.format_type = format_type


class ValidationError(EmlmrError):
    """Raised when input validation fails."""

    def __init__(self, parameter: str, value: Any, constraint: str):
        message = f"Invalid value for '{parameter}': {value!r} does not meet constraint: {constraint}"
        suggestions = [
            f"Check the value provided for '{parameter}'",
            "Use the --help option to see parameter requirements"
        ]
        super().__init__(message, None, suggestions)
        self.parameter = parameter
        self.value = value
        self.constraint = constraint


def format_error_for_cli(error: Exception, verbose: bool = False) -> str:
    """
    Format an error for command-line display.

    Args:
        error: The exception to format
        verbose: Whether to include technical details

    Returns:
        Formatted error message
    """
    if isinstance(error, EmlmrError):
        msg = f"❌ {error.message}"

        if verbose and error.details:
            msg += f"\n\n🔍 Technical details:\n{error.details}"

        if error.suggestions:
            msg += "\n\n💡 Suggestions:"
            for suggestion in error.suggestions:
                msg += f"\n  • {suggestion}"

        return msg
    else:
        msg = f"❌ An unexpected error occurred: {str(error)}"
        if verbose:
            import traceback
            msg += f"\n\n🔍 Technical details:\n{traceback.format_exc()}"
        msg += "\n\n💡 Suggestions:\n  • Try running the command again\n  • Check your input parameters\n  • Use --verbose for more details"
        return msg
