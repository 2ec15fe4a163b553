#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the docweave library.

This module defines the exception classes raised at the edges of the filter
pipeline: reading and writing ASTs, talking to the Pandoc converter, and
resolving filters by name. Failures that happen while a filter rewrites a
node are not raised; they are rendered into the document as error blocks.

Exception Hierarchy
-------------------
- DocweaveError (base exception)

  - ValidationError (parameter/option validation)
    - FilterError (unknown filter names, bad filter options)

  - FileError (file access and I/O)
    - InputError (unreadable input source)
    - OutputWriteError (unwritable output destination)

  - ParsingError (input is not a valid Pandoc JSON AST)

  - ConverterError (the external document converter failed)

"""

from typing import Any


class DocweaveError(Exception):
    """Base exception class for all docweave-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(DocweaveError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class FilterError(ValidationError):
    """Exception raised when a filter cannot be resolved or constructed.

    Parameters
    ----------
    message : str
        Description of the problem
    filter_name : str, optional
        Name of the filter that was requested
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, filter_name: str | None = None, original_error: Exception | None = None):
        """Initialize the filter error."""
        super().__init__(message, parameter_name="filter", parameter_value=filter_name, original_error=original_error)
        self.filter_name = filter_name


class FileError(DocweaveError):
    """Base exception for file access and I/O errors.

    Parameters
    ----------
    message : str
        Description of the file error
    file_path : str, optional
        Path to the file that caused the error
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the file error with path information."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class InputError(FileError):
    """Exception raised when the input AST cannot be read."""


class OutputWriteError(FileError):
    """Exception raised when the output AST cannot be written."""


class ParsingError(DocweaveError):
    """Exception raised when the input is not a valid Pandoc JSON document.

    Parameters
    ----------
    message : str
        Description of the parsing error
    source : str, optional
        Description of where the input came from
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, source: str | None = None, original_error: Exception | None = None):
        """Initialize the parsing error."""
        super().__init__(message, original_error=original_error)
        self.source = source


class ConverterError(DocweaveError):
    """Exception raised when the external document converter fails.

    Parameters
    ----------
    message : str
        Description of the failure
    command : list of str, optional
        The command line that was run
    stderr : str, optional
        Diagnostic output captured from the converter
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        command: list[str] | None = None,
        stderr: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the converter error with process details."""
        super().__init__(message, original_error=original_error)
        self.command = command
        self.stderr = stderr

