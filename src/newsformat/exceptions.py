#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the newsformat library.

This module defines specialized exception classes for the error conditions
that can occur while compiling article markup into component JSON.

Exception Hierarchy
-------------------
- NewsFormatError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidSettingsError (bad settings values)
    - SpecValidationError (rejected spec customizations)

  - ConfigurationError (defects that must surface)
    - SpecNotRegisteredError (spec name unknown to a component)
    - MatcherTableError (malformed matcher table)
    - UnknownComponentError (factory asked for an unknown kind)

  - ThemeError (unknown theme, unreadable theme file)

  - ParsingError (markup parsing failures)
    - MarkupDepthError (pathological nesting)

  - ComponentBuildError (unexpected failure inside one component)

  - ComponentAlertError (component errors with alerts set to "fail")

  - DependencyError (missing optional packages)

Only ConfigurationError and its subclasses escape a non-strict compile;
every other failure local to a single component drops that component.

"""

from __future__ import annotations

from typing import Any


class NewsFormatError(Exception):
    """Base exception class for all newsformat-specific errors.

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


class ValidationError(NewsFormatError):
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


class InvalidSettingsError(ValidationError):
    """Exception raised when an export setting has an unusable value."""


class SpecValidationError(ValidationError):
    """Exception raised when a spec customization is rejected.

    Parameters
    ----------
    message : str
        Why the customization was rejected
    spec_name : str, optional
        Name of the spec being customized
    invalid_tokens : list[str], optional
        Tokens used by the customization that the default template lacks

    """

    def __init__(
        self,
        message: str,
        spec_name: str | None = None,
        invalid_tokens: list[str] | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the spec validation error."""
        super().__init__(message, parameter_name=spec_name, original_error=original_error)
        self.spec_name = spec_name
        self.invalid_tokens = invalid_tokens or []


class ConfigurationError(NewsFormatError):
    """Base exception for programming and configuration defects.

    These errors indicate a bug in a component or matcher table rather than
    variability in the input markup, so they are never swallowed.
    """


class SpecNotRegisteredError(ConfigurationError):
    """Exception raised when a component requests a spec it never registered.

    Parameters
    ----------
    component : str
        Kind of the component making the request
    spec_name : str
        The unregistered spec name

    """

    def __init__(self, component: str, spec_name: str, message: str | None = None):
        """Initialize the error for the given component and spec."""
        if message is None:
            message = f"Component '{component}' has no spec named '{spec_name}'"
        super().__init__(message)
        self.component = component
        self.spec_name = spec_name


class MatcherTableError(ConfigurationError):
    """Exception raised for an invalid matcher table entry."""


class UnknownComponentError(ConfigurationError):
    """Exception raised when the factory is asked to build an unknown kind.

    Parameters
    ----------
    name : str
        The short name that has no matcher table entry

    """

    def __init__(self, name: str, message: str | None = None):
        """Initialize the error with the unknown component name."""
        if message is None:
            message = f"No component registered under the name '{name}'"
        super().__init__(message)
        self.name = name


class ThemeError(NewsFormatError):
    """Exception raised for unknown themes or unreadable theme files.

    Parameters
    ----------
    message : str
        Description of the theme problem
    theme_name : str, optional
        Name of the theme involved

    """

    def __init__(self, message: str, theme_name: str | None = None, original_error: Exception | None = None):
        """Initialize the theme error."""
        super().__init__(message, original_error=original_error)
        self.theme_name = theme_name


class ParsingError(NewsFormatError):
    """Exception raised when markup cannot be turned into components.

    Parameters
    ----------
    message : str
        Description of the parsing failure
    parsing_stage : str, optional
        The stage of parsing where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the parsing failure

    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the parsing error."""
        super().__init__(message, original_error)
        self.parsing_stage = parsing_stage


class MarkupDepthError(ParsingError):
    """Exception raised when markup nesting exceeds the configured limit.

    Parameters
    ----------
    depth : int
        Depth at which the limit was hit
    limit : int
        The configured maximum depth

    """

    def __init__(self, depth: int, limit: int):
        """Initialize the depth error."""
        super().__init__(
            f"Markup nesting depth {depth} exceeds the maximum of {limit}",
            parsing_stage="component_matching",
        )
        self.depth = depth
        self.limit = limit


class ComponentBuildError(NewsFormatError):
    """Exception raised in strict mode when a single component fails to build.

    Parameters
    ----------
    component : str
        Kind of the component that failed
    original_error : Exception, optional
        The exception raised while building

    """

    def __init__(self, component: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the build error."""
        if message is None:
            message = f"Failed to build component '{component}'"
            if original_error is not None:
                message += f": {original_error}"
        super().__init__(message, original_error=original_error)
        self.component = component


class ComponentAlertError(NewsFormatError):
    """Exception raised when component errors occur and alerts are set to fail.

    Parameters
    ----------
    errors : dict[str, list[str]]
        Recorded diagnostics by category

    """

    def __init__(self, errors: dict[str, list[str]], message: str | None = None):
        """Initialize the alert error."""
        if message is None:
            unmatched = ", ".join(sorted(set(errors.get("component_errors", []))))
            message = f"The following elements could not be converted: {unmatched or 'unknown'}"
        super().__init__(message)
        self.errors = errors


class DependencyError(NewsFormatError):
    """Exception raised when an optional package is missing.

    Parameters
    ----------
    message : str
        Description of the missing dependency
    missing_packages : list[tuple[str, str]], optional
        (package name, version spec) pairs that need installing

    """

    def __init__(
        self,
        message: str,
        missing_packages: list[tuple[str, str]] | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the dependency error."""
        super().__init__(message, original_error=original_error)
        self.missing_packages = missing_packages or []


__all__ = [
    "NewsFormatError",
    "ValidationError",
    "InvalidSettingsError",
    "SpecValidationError",
    "ConfigurationError",
    "SpecNotRegisteredError",
    "MatcherTableError",
    "UnknownComponentError",
    "ThemeError",
    "ParsingError",
    "MarkupDepthError",
    "ComponentBuildError",
    "ComponentAlertError",
    "DependencyError",
]
