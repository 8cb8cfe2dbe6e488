"""
Exceptions that are used throughout
"""

from __future__ import annotations

import difflib
from collections.abc import Collection
from pathlib import Path
from typing import Any


class InvalidInputError(TypeError):
    """
    Raised when the input data is not a recognised observation table
    """

    def __init__(self, name: str, problems: Collection[str]) -> None:
        """
        Initialise the error

        Parameters
        ----------
        name
            Name of the input that was invalid

        problems
            Problems that were found with the input
        """
        error_msg = (
            f"{name} must be an observation (quitte-style) table. "
            f"Problems found: {'; '.join(problems)}"
        )
        super().__init__(error_msg)


class InvalidArgumentError(ValueError):
    """
    Raised when an argument does not take one of its supported values
    """

    def __init__(
        self, invalid_value: Any, name: str, supported_values: Collection[str]
    ) -> None:
        """
        Initialise the error

        Parameters
        ----------
        invalid_value
            Value that was received

        name
            Name of the argument

        supported_values
            Values that are supported
        """
        error_msg = (
            f"{name} must be one of {sorted(supported_values)} "
            f"but received {invalid_value!r}."
        )

        if isinstance(invalid_value, str):
            close = difflib.get_close_matches(invalid_value, supported_values, n=3)
            if close:
                suggestions = " or ".join(repr(v) for v in close)
                error_msg = f"{error_msg} Did you mean {suggestions}?"

        super().__init__(error_msg)


class MappingFileNotFoundError(FileNotFoundError):
    """
    Raised when the file for a mapping cannot be found
    """

    def __init__(self, mapping: str, mapping_file: Path) -> None:
        """
        Initialise the error

        Parameters
        ----------
        mapping
            Name of the mapping

        mapping_file
            Path at which we looked for the mapping
        """
        error_msg = f"No mapping file for {mapping!r}. Looked for {mapping_file}"
        super().__init__(error_msg)


class TemplateFileNotFoundError(FileNotFoundError):
    """
    Raised when the variables template cannot be found
    """

    def __init__(self, template_file: Path) -> None:
        """
        Initialise the error

        Parameters
        ----------
        template_file
            Path to the template that could not be found
        """
        error_msg = f"Variables template not found: {template_file}"
        super().__init__(error_msg)


class SchemaMismatchError(ValueError):
    """
    Raised when a mapping or template does not have the expected structure
    """

    def __init__(self, source: Path | str, problem: str) -> None:
        """
        Initialise the error

        Parameters
        ----------
        source
            File (or other source) that did not match the expected structure

        problem
            Description of the mismatch
        """
        error_msg = f"Unexpected structure in {source}: {problem}"
        super().__init__(error_msg)


class NonUniquePivotError(ValueError):
    """
    Raised when data cannot be pivoted because keys are duplicated
    """

    def __init__(self, duplicates: Any) -> None:
        """
        Initialise the error

        Parameters
        ----------
        duplicates
            The duplicated keys (normally a [pd.MultiIndex][pandas.MultiIndex])
        """
        error_msg = (
            "Cannot pivot to wide format, "
            "the following entries appear more than once:\n"
            f"{duplicates}"
        )
        super().__init__(error_msg)
