"""
Violation records and the exception raised for them.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from dataclasses import dataclass

# Public API -----------------------------------------------------------------------------------------------------------
__all__ = ["Violation", "ParameterTypeMismatch"]


# Classes --------------------------------------------------------------------------------------------------------------


@dataclass(frozen=True)
class Violation:
    """
    A documented parameter whose actual value has a different type.

    Attributes:
        name: Parameter name as written in the signature.
        expected_type: Canonical type declared in the docstring.
        actual_type: Canonical type (or class name) of the supplied value.
    """

    name: str
    expected_type: str
    actual_type: str

    @property
    def message(self) -> str:
        return f"Parameter '{self.name}' must be {self.expected_type}, got {self.actual_type}"


class ParameterTypeMismatch(TypeError):
    """
    Raised when an argument does not match the scalar type documented for it.

    Subclasses TypeError, so callers catching TypeError also catch it.

    Attributes:
        violation: The Violation that triggered the error.
        where: Qualified name of the validated function, None if unknown.
    """

    def __init__(self, violation: Violation, where: str | None = None) -> None:
        self.violation = violation
        self.where = where
        if where:
            msg = f"type validation failed in {where}():\n  {violation.message}"
        else:
            msg = violation.message
        super().__init__(msg)

    @property
    def name(self) -> str:
        return self.violation.name

    @property
    def expected_type(self) -> str:
        return self.violation.expected_type

    @property
    def actual_type(self) -> str:
        return self.violation.actual_type
