"""Exceptions raised around the calculation engine.

The engine itself reports bad input through ``CalculationResult.error``;
these are for the layers that orchestrate it.
"""


class CalculationError(ValueError):
    """Base exception for calculation orchestration"""

    pass


class UnsupportedCalculationError(CalculationError):
    """Calculator type, interest type or optimize target is not recognised"""

    pass


class MissingInputError(CalculationError):
    """A value required by the selected calculation was not supplied"""

    pass


class UnsaveableResultError(CalculationError):
    """Result carries an error or a non-finite total and cannot be summarised"""

    pass
