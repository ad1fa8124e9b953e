"""fieldrules — declarative validation for string fields and nested records."""

from fieldrules.domain.registry import Constraint, Rules, ValidationResult, new

__version__ = "0.1.0"

__all__ = ["Constraint", "Rules", "ValidationResult", "__version__", "new"]
