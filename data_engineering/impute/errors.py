"""
Imputation exceptions, kept free of model dependencies so that median/mode
substitution can raise them without loading scikit-learn.
"""


class ImputationError(ValueError):
    """Raised when missing values cannot be filled as configured."""
