"""Domain exceptions."""


class DietTrackerError(Exception):
    """Base exception for the diet tracker."""


class FoodValidationError(DietTrackerError):
    """User input for a food item was rejected."""

    message = "Invalid food."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)
        if message:
            self.message = message


class InvalidNameError(FoodValidationError):
    """The name was empty or whitespace only."""

    message = "Please enter a name."


class InvalidNumbersError(FoodValidationError):
    """A numeric field was not a non-negative integer."""

    message = "Please enter valid non-negative numbers."


class PersistenceError(DietTrackerError):
    """Writing the state document failed; in-memory changes were rolled back."""
