"""
Budget Lookup Errors

Raised when a command names a city, day or city cap the budget does not
have. The message is meant for the chat: the orchestrator replies with it
verbatim and leaves the ledger untouched.
"""


class BudgetLookupError(Exception):
    """Base exception for lookups against the budget document."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class UnknownCityError(BudgetLookupError):
    """City has no daily allowance."""

    def __init__(self, city: str):
        self.city = city
        super().__init__(f"Error: I couldn't find a budget for the city {city}.")


class UnknownDayError(BudgetLookupError):
    """City exists but has no allowance for that day."""

    def __init__(self, city: str, day: int):
        self.city = city
        self.day = day
        super().__init__(f"Error: I couldn't find a budget for day {day} in {city}.")


class UnknownCityCapError(BudgetLookupError):
    """City has no total cap configured."""

    def __init__(self, city: str):
        self.city = city
        super().__init__(f"Error: there is no spending cap configured for {city}.")
