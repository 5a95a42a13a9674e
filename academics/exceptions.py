"""
Errors raised by the academic calendar services.

Input validation problems are reported with Django's own
``ValidationError``; the classes here cover lookups and the data store.
"""


class SchedulingError(Exception):
    """Base class for academic calendar service errors."""


class PlanNotFoundError(SchedulingError):
    """The requested plan id does not resolve to an active plan."""

    def __init__(self, plan_id):
        self.plan_id = plan_id
        super().__init__(f"Plan not found: {plan_id}")


class DataSourceError(SchedulingError):
    """The period or plan store could not be read."""


class PeriodsAlreadyExistError(SchedulingError):
    """Academic periods were already generated for the requested year."""

    def __init__(self, year, count):
        self.year = year
        self.count = count
        super().__init__(f"{count} academic periods already exist for {year}")
