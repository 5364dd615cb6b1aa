"""Planning errors."""


class PlanningError(Exception):
    """A planner could not produce a valid plan."""
