"""
Error taxonomy for the planner.

"No plan exists" is never an error: find_plan returns None for that. The
exceptions below signal structural or configuration problems, plus the two
verification failures that the search consumes internally.
"""


class PlannerError(Exception):
    """Base class for every error raised by the planner."""


class InvalidVerboseLevel(PlannerError):
    def __init__(self, level):
        self.level = level
        super().__init__(f"Verbose level must be between 0 and 3, got {level!r}")


class InvalidDomainConfiguration(PlannerError):
    def __init__(self, message):
        self.message = message
        super().__init__(f"Invalid domain configuration: {message}")


class MethodVerificationFailed(PlannerError):
    def __init__(self, method, goal, depth):
        self.method = method
        self.goal = goal
        self.depth = depth
        super().__init__(f"Method '{method}' didn't achieve goal {goal} at depth {depth}")


class MultigoalVerificationFailed(PlannerError):
    def __init__(self, method, multigoal, depth):
        self.method = method
        self.multigoal = multigoal
        self.depth = depth
        super().__init__(f"Method '{method}' didn't achieve multigoal {multigoal} at depth {depth}")


class InvalidItemType(PlannerError):
    def __init__(self, item, depth):
        self.item = item
        self.depth = depth
        super().__init__(
            f"Item {item!r} isn't an action, task, unigoal, or multigoal at depth {depth}"
        )


class Generic(PlannerError):
    def __init__(self, message):
        self.message = message
        super().__init__(message)


class InvalidValueError(Generic):
    """A state or goal value outside the supported value types."""
