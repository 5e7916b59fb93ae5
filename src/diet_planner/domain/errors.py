"""Domain exceptions raised at the data-loading boundary."""


class DietPlannerError(Exception):
    """Base error for the diet planner."""


class CatalogLoadError(DietPlannerError):
    """Raised when a food catalog source cannot be read or parsed."""


class RulesConfigError(DietPlannerError):
    """Raised when a rule set is unknown or invalid."""
