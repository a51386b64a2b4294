"""Training-session exceptions."""


class TrainingError(Exception):
    """Base exception for training session misuse."""
    pass


class WindNotDecidedError(TrainingError):
    """Raised when training is started before a wind/route plan exists."""
    pass


class TrainingNotStartedError(TrainingError):
    """Raised when a flight command arrives before training has started."""
    pass


class RouteError(TrainingError):
    """Raised when a route references unknown waypoints or missing connections."""
    pass
