"""Exceptions raised by the course quiz pipeline."""


class CourseQuizError(Exception):
    """Base class for course quiz errors."""


class GenerationCancelled(CourseQuizError):
    """A generation request was cancelled or ran past its deadline."""


class ModelNotConfiguredError(CourseQuizError):
    """The model client was used without a configured API key."""


class UnsupportedProviderError(CourseQuizError):
    """The configured generation provider has no client implementation."""
