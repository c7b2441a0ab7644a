"""Git repository domain model: identifiers, aggregates, commands, events, dependency analysis and caching."""

__version__ = "0.3.0"

__all__ = [
    "identifiers",
    "cache",
    "dependency_analysis",
    "events",
    "aggregate",
    "commands",
]