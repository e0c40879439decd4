class RecipeWatchError(Exception):
    """Base error for recipewatch."""


class SourceFormatError(RecipeWatchError):
    """A fetched document does not have the expected shape."""


class NotificationError(RecipeWatchError):
    """The alert mail could not be sent."""
