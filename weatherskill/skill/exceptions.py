class InvalidApplicationId(Exception):
    """The request was meant for a different skill."""

    pass
