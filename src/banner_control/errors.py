class DataAccessError(RuntimeError):
    """The banner store could not complete a statement."""
    pass
