class BudgetCoreError(Exception):
    pass


class StreamDeliveryFailure(BudgetCoreError):
    """A subscription reported an error instead of a value."""

    def __init__(self, stream, cause: BaseException):
        self.stream = stream
        self.cause = cause
        name = getattr(stream, "value", stream)
        super().__init__(f"{name} stream failed: {cause}")
