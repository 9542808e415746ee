class FeedLoadError(Exception):
    pass


class FeedNotReadyError(Exception):
    pass


class UnknownTokenError(KeyError):
    pass


class SubmissionInProgressError(Exception):
    pass


class SwapRejectedError(Exception):
    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason
