class TaskError(Exception):
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInput(TaskError):
    status_code = 400


class NotFound(TaskError):
    status_code = 404


class StoreUnavailable(TaskError):
    status_code = 500
