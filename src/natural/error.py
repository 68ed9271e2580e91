class InvalidInputError(ValueError):
    """Exception raised for malformed data or parameters."""

    def __init__(self, message="The input is not valid."):
        self.message = message
        super().__init__(self.message)


class SolverFailureError(RuntimeError):
    """Exception raised if the penalized regression path could not be computed."""

    def __init__(self, message="The solver could not compute the path."):
        self.message = message
        super().__init__(self.message)
