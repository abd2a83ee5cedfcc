class SummarizerError(Exception):
    """Base class for every failure the form reports to the user."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


_EMPTY_INPUT_MESSAGES = {
    "transcript": "Please enter a transcript first.",
    "summary": "Please generate a summary first.",
    "recipients": "Please enter at least one email address.",
}


class EmptyInput(SummarizerError):
    def __init__(self, field: str):
        super().__init__(_EMPTY_INPUT_MESSAGES.get(field, f"Please fill in the {field}."))
        self.field = field


class MissingConfig(SummarizerError):
    def __init__(self, name: str, env_var: str):
        super().__init__(f"{env_var} is not set in environment variables")
        self.name = name  # "URL" or "Key"
        self.env_var = env_var


class NetworkUnreachable(SummarizerError):
    def __init__(self, detail: str, unresolved: bool = False):
        if unresolved:
            message = (
                "Cannot resolve Supabase URL - check your SUPABASE_URL "
                "environment variable."
            )
        else:
            message = "Network error - check your Supabase URL and internet connection."
        super().__init__(message)
        self.detail = detail
        self.unresolved = unresolved


class ServerError(SummarizerError):
    def __init__(self, status: int, body: str):
        super().__init__(f"Server returned {status}: {body}")
        self.status = status
        self.body = body


class MalformedResponse(SummarizerError):
    def __init__(self, message: str = "No summary returned from server"):
        super().__init__(message)
