# Exception hierarchy for swologs


class SwoLogsError(Exception):
	"""Base exception for swologs errors with user-friendly messages."""
	pass


class ConfigurationError(SwoLogsError):
	"""Raised when the config file cannot be parsed or no token is available."""
	pass


class InvalidDateTimeError(SwoLogsError):
	"""Raised when a time expression matches no layout and no relative phrase."""
	pass


class TimeParseError(SwoLogsError):
	"""Raised when a time flag cannot be resolved."""
	flag = None

	def __init__(self, value, cause=None):
		self.value = value
		message = f"failed to parse {self.flag} flag: {value!r}"
		if cause is not None:
			message = f"{message}: {cause}"
		super().__init__(message)


class MinTimeFlagError(TimeParseError):
	flag = "--min-time"


class MaxTimeFlagError(TimeParseError):
	flag = "--max-time"


class ApiError(SwoLogsError):
	"""Base exception for failures talking to the log service."""
	pass


class ConnectionFailedError(ApiError):
	"""Raised when the log service is not reachable."""
	pass


class AuthenticationError(ApiError):
	"""Raised when the log service rejects the token."""
	pass


class ServiceError(ApiError):
	"""Raised on any other HTTP failure or an unreadable response."""

	def __init__(self, message, status=None):
		super().__init__(message)
		self.status = status


class RenderError(SwoLogsError):
	"""Raised when a log event cannot be rendered."""
	pass
