# Configuration loading for swologs

import os

import yaml

from .errors import ConfigurationError

DEFAULT_CONFIG_PATH = "~/.swo-cli.yaml"
DEFAULT_API_URL = "https://api.na-01.cloud.solarwinds.com"

# Lazy load dotenv - only when config is first accessed
_dotenv_loaded = False
_custom_dotenv_path = None

def _getenv(name, default):
	value = os.getenv(name)
	return value if value else default

class SwoConfig:
	"""Resolved API URL and token, plus client settings."""
	def __init__(self, api_url, token, timeout=30):
		self.api_url = api_url
		self.token = token
		self.timeout = timeout

def set_dotenv_path(path: str):
	"""Set a custom .env file path to load. Must be called before load_config()."""
	global _custom_dotenv_path, _dotenv_loaded
	_custom_dotenv_path = path
	_dotenv_loaded = False  # Reset to force reload with new path

def _load_dotenv():
	global _dotenv_loaded
	if _dotenv_loaded:
		return
	from dotenv import load_dotenv, find_dotenv
	dotenv_path = os.getenv("DOTENV_PATH") or _custom_dotenv_path
	if dotenv_path:
		# Explicit env file values take precedence over the environment
		load_dotenv(dotenv_path, override=True)
	else:
		dotenv_path = find_dotenv(usecwd=True)
		if dotenv_path:
			load_dotenv(dotenv_path)
	_dotenv_loaded = True

def _read_config_file(path: str) -> dict:
	"""Read the YAML config file. A missing or unreadable file yields {}."""
	try:
		with open(path, encoding="utf-8") as f:
			content = f.read()
	except OSError:
		return {}
	try:
		data = yaml.safe_load(content)
	except yaml.YAMLError as e:
		raise ConfigurationError(f"error while unmarshaling {path} config file: {e}") from e
	if data is None:
		return {}
	if not isinstance(data, dict):
		raise ConfigurationError(f"error while unmarshaling {path} config file: expected a mapping")
	return data

def load_config(config_path: str = DEFAULT_CONFIG_PATH, api_url: str = None) -> SwoConfig:
	"""Return the resolved configuration.

	Token: SWO_API_TOKEN, then the file's ``token``.
	API URL: SWO_API_URL, then ``api_url``, then the file's ``api-url``.
	"""
	_load_dotenv()
	path = os.path.expanduser(config_path) if config_path else None
	file_config = _read_config_file(path) if path else {}

	token = _getenv("SWO_API_TOKEN", file_config.get("token") or "")
	if not token:
		raise ConfigurationError("failed to find token")

	url = _getenv("SWO_API_URL", api_url or file_config.get("api-url") or DEFAULT_API_URL)
	try:
		timeout = int(_getenv("SWO_API_TIMEOUT", "30"))
	except ValueError as e:
		raise ConfigurationError(f"SWO_API_TIMEOUT must be an integer: {e}") from e
	return SwoConfig(api_url=url, token=str(token), timeout=timeout)
