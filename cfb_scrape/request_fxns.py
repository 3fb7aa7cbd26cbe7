import logging
import numbers
import socket
from urllib.parse import urlsplit

import requests

import cfb_scrape.cfg as cfg

logger = logging.getLogger(__name__)


class CFBDError(Exception):
  """Base class for errors raised by cfb_scrape."""


class ValidationError(CFBDError, ValueError):
  """An argument failed validation before any request was made."""


class NoConnectionError(CFBDError):
  """The connectivity check failed, so no request was made."""


class RequestFailedError(CFBDError):
  """The API answered with a non-200 status, or the request itself failed."""

  def __init__(self, message, status_code = None, url = None):
    super().__init__(message)
    self.status_code = status_code
    self.url = url


class MissingFieldsError(CFBDError, KeyError):
  """A payload is missing fields the normalizer needs."""

  def __init__(self, fields):
    self.fields = list(fields)
    super().__init__('Payload is missing required fields: ' + ', '.join(self.fields))

  def __str__(self):
    return self.args[0]


def _is_integer(value):
  return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def check_numeric(value, name):
  if isinstance(value, bool) or not isinstance(value, numbers.Number):
    raise ValidationError('Enter valid ' + name + ' (numeric value)')


def check_id(value, name):
  """
  Ids are whole numbers. Returns value as an int, so 401012356.0 is sent as
  401012356.
  """
  check_numeric(value, name)
  if not _is_integer(value) and not float(value).is_integer():
    raise ValidationError('Enter valid ' + name + ' (whole number)')
  return int(value)


def check_year(value, name = 'year'):
  """
  Years must be integers in 4 digit format (YYYY).
  """
  if not _is_integer(value) or value <= 0 or len(str(value)) != 4:
    raise ValidationError('Enter valid ' + name + ' as a number (YYYY)')


def check_week(value):
  if not _is_integer(value) or value <= 0 or len(str(value)) > 2:
    raise ValidationError('Enter valid week 1-15\n(14 for seasons pre-playoff, i.e. 2014 or earlier)')


def check_choice(value, choices, name):
  if value not in choices:
    raise ValidationError('Enter valid ' + name + ': ' + ', '.join(choices))


def check_required(**kwargs):
  """
  Raises a ValidationError naming every argument that is None.
  """
  missing = [name for name, value in kwargs.items() if value is None]
  if missing:
    raise ValidationError('You need to specify all of the arguments ' + ', '.join(kwargs) +
                          ' (missing: ' + ', '.join(missing) + ')')


def team_name(team):
  """
  Returns the name the API knows a team by. San Jose State is stored with an
  accented e, which callers rarely type.
  """
  if team == 'San Jose State':
    return 'San José State'
  return team


def build_url(endpoint, params = None):
  """
  Returns the full query URL for an endpoint.
  ----------
  Parameters
  ----------
    endpoint: str
      Path below cfg.base_url, e.g. '/lines'
    params: dict
      Query parameters in order. requests leaves out parameters whose value is
      None and form-encodes the rest, so spaces become '+', '&' becomes %26
      and 'é' becomes %C3%A9.
  """
  url = cfg.base_url.rstrip('/') + '/' + endpoint.lstrip('/')
  parameters = {key: str(value).lower() if isinstance(value, bool) else value
                for key, value in (params or {}).items()}
  return requests.Request('GET', url, params = parameters).prepare().url


def connectivity_address():
  """
  The (host, port) probed by check_internet. Defaults to the host of
  cfg.base_url unless cfg.connectivity_host or cfg.connectivity_port are set.
  """
  parts = urlsplit(cfg.base_url)
  host = cfg.connectivity_host or parts.hostname
  port = cfg.connectivity_port or parts.port or (80 if parts.scheme == 'http' else 443)
  return host, port


def check_internet():
  """
  Confirms a TCP connection to the API host can be opened.
  """
  host, port = connectivity_address()
  try:
    with socket.create_connection((host, port), timeout = 5):
      pass
  except OSError as e:
    raise NoConnectionError('No internet connection: could not reach ' + str(host)) from e


def check_status(response):
  if response.status_code != 200:
    raise RequestFailedError('Request failed with status code: ' + str(response.status_code),
                             status_code = response.status_code, url = response.url)


def request_headers():
  headers = {'Accept': 'application/json'}
  if cfg.api_key:
    headers['Authorization'] = 'Bearer ' + cfg.api_key
  return headers


def get_json(url):
  """
  Performs a GET request against url and returns the decoded JSON body.
  Raises NoConnectionError before the request when offline, and
  RequestFailedError for transport failures or a non-200 status.
  """
  check_internet()

  logger.debug('GET %s', url)
  try:
    response = requests.get(url, headers = request_headers(), timeout = cfg.timeout)
  except requests.RequestException as e:
    raise RequestFailedError('Request failed: ' + str(e), url = url) from e

  check_status(response)
  return response.json()
