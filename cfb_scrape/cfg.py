import os

# Module-level settings shared by the scraping functions. Read from the
# environment at import; override for the running process with init().

base_url = os.environ.get('CFBD_BASE_URL', 'https://api.collegefootballdata.com')
api_key = os.environ.get('CFBD_API_KEY') or None
timeout = float(os.environ.get('CFBD_TIMEOUT', 30))

# Host and port probed before each request; None means the host of base_url
connectivity_host = os.environ.get('CFBD_CONNECTIVITY_HOST') or None
connectivity_port = None

logos_url = 'https://raw.githubusercontent.com/saiemgilani/cfbscrapR-data/master/logos.csv'

season_types = ('regular', 'postseason')
line_providers = ('Caesars', 'consensus', 'numberfire', 'teamrankings')

# Standard deviation of final margin around the closing spread, in points
spread_sd = 13.5

_settings = ('base_url', 'api_key', 'timeout', 'connectivity_host', 'connectivity_port',
             'logos_url', 'season_types', 'line_providers', 'spread_sd')


def init(**settings):
  """
  Overrides module settings for the current process.
  ----------
  Parameters
  ----------
    settings: keyword arguments
      Any of base_url, api_key, timeout, connectivity_host, connectivity_port,
      logos_url, season_types, line_providers, spread_sd.
  """
  module_globals = globals()
  for name, value in settings.items():
    if name not in _settings:
      raise AttributeError('Unknown setting: ' + name)
    module_globals[name] = value
