import logging
from dataclasses import dataclass, field

import pandas as pd

import cfb_scrape.cfg as cfg
import cfb_scrape.data_fxns as data_fxns
from cfb_scrape.request_fxns import (build_url, check_choice, check_id, check_required, check_week,
                                     check_year, get_json, team_name)

logger = logging.getLogger(__name__)


@dataclass
class ScrapeResult:
  """
  Outcome of one scrape.

  status is 'ok' for a non-empty table, 'empty' when the API returned nothing
  (or a filter matched nothing) and 'error' when the payload could not be
  reshaped, in which case error holds the exception and data is empty.
  """
  status: str
  data: pd.DataFrame = field(default_factory = pd.DataFrame)
  error: Exception = None
  url: str = None

  @property
  def ok(self):
    return self.status == 'ok'


def scrape(endpoint, params, normalizer, **kwargs):
  """
  Requests endpoint with params and reshapes the JSON payload with normalizer.
  ----------
  Parameters
  ----------
    endpoint: str
    params: dict
      Query parameters; None values are omitted from the URL
    normalizer: callable
      Called as normalizer(payload, **kwargs) and returns a DataFrame
  -----
  Notes
  -----
  Connection and status failures propagate. Failures while decoding or
  reshaping the payload are logged and returned as an 'error' result.
  """
  url = build_url(endpoint, params)
  try:
    payload = get_json(url)
    if payload is None or (hasattr(payload, '__len__') and len(payload) == 0):
      return ScrapeResult('empty', normalizer(payload, **kwargs), url = url)
    df = normalizer(payload, **kwargs)
  except (ValueError, KeyError, TypeError, AttributeError) as e:
    logger.warning('Invalid arguments or no data available from %s: %s', url, e)
    return ScrapeResult('error', pd.DataFrame(), error = e, url = url)

  logger.info('Scraped %d rows from %s', len(df), endpoint)
  return ScrapeResult('ok' if len(df) > 0 else 'empty', df, url = url)


def _finish(result, as_result):
  return result if as_result else result.data


def cfb_betting_lines(game_id = None, year = None, week = None, season_type = 'regular', team = None,
                      home_team = None, away_team = None, conference = None, line_provider = None,
                      as_result = False):
  """
  Returns betting lines for games, one row per game and line provider.
  ----------
  Parameters
  ----------
    game_id: int
      Game ID filter for querying a single game
    year: int
      Year, 4 digit format (YYYY)
    week: int
      Week, values from 1-15 (1-14 for seasons pre-playoff, i.e. 2013 or earlier)
    season_type: str
      'regular' or 'postseason'
    team, home_team, away_team: str
      D-I team names
    conference: str
      Conference abbreviation, e.g. ACC, B12, B1G, SEC, PAC, CUSA, MAC, MWC, Ind, SBC, AAC
    line_provider: str
      One of Caesars, consensus, numberfire, teamrankings
    as_result: bool
      If True, returns the ScrapeResult instead of the DataFrame
  -----
  Notes
  -----
  Columns: game_id, season, season_type, week, home_team, home_conference,
  home_score, away_team, away_conference, away_score, provider, spread,
  formatted_spread, over_under, followed by any other line fields.
  If no lines are found, a single row with spread 0 and formatted_spread
  'home 0' is returned.
  """
  if game_id is not None:
    game_id = check_id(game_id, 'game_id')
  if year is not None:
    check_year(year)
  if week is not None:
    check_week(week)
  check_choice(season_type, cfg.season_types, 'season_type')
  if line_provider is not None:
    check_choice(line_provider, cfg.line_providers, 'line provider')

  parameters = {'gameId': game_id,
                'year': year,
                'week': week,
                'seasonType': season_type,
                'team': team_name(team),
                'home': team_name(home_team),
                'away': team_name(away_team),
                'conference': conference}

  result = scrape('/lines', parameters, data_fxns.normalize_betting_lines,
                  game_id = game_id, line_provider = line_provider)
  fallback_cols = list(data_fxns.lines_fallback().columns)
  if result.ok and list(result.data.columns) == fallback_cols:
    result.status = 'empty'
  return _finish(result, as_result)


def cfb_team_info(conference = None, only_fbs = True, year = None, as_result = False):
  """
  Lists all teams in a conference, or all FBS teams if conference is None.
  ----------
  Parameters
  ----------
    conference: str
      Conference abbreviation
    only_fbs: bool
      With no conference, return only FBS teams (for year, or the current
      season if year is None). If False, every team the API knows is returned.
    year: int
      Year, 4 digit format (YYYY). Only used for the FBS listing.
  -----
  Notes
  -----
  Columns: team_id, school, mascot, abbreviation, alt_name1, alt_name2,
  alt_name3, conference, division, color, alt_color, logos, then any others.
  """
  if year is not None:
    check_year(year)

  if conference is not None:
    result = scrape('/teams', {'conference': conference}, data_fxns.normalize_team_info)
  elif only_fbs:
    result = scrape('/teams/fbs', {'year': year}, data_fxns.normalize_team_info)
  else:
    result = scrape('/teams', {}, data_fxns.normalize_team_info)
  return _finish(result, as_result)


def _matchup_parameters(team1, team2, min_year, max_year):
  check_required(team1 = team1, team2 = team2)
  if min_year is not None:
    check_year(min_year, 'min_year')
  if max_year is not None:
    check_year(max_year, 'max_year')

  return {'team1': team_name(team1),
          'team2': team_name(team2),
          'minYear': min_year,
          'maxYear': max_year}


def cfb_team_matchup_records(team1, team2, min_year = None, max_year = None, as_result = False):
  """
  Returns the all-time record between two teams as a single row with columns
  start_year, end_year, team1, team1_wins, team2, team2_wins, ties.
  ----------
  Parameters
  ----------
    team1, team2: str
      D-I teams, both required
    min_year, max_year: int
      Year range, 4 digit format (YYYY)
  """
  parameters = _matchup_parameters(team1, team2, min_year, max_year)
  logger.info('Scraping team matchup records...')
  result = scrape('/teams/matchup', parameters, data_fxns.normalize_matchup_record)
  return _finish(result, as_result)


def cfb_team_matchup(team1, team2, min_year = None, max_year = None, as_result = False):
  """
  Returns every game played between two teams, one row per game.
  Takes the same arguments as cfb_team_matchup_records.
  """
  parameters = _matchup_parameters(team1, team2, min_year, max_year)
  logger.info('Scraping team matchup games...')
  result = scrape('/teams/matchup', parameters, data_fxns.normalize_matchup_games)
  return _finish(result, as_result)


def cfb_conferences(*, as_result = False):
  """
  Returns the conferences the API knows about with columns conference_id,
  name, long_name, abbreviation.
  """
  result = scrape('/conferences', {}, data_fxns.normalize_conferences)
  return _finish(result, as_result)


def cfb_team_roster(year, team = None, as_result = False):
  """
  Returns the roster of a team (or every team) for a season.
  ----------
  Parameters
  ----------
    year: int
      Year, 4 digit format (YYYY)
    team: str
      D-I team
  -----
  Notes
  -----
  Columns: athlete_id, first_name, last_name, weight, height, jersey, year,
  position, home_city, home_state, home_country, team.
  """
  check_year(year)
  parameters = {'team': team_name(team), 'year': year}
  result = scrape('/roster', parameters, data_fxns.normalize_roster)
  return _finish(result, as_result)
