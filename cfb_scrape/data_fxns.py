import re
import logging

import numpy as np
import pandas as pd

from cfb_scrape.request_fxns import MissingFieldsError

logger = logging.getLogger(__name__)

LINES_COLS = ['game_id', 'season', 'season_type', 'week', 'home_team', 'home_conference', 'home_score',
              'away_team', 'away_conference', 'away_score', 'provider', 'spread', 'formatted_spread',
              'over_under']

TEAM_INFO_COLS = ['team_id', 'school', 'mascot', 'abbreviation', 'alt_name1', 'alt_name2', 'alt_name3',
                  'conference', 'division', 'color', 'alt_color', 'logos']

MATCHUP_FIELDS = {'startYear': 'start_year',
                  'endYear': 'end_year',
                  'team1': 'team1',
                  'team1Wins': 'team1_wins',
                  'team2': 'team2',
                  'team2Wins': 'team2_wins',
                  'ties': 'ties'}

MATCHUP_GAME_COLS = ['season', 'week', 'season_type', 'date', 'neutral_site', 'venue', 'home_team',
                     'home_score', 'away_team', 'away_score', 'winner']

CONFERENCE_COLS = ['conference_id', 'name', 'long_name', 'abbreviation']

ROSTER_COLS = ['athlete_id', 'first_name', 'last_name', 'weight', 'height', 'jersey', 'year', 'position',
               'home_city', 'home_state', 'home_country', 'team']


def snake_case(name):
  """
  'homeTeam' -> 'home_team', 'Formatted Spread' -> 'formatted_spread', 'alt_name1' -> 'alt_name1'
  """
  name = re.sub(r'([a-z0-9])([A-Z])', r'\1_\2', str(name))
  name = re.sub(r'([A-Z]+)([A-Z][a-z])', r'\1_\2', name)
  name = re.sub(r'[^0-9a-zA-Z]+', '_', name)
  return name.strip('_').lower()


def clean_names(df):
  """
  Returns df with snake_case column names. Nested columns flattened by
  json_normalize ('offense.plays') become 'offense_plays'.
  """
  return df.rename(columns = {col: snake_case(col) for col in df.columns})


def ordered(df, cols, keep_extra = True):
  """
  Reorders df so that cols come first, adding any that are missing as NaN.
  ----------
  Parameters
  ----------
    df: DataFrame
    cols: list of str
    keep_extra: bool
      If True, columns not in cols are kept after them in their original order.
  """
  extra = [col for col in df.columns if col not in cols] if keep_extra else []
  return df.reindex(columns = list(cols) + extra)


def unnest(records, column):
  """
  Flattens a one-to-many relationship held in a list-valued column.
  ----------
  Parameters
  ----------
    records: list of dict or DataFrame
    column: str
      The list-valued column. Each element of each list becomes its own row with
      the parent's other fields duplicated. Dict elements are spread into columns.
  -----
  Notes
  -----
   - Parents whose list is empty or missing produce no rows.
   - If no record has the column at all, the records are returned as a DataFrame unchanged.
  """
  df = records if isinstance(records, pd.DataFrame) else pd.DataFrame(records)
  if column not in df.columns:
    return df

  df = df.explode(column)
  df = df[df[column].notna()]
  if df.empty:
    return df.drop(columns = column).reset_index(drop = True)

  children = df[column].tolist()
  if all(isinstance(child, dict) for child in children):
    children = pd.json_normalize(children)
  else:
    children = pd.DataFrame({column: children})
  parents = df.drop(columns = column).reset_index(drop = True)
  children = children.drop(columns = [col for col in children.columns if col in parents.columns])

  return pd.concat([parents, children], axis = 1)


def lines_fallback(game_id = None):
  """
  The single row returned when a game has no betting lines.
  """
  return pd.DataFrame({'game_id': [game_id if game_id is not None else np.nan],
                       'spread': [0],
                       'formatted_spread': ['home 0']})


def normalize_betting_lines(payload, game_id = None, line_provider = None):
  """
  Returns one row per game and line provider.
  ----------
  Parameters
  ----------
    payload: list of dict
      Games, each holding a 'lines' list of per-provider betting lines
    game_id: int
      Used to fill the fallback row
    line_provider: str
      If given, only lines from this provider are kept
  -----
  Notes
  -----
  An empty payload, or a provider filter that matches nothing, returns the
  fallback row (spread 0, formatted_spread 'home 0') rather than an empty table.
  """
  if not payload:
    logger.warning('No betting lines returned, using fallback row')
    return lines_fallback(game_id)

  df = clean_names(unnest(payload, 'lines'))

  if line_provider is not None:
    if 'provider' not in df.columns:
      logger.warning('No line providers in payload, using fallback row')
      return lines_fallback(game_id)
    df = df[df.provider == line_provider]

  if df.empty:
    logger.warning('No betting lines matched, using fallback row')
    return lines_fallback(game_id)

  df = df.rename(columns = {'id': 'game_id'})
  return ordered(df, LINES_COLS).reset_index(drop = True)


def normalize_team_info(payload):
  df = clean_names(pd.DataFrame(payload)).rename(columns = {'id': 'team_id'})
  return ordered(df, TEAM_INFO_COLS)


def normalize_matchup_record(payload):
  """
  Returns the all-time record between two teams as a single row.
  Raises MissingFieldsError if any of the record fields are absent.
  """
  if not payload:
    return pd.DataFrame(columns = list(MATCHUP_FIELDS.values()))
  if not isinstance(payload, dict):
    raise TypeError('Expected a matchup object, got ' + type(payload).__name__)

  missing = [field for field in MATCHUP_FIELDS if field not in payload]
  if missing:
    raise MissingFieldsError(missing)

  row = {col: payload[field] for field, col in MATCHUP_FIELDS.items()}
  return pd.DataFrame([row], columns = list(MATCHUP_FIELDS.values()))


def normalize_matchup_games(payload):
  if not payload:
    return pd.DataFrame(columns = MATCHUP_GAME_COLS)
  if not isinstance(payload, dict):
    raise TypeError('Expected a matchup object, got ' + type(payload).__name__)

  games = payload.get('games') or []
  df = clean_names(pd.DataFrame(games))
  return ordered(df, MATCHUP_GAME_COLS)


def normalize_conferences(payload):
  df = clean_names(pd.DataFrame(payload)).rename(columns = {'id': 'conference_id',
                                                            'short_name': 'long_name'})
  return ordered(df, CONFERENCE_COLS, keep_extra = False)


def normalize_roster(payload):
  df = clean_names(pd.DataFrame(payload)).rename(columns = {'id': 'athlete_id'})
  return ordered(df, ROSTER_COLS, keep_extra = False)
