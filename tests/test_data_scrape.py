import logging

import pandas as pd
import pytest

import cfb_scrape.cfg as cfg
from cfb_scrape import data_scrape
from cfb_scrape.request_fxns import MissingFieldsError, RequestFailedError, ValidationError


def conference_payload(n):
  return [{'id': i, 'name': 'Conference ' + str(i), 'short_name': 'The Conference ' + str(i),
           'abbreviation': 'C' + str(i), 'classification': 'fbs'} for i in range(1, n + 1)]


class TestConferences:

  def test_shape_and_columns(self, api):
    api.payload = conference_payload(34)
    x = data_scrape.cfb_conferences()

    assert isinstance(x, pd.DataFrame)
    assert x.shape == (34, 4)
    assert list(x.columns) == ['conference_id', 'name', 'long_name', 'abbreviation']
    assert api.urls == [cfg.base_url + '/conferences']

  def test_positional_argument_rejected(self, api):
    with pytest.raises(TypeError):
      data_scrape.cfb_conferences('SEC')
    assert api.urls == []


class TestTeamRoster:

  cols = ['athlete_id', 'first_name', 'last_name', 'weight', 'height', 'jersey', 'year', 'position',
          'home_city', 'home_state', 'home_country', 'team']

  def test_columns_regardless_of_team(self, api):
    api.payload = [{'id': 1, 'first_name': 'A', 'last_name': 'B', 'team': 'Florida State', 'weight': 200,
                    'height': 72, 'jersey': 7, 'year': 2, 'position': 'WR', 'home_city': 'Miami',
                    'home_state': 'FL', 'home_country': 'USA', 'home_latitude': 25.7}]
    x = data_scrape.cfb_team_roster(2019, team = 'Florida State')

    api.payload = [{'id': 2, 'first_name': 'C', 'last_name': 'D', 'team': 'Texas A&M'}]
    y = data_scrape.cfb_team_roster(2018, team = 'Texas A&M')

    assert list(x.columns) == self.cols
    assert list(y.columns) == self.cols
    assert api.urls[0].endswith('/roster?team=Florida+State&year=2019')
    assert api.urls[1].endswith('/roster?team=Texas+A%26M&year=2018')

  def test_year_required(self, api):
    with pytest.raises(ValidationError):
      data_scrape.cfb_team_roster(19, team = 'Texas')
    assert api.urls == []


class TestBettingLines:

  def test_url_omits_absent_parameters(self, api, lines_payload):
    api.payload = lines_payload
    df = data_scrape.cfb_betting_lines(year = 2018, week = 13, team = 'Texas A&M', conference = 'SEC')

    assert api.urls == [cfg.base_url + '/lines?year=2018&week=13&seasonType=regular&team=Texas+A%26M'
                        '&conference=SEC']
    assert len(df) == 3

  def test_san_jose_state(self, api):
    data_scrape.cfb_betting_lines(year = 2019, home_team = 'San Jose State')
    assert api.urls[0].endswith('&home=San+Jos%C3%A9+State')

  def test_empty_response_is_fallback(self, api):
    api.payload = []
    result = data_scrape.cfb_betting_lines(game_id = 401012356, as_result = True)

    assert result.status == 'empty'
    assert result.data.spread.tolist() == [0]
    assert result.data.formatted_spread.tolist() == ['home 0']
    assert result.data.game_id.tolist() == [401012356]

  def test_provider_without_match_is_fallback(self, api, lines_payload):
    api.payload = lines_payload
    result = data_scrape.cfb_betting_lines(year = 2018, line_provider = 'Caesars', as_result = True)
    assert result.status == 'empty'
    assert len(result.data) == 1

  def test_provider_match(self, api, lines_payload):
    api.payload = lines_payload
    result = data_scrape.cfb_betting_lines(year = 2018, line_provider = 'consensus', as_result = True)
    assert result.ok
    assert result.data.provider.tolist() == ['consensus']

  def test_whole_number_float_game_id(self, api):
    result = data_scrape.cfb_betting_lines(game_id = 401012356.0, as_result = True)
    assert api.urls == [cfg.base_url + '/lines?gameId=401012356&seasonType=regular']
    assert result.data.game_id.tolist() == [401012356]

  def test_games_without_lines_key_are_ok(self, api):
    api.payload = [{'id': 7, 'season': 2018, 'homeTeam': 'Army', 'awayTeam': 'Navy'}]
    result = data_scrape.cfb_betting_lines(year = 2018, as_result = True)
    assert result.status == 'ok'
    assert result.data.game_id.tolist() == [7]
    assert result.data.home_team.tolist() == ['Army']

  @pytest.mark.parametrize('kwargs', [
    {'game_id': '401012356'},
    {'game_id': 401012356.5},
    {'week': 0},
    {'year': 18},
    {'week': 123},
    {'season_type': 'both'},
    {'line_provider': 'Bovada'},
  ])
  def test_validation_before_request(self, api, kwargs):
    with pytest.raises(ValidationError):
      data_scrape.cfb_betting_lines(**kwargs)
    assert api.urls == []

  def test_status_failure_propagates(self, api):
    api.status_code = 500
    with pytest.raises(RequestFailedError):
      data_scrape.cfb_betting_lines(year = 2018)


class TestTeamInfo:

  def test_conference(self, api):
    api.payload = [{'id': 333, 'school': 'Alabama', 'conference': 'SEC'}]
    df = data_scrape.cfb_team_info(conference = 'SEC')
    assert api.urls == [cfg.base_url + '/teams?conference=SEC']
    assert df.team_id.tolist() == [333]

  def test_fbs(self, api):
    data_scrape.cfb_team_info(year = 2019)
    data_scrape.cfb_team_info()
    assert api.urls == [cfg.base_url + '/teams/fbs?year=2019', cfg.base_url + '/teams/fbs']

  def test_all_teams(self, api):
    data_scrape.cfb_team_info(only_fbs = False)
    assert api.urls == [cfg.base_url + '/teams']


class TestMatchupRecords:

  payload = {'team1': 'Texas A&M', 'team2': 'TCU', 'startYear': 1975, 'endYear': 2011, 'team1Wins': 3,
             'team2Wins': 1, 'ties': 0, 'games': []}

  def test_record(self, api):
    api.payload = self.payload
    df = data_scrape.cfb_team_matchup_records('Texas A&M', 'TCU', min_year = 1975)

    assert api.urls == [cfg.base_url + '/teams/matchup?team1=Texas+A%26M&team2=TCU&minYear=1975']
    assert df.start_year[0] == 1975
    assert df.team1_wins[0] == 3

  def test_both_teams_required(self, api):
    with pytest.raises(ValidationError, match = 'team2'):
      data_scrape.cfb_team_matchup_records('Texas', None)
    assert api.urls == []

  def test_missing_fields_reported(self, api, caplog):
    api.payload = {'team1': 'Texas', 'team2': 'Oklahoma'}
    with caplog.at_level(logging.WARNING, logger = 'cfb_scrape.data_scrape'):
      result = data_scrape.cfb_team_matchup_records('Texas', 'Oklahoma', as_result = True)

    assert result.status == 'error'
    assert isinstance(result.error, MissingFieldsError)
    assert result.data.empty
    assert 'startYear' in caplog.text

  def test_default_return_is_empty_table_on_error(self, api):
    api.payload = ['not', 'an', 'object']
    df = data_scrape.cfb_team_matchup_records('Texas', 'Oklahoma')
    assert isinstance(df, pd.DataFrame)
    assert df.empty

  def test_games(self, api):
    api.payload = dict(self.payload, games=[{'season': 1975, 'week': 1, 'homeTeam': 'Texas A&M',
                                              'homeScore': 14, 'awayTeam': 'TCU', 'awayScore': 7,
                                              'winner': 'Texas A&M'}])
    df = data_scrape.cfb_team_matchup('Texas A&M', 'TCU')
    assert df.home_score.tolist() == [14]
    assert df.winner.tolist() == ['Texas A&M']


def test_undecodable_payload_is_error(api):
  api.payload = ValueError('Expecting value')
  result = data_scrape.cfb_conferences(as_result = True)
  assert result.status == 'error'
  assert result.url == cfg.base_url + '/conferences'
