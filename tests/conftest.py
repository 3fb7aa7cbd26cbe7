import pytest
import requests

import cfb_scrape.request_fxns as request_fxns


class FakeResponse:

  def __init__(self, payload, status_code = 200, url = None):
    self.payload = payload
    self.status_code = status_code
    self.url = url

  def json(self):
    if isinstance(self.payload, Exception):
      raise self.payload
    return self.payload


class FakeAPI:
  """
  Stands in for requests.get. Records every requested URL and answers with
  the configured payload and status.
  """

  def __init__(self):
    self.payload = []
    self.status_code = 200
    self.urls = []
    self.headers = []

  def get(self, url, headers = None, timeout = None):
    self.urls.append(url)
    self.headers.append(headers)
    return FakeResponse(self.payload, self.status_code, url)


@pytest.fixture
def api(monkeypatch):
  fake = FakeAPI()
  monkeypatch.setattr(request_fxns, 'check_internet', lambda: None)
  monkeypatch.setattr(requests, 'get', fake.get)
  return fake


@pytest.fixture
def lines_payload():
  return [
    {'id': 401012356, 'season': 2018, 'seasonType': 'regular', 'week': 13,
     'homeTeam': 'Texas A&M', 'homeConference': 'SEC', 'homeScore': 74,
     'awayTeam': 'LSU', 'awayConference': 'SEC', 'awayScore': 72,
     'lines': [
       {'provider': 'consensus', 'spread': '3', 'formattedSpread': 'LSU -3', 'overUnder': '48.5'},
       {'provider': 'numberfire', 'spread': '2.5', 'formattedSpread': 'LSU -2.5', 'overUnder': '49'},
       {'provider': 'teamrankings', 'spread': '3', 'formattedSpread': 'LSU -3', 'overUnder': '48'},
     ]},
  ]
