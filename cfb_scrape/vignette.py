"""
Charts built from the tables returned by cfb_scrape.data_scrape.

A typical session:

  lines = data_scrape.cfb_betting_lines(year = 2019, week = 12, line_provider = 'consensus')
  plot_spread_vs_margin(lines_with_win_prob(lines))

  summary = team_epa_summary(plays)
  plot_epa_tiers(summary, load_team_logos())
"""
import logging

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
from scipy.stats import norm

import cfb_scrape.cfg as cfg

logger = logging.getLogger(__name__)


def load_team_logos(url = None):
  """
  Returns the static team dataset (school, color, alt_color, logo, ...)
  published alongside the API data.
  """
  url = url or cfg.logos_url
  logos = pd.read_csv(url)
  return logos.rename(columns = {'logos': 'logo'})


def team_epa_summary(plays):
  """
  Returns mean EPA per offense for pass and rush plays.
  ----------
  Parameters
  ----------
    plays: DataFrame
      Play-by-play data with columns offense_play, EPA, pass, rush. pass and
      rush are 0/1 flags.
  -----
  Notes
  -----
  Columns: offense_play, pass_epa, rush_epa, n_plays. Plays that are neither
  passes nor rushes are ignored, and teams missing one of the two get NaN.
  """
  plays = plays[(plays['pass'] == 1) | (plays['rush'] == 1)]
  pass_epa = plays[plays['pass'] == 1].groupby('offense_play')['EPA'].mean().rename('pass_epa')
  rush_epa = plays[plays['rush'] == 1].groupby('offense_play')['EPA'].mean().rename('rush_epa')
  n_plays = plays.groupby('offense_play').size().rename('n_plays')

  return pd.concat([pass_epa, rush_epa, n_plays], axis = 1).rename_axis('offense_play').reset_index()


def implied_win_prob(spread, sd = None):
  """
  Home win probability implied by a home spread (negative when the home team
  is favored), assuming the final margin is normal around the spread.
  """
  if sd is None:
    sd = cfg.spread_sd
  with np.errstate(divide = 'ignore', invalid = 'ignore'):
    return norm.cdf(-np.asarray(spread, dtype = 'float64') / sd)


def lines_with_win_prob(lines):
  """
  Returns a copy of a betting lines table with a home_win_prob column.
  """
  lines = lines.copy()
  spread = pd.to_numeric(lines['spread'], errors = 'coerce')
  lines['home_win_prob'] = implied_win_prob(spread)
  return lines


def _team_colors(summary, logos):
  if logos is None or 'school' not in logos.columns:
    return ['grey'] * len(summary)
  colors = summary[['offense_play']].merge(logos[['school', 'color']], how = 'left',
                                            left_on = 'offense_play', right_on = 'school')
  return colors['color'].fillna('grey').tolist()


def plot_epa_tiers(summary, logos = None, ax = None, title = 'Offensive EPA per Play'):
  """
  Scatter of rush EPA (x) against pass EPA (y) per team, drawn in team colors
  with dashed lines at the mean of each axis. Returns the Axes.
  """
  if ax is None:
    _, ax = plt.subplots(figsize = (10, 8))

  summary = summary.dropna(subset = ['pass_epa', 'rush_epa'])
  if summary.empty:
    logger.info('No EPA data available for plotting')
    return ax

  ax.scatter(summary.rush_epa, summary.pass_epa, c = _team_colors(summary, logos), s = 60,
             edgecolors = 'black')
  for _, row in summary.iterrows():
    ax.annotate(row.offense_play, (row.rush_epa, row.pass_epa), fontsize = 7,
                xytext = (3, 3), textcoords = 'offset points')

  ax.axvline(summary.rush_epa.mean(), color = 'red', linestyle = '--', alpha = 0.5)
  ax.axhline(summary.pass_epa.mean(), color = 'red', linestyle = '--', alpha = 0.5)
  ax.set_xlabel('Rush EPA/Play')
  ax.set_ylabel('Pass EPA/Play')
  ax.set_title(title, fontweight = 'bold')
  return ax


def plot_spread_vs_margin(lines, ax = None, title = 'Closing Spread vs Home Margin'):
  """
  Scatter of the home spread against the actual home margin for games with a
  final score. Points on the dashed line finished exactly on the number.
  Returns the Axes.
  """
  if ax is None:
    _, ax = plt.subplots(figsize = (10, 8))

  needed = ['spread', 'home_score', 'away_score']
  if any(col not in lines.columns for col in needed):
    logger.info('No scored games available for plotting')
    return ax

  games = lines[needed].apply(pd.to_numeric, errors = 'coerce').dropna()
  margin = games.home_score - games.away_score

  ax.scatter(-games.spread, margin, alpha = 0.6, color = 'skyblue', edgecolors = 'black')
  if not games.empty:
    low = min((-games.spread).min(), margin.min())
    high = max((-games.spread).max(), margin.max())
    ax.plot([low, high], [low, high], color = 'grey', linestyle = '--')
  ax.set_xlabel('Expected Home Margin (-spread)')
  ax.set_ylabel('Actual Home Margin')
  ax.set_title(title, fontweight = 'bold')
  ax.grid(alpha = 0.3)
  return ax
