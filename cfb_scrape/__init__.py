"""Client for the collegefootballdata.com API returning pandas DataFrames."""
