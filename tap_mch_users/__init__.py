"""Singer tap exporting My Crypto Heroes rosters with wallet balances."""
