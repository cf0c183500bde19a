"""Personal expense tracker: budget plus dated expense ledger behind a JSON API."""
