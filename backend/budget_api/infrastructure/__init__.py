"""Infrastructure — database access, rate provider client, logging setup."""
