"""ORM Models — table definitions only; queries go through the QueryExecutor."""
