"""
Service layer.

Services hold the business rules of the application and talk to the
database only through the gateway in ``core.db``, so API handlers stay
free of SQL.
"""
