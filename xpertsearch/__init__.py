"""XpertSearch project package: configuration and logging setup."""
