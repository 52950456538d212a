"""Quickstart: wire plain classes by parameter name.

Register values and classes under string keys, then resolve the top-level
service and let wirebox build the chain.
"""

from __future__ import annotations

from wirebox import Container


class Database:
    def __init__(self, dsn) -> None:
        self.dsn = dsn


class UserRepository:
    def __init__(self, database) -> None:
        self.database = database


class UserService:
    def __init__(self, repository) -> None:
        self.repository = repository


def main() -> None:
    container = Container()
    container.register("dsn", "sqlite:///app.db")
    container.register("database", Database).as_instance().cached()
    container.register("repository", UserRepository).as_instance()
    container.register("service", UserService).as_instance()

    service = container.resolve("service")

    print(f"dsn={service.repository.database.dsn}")  # => dsn=sqlite:///app.db

    chain = (
        f"{type(service).__name__}"
        f">{type(service.repository).__name__}"
        f">{type(service.repository.database).__name__}"
    )
    print(f"chain={chain}")  # => chain=UserService>UserRepository>Database


if __name__ == "__main__":
    main()
