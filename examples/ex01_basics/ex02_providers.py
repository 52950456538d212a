"""Providers: factories, aliases, overrides and caching."""

from __future__ import annotations

import itertools

from wirebox import Container


def main() -> None:
    container = Container()
    ids = itertools.count(1)

    container.register("greeting", "hi")
    container.register("shout", lambda greeting: greeting.upper()).as_factory().cached()
    container.register("request_id", lambda: next(ids)).as_factory()
    container.register("salutation", "greeting").from_container()
    container.register("echo", lambda text: text).as_factory("salutation")

    print(f"shout={container.resolve('shout')}")  # => shout=HI
    container.register("greeting", "hello")
    print(f"cached_shout={container.resolve('shout')}")  # => cached_shout=HI
    print(f"alias={container.resolve('salutation')}")  # => alias=hello
    print(f"echo={container.resolve('echo')}")  # => echo=hello

    first, second = container.resolve("request_id"), container.resolve("request_id")
    print(f"fresh_each_time={first != second}")  # => fresh_each_time=True


if __name__ == "__main__":
    main()
