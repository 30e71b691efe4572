"""Submission configuration and arguments for test applications."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, MutableMapping
from dataclasses import dataclass, field


class SparkAppConf(MutableMapping[str, str]):
    """Mutable ``spark.*`` configuration passed to spark-submit as ``--conf``.

    ``set`` returns the conf itself so calls can be chained::

        conf.set("spark.app.name", "pi").set("spark.executor.cores", "1")
    """

    def __init__(self, entries: dict[str, str] | None = None):
        self._entries: dict[str, str] = dict(entries or {})

    def set(self, key: str, value: str) -> SparkAppConf:
        self._entries[key] = value
        return self

    def set_jars(self, jars: Iterable[str]) -> SparkAppConf:
        return self.set("spark.jars", ",".join(jars))

    def to_submit_args(self) -> list[str]:
        """Render entries as spark-submit ``--conf key=value`` pairs."""
        args: list[str] = []
        for key, value in self._entries.items():
            args.extend(["--conf", f"{key}={value}"])
        return args

    def __getitem__(self, key: str) -> str:
        return self._entries[key]

    def __setitem__(self, key: str, value: str) -> None:
        self._entries[key] = value

    def __delitem__(self, key: str) -> None:
        del self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"SparkAppConf({self._entries!r})"


@dataclass(frozen=True)
class SparkAppArguments:
    """What to run: the application resource, its main class and arguments."""

    main_app_resource: str
    main_class: str
    app_args: tuple[str, ...] = field(default_factory=tuple)
