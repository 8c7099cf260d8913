"""prefix 기반 인자 토크나이저.

``" -mem/ -n/John Doe -p/98765432"`` 처럼 공백 뒤에 오는 prefix 를 기준으로 인자를 자른다.
prefix 앞의 텍스트는 preamble 로 따로 보관한다.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable

from .syntax import Prefix


class ArgumentMultimap:
    """prefix -> 값 목록. 같은 prefix 가 여러 번 나오면 입력 순서대로 모두 보관한다."""

    def __init__(self, preamble: str) -> None:
        self._preamble = preamble
        self._values: dict[Prefix, list[str]] = defaultdict(list)

    def put(self, prefix: Prefix, value: str) -> None:
        self._values[prefix].append(value)

    def get_value(self, prefix: Prefix) -> str | None:
        """마지막으로 입력된 값을 반환한다."""
        values = self._values.get(prefix)
        return values[-1] if values else None

    def get_all_values(self, prefix: Prefix) -> list[str]:
        return list(self._values.get(prefix, []))

    def contains(self, prefix: Prefix) -> bool:
        return prefix in self._values

    def get_preamble(self) -> str:
        return self._preamble


def tokenize(args: str, prefixes: Iterable[Prefix]) -> ArgumentMultimap:
    # 위치 -> prefix. 같은 위치에서 여러 prefix 가 겹치지 않도록 prefix 문자열이 서로 달라야 한다.
    positions: list[tuple[int, Prefix]] = []
    for prefix in set(prefixes):
        positions.extend((pos, prefix) for pos in _find_positions(args, prefix))
    positions.sort(key=lambda item: item[0])

    first = positions[0][0] if positions else len(args)
    multimap = ArgumentMultimap(args[:first].strip())

    for i, (pos, prefix) in enumerate(positions):
        start = pos + len(prefix.value)
        end = positions[i + 1][0] if i + 1 < len(positions) else len(args)
        multimap.put(prefix, args[start:end].strip())

    return multimap


def _find_positions(args: str, prefix: Prefix) -> list[int]:
    found: list[int] = []
    start = 0
    while True:
        pos = args.find(prefix.value, start)
        if pos == -1:
            return found
        # 문장 맨 앞이거나 공백 바로 뒤에 있는 prefix 만 인정한다.
        if pos == 0 or args[pos - 1].isspace():
            found.append(pos)
        start = pos + 1
