"""회원 검색/필터 조건.

각 조건은 matches(member) 하나만 제공하는 값 객체이며, AllOf / AnyOf 로 조합한다.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from .member import Member


class MemberPredicate(Protocol):
    def matches(self, member: Member) -> bool:  # pragma: no cover - Protocol
        ...


def contains_word_ignore_case(sentence: str, word: str) -> bool:
    """sentence 를 공백으로 나눈 단어 중 word 와 대소문자 무시 완전 일치가 있는지 검사한다."""
    word = word.strip()
    if not word:
        raise ValueError("Word parameter cannot be empty")
    if len(word.split()) != 1:
        raise ValueError("Word parameter should be a single word")

    target = word.casefold()
    return any(token.casefold() == target for token in sentence.split())


@dataclass(frozen=True, slots=True)
class ShowAllMembers:
    def matches(self, member: Member) -> bool:
        return True


SHOW_ALL_MEMBERS = ShowAllMembers()


@dataclass(frozen=True, slots=True)
class IdContainsKeywords:
    keywords: tuple[str, ...]

    def matches(self, member: Member) -> bool:
        return any(contains_word_ignore_case(str(member.id), k) for k in self.keywords)


@dataclass(frozen=True, slots=True)
class PhoneContainsKeywords:
    keywords: tuple[str, ...]

    def matches(self, member: Member) -> bool:
        return any(contains_word_ignore_case(member.phone, k) for k in self.keywords)


@dataclass(frozen=True, slots=True)
class NameContainsKeywords:
    keywords: tuple[str, ...]

    def matches(self, member: Member) -> bool:
        return any(contains_word_ignore_case(member.name, k) for k in self.keywords)


@dataclass(frozen=True, slots=True)
class AllOf:
    predicates: tuple[MemberPredicate, ...]

    def matches(self, member: Member) -> bool:
        return all(p.matches(member) for p in self.predicates)


@dataclass(frozen=True, slots=True)
class AnyOf:
    predicates: tuple[MemberPredicate, ...]

    def matches(self, member: Member) -> bool:
        return any(p.matches(member) for p in self.predicates)
